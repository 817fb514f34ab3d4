"""Custom exceptions for the storefront application."""


class StoreError(Exception):
    """Base exception for all application errors."""
    kind = 'store_error'

    def __init__(self, message="An internal error occurred", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    def to_dict(self):
        rv = dict(self.payload or ())
        rv['message'] = self.message
        rv['error'] = self.kind
        rv['status'] = 'error'
        return rv


class ValidationError(StoreError):
    """Raised when a request is missing or has malformed fields."""
    kind = 'validation_error'

    def __init__(self, message, fields=None):
        payload = {'fields': list(fields)} if fields else None
        super().__init__(message, 400, payload)


class BusinessLogicError(StoreError):
    """Exception raised for business rule violations."""
    kind = 'business_rule'

    def __init__(self, message, status_code=400, payload=None):
        super().__init__(message, status_code, payload)


class NotFoundError(StoreError):
    """Exception raised when a resource is not found."""
    kind = 'not_found'

    def __init__(self, message="Resource not found", payload=None):
        super().__init__(message, 404, payload)


class ItemNotFoundError(NotFoundError):
    """Raised when a quantity update references an item absent from the cart."""
    kind = 'item_not_found'

    def __init__(self, item_id):
        self.item_id = item_id
        super().__init__('Item not found in cart', payload={'itemId': item_id})


class InvalidDiscountCodeError(BusinessLogicError):
    """Raised when a discount code was never generated."""
    kind = 'invalid_discount_code'

    def __init__(self, code):
        self.code = code
        super().__init__('Invalid discount code')


class DiscountAlreadyUsedError(BusinessLogicError):
    """Raised when a discount code was already consumed by a checkout."""
    kind = 'discount_already_used'

    def __init__(self, code):
        self.code = code
        super().__init__('Discount code has already been used', status_code=409)


class EmptyCartError(BusinessLogicError):
    """Raised on checkout of a cart without items."""
    kind = 'empty_cart'

    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__('Cart is empty')


class MilestoneNotReachedError(BusinessLogicError):
    """Raised when a discount code is requested off the order milestone."""
    kind = 'milestone_not_reached'

    def __init__(self, milestone, order_count):
        self.milestone = milestone
        self.order_count = order_count
        message = (
            f"Discount code can only be generated every {milestone} orders. "
            f"Current order count: {order_count}"
        )
        super().__init__(message, payload={'nthOrder': milestone, 'totalOrders': order_count})
