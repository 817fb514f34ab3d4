"""
Store engine - carts, discount codes and orders (in-memory).

Holds the business rules: quantity mutation, discount calculation and
single-use enforcement, milestone-triggered code generation, statistics.
All state lives on one StoreEngine instance owned by the Flask app.
"""

import logging
import threading
import time
from decimal import Decimal
from functools import wraps
from typing import Callable, Dict, List, Optional

from flask import Flask, current_app

from storefront.exceptions import (
    ItemNotFoundError,
    InvalidDiscountCodeError,
    DiscountAlreadyUsedError,
    EmptyCartError,
    MilestoneNotReachedError,
)
from storefront.models import Cart, CartItem, Order, OrderLine, DiscountCode, DiscountCodeSource, Statistics
from storefront.utils.formatters import utcnow

logger = logging.getLogger(__name__)


def synchronized(method):
    """Run an engine method inside the engine lock."""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)
    return wrapper


class StoreEngine:
    """
    Process-wide state container for carts, orders and discount codes.

    Every public operation is one critical section: it either fully applies
    or raises before touching any state.
    """

    def __init__(self, milestone: int = 5, discount_rate: Decimal = Decimal('0.10'),
                 code_prefix: str = 'DISCOUNT'):
        if int(milestone) < 1:
            raise ValueError(f'Discount milestone must be >= 1, got {milestone}')
        discount_rate = Decimal(str(discount_rate))
        if not Decimal('0') <= discount_rate <= Decimal('1'):
            raise ValueError(f'Discount rate must be between 0 and 1, got {discount_rate}')
        if not code_prefix:
            raise ValueError('Discount code prefix must not be empty')

        self.milestone = int(milestone)
        self.discount_rate = discount_rate
        self.code_prefix = code_prefix

        self._lock = threading.RLock()
        self._carts: Dict[str, Cart] = {}
        self._orders: List[Order] = []
        self._discount_codes: List[DiscountCode] = []
        self._codes_by_value: Dict[str, DiscountCode] = {}
        self._order_counter = 0
        self._last_code_stamp = 0
        self._listeners: List[Callable[..., None]] = []

    @classmethod
    def from_config(cls, config) -> 'StoreEngine':
        return cls(
            milestone=config.get('DISCOUNT_MILESTONE', 5),
            discount_rate=config.get('DISCOUNT_RATE', Decimal('0.10')),
            code_prefix=config.get('DISCOUNT_CODE_PREFIX', 'DISCOUNT'),
        )

    @property
    def order_count(self) -> int:
        return self._order_counter

    def subscribe(self, listener: Callable[..., None]) -> None:
        """
        Register a callback for store events.

        Called as listener(event, **data) inside the engine lock, after the
        state change is applied. Events: order_created(order),
        discount_code_redeemed(code), discount_code_generated(code, source).
        """
        self._listeners.append(listener)

    def _emit(self, event: str, **data) -> None:
        for listener in self._listeners:
            listener(event, **data)

    # ------------------------------------------------------------------
    # Carts
    # ------------------------------------------------------------------

    @synchronized
    def get_or_create_cart(self, user_id: str) -> Cart:
        """
        Get existing cart or create an empty one for the user.
        One cart per user, repeated calls return the same object.
        """
        cart = self._carts.get(user_id)
        if cart is None:
            cart = Cart(user_id=user_id)
            self._carts[user_id] = cart
            logger.debug(f"[STORE] Created cart for user={user_id}")
        return cart

    @synchronized
    def add_item(self, user_id: str, item: CartItem) -> Cart:
        """
        Add item to cart or increase quantity if the id already exists.

        The applied discount is not recalculated here; it is refreshed by
        apply_discount and update_item_quantity only.
        """
        cart = self.get_or_create_cart(user_id)
        quantity = item.quantity or 1

        line = cart.find_item(item.id)
        if line:
            line.quantity += quantity
        else:
            cart.items.append(CartItem(id=item.id, name=item.name, price=item.price, quantity=quantity))

        logger.info(f"[STORE] Added item={item.id} qty={quantity} to cart of user={user_id}")
        return cart

    @synchronized
    def update_item_quantity(self, user_id: str, item_id: str, delta: int) -> Cart:
        """
        Change a line quantity by a signed delta.

        A resulting quantity <= 0 removes the line. When the cart holds a
        discount code the applied discount follows the new subtotal.
        """
        cart = self._carts.get(user_id)
        line = cart.find_item(item_id) if cart else None
        if not line:
            logger.warning(f"[STORE] Quantity update for missing item={item_id} user={user_id}")
            raise ItemNotFoundError(item_id)

        new_quantity = line.quantity + delta
        if new_quantity <= 0:
            cart.items = [i for i in cart.items if i.id != item_id]
        else:
            line.quantity = new_quantity

        if cart.discount_code:
            cart.applied_discount = self._discount_for(cart)

        logger.info(f"[STORE] Updated item={item_id} delta={delta} user={user_id} -> qty={max(new_quantity, 0)}")
        return cart

    # ------------------------------------------------------------------
    # Discounts
    # ------------------------------------------------------------------

    @synchronized
    def apply_discount(self, user_id: str, code: str) -> Cart:
        """Attach a valid, unused discount code to the cart (replaces any previous one)."""
        record = self._codes_by_value.get(code)
        if record is None:
            logger.warning(f"[STORE] Rejected unknown discount code={code} user={user_id}")
            raise InvalidDiscountCodeError(code)
        if record.is_used:
            logger.warning(f"[STORE] Rejected used discount code={code} user={user_id}")
            raise DiscountAlreadyUsedError(code)

        cart = self.get_or_create_cart(user_id)
        cart.discount_code = code
        cart.applied_discount = self._discount_for(cart)

        logger.info(f"[STORE] Applied discount code={code} user={user_id} amount={cart.applied_discount}")
        return cart

    @synchronized
    def request_discount_code_generation(self) -> str:
        """
        Mint a discount code on admin demand.

        Only allowed when the order counter is a nonzero multiple of the
        milestone. Each call at the same counter value mints another code.
        """
        if not self._milestone_reached():
            raise MilestoneNotReachedError(self.milestone, self._order_counter)
        return self._mint_code(DiscountCodeSource.ADMIN).code

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------

    @synchronized
    def checkout(self, user_id: str) -> Order:
        """
        Create an order from the user's cart.

        Steps:
        1. Reject empty carts
        2. Compute subtotal, discount and total
        3. Allocate the next order id and snapshot the items
        4. Mark the discount code as used
        5. Reset the cart
        6. Mint a discount code if the new order count hits the milestone
        """
        cart = self._carts.get(user_id)
        if cart is None or cart.is_empty:
            raise EmptyCartError(user_id)

        subtotal = cart.subtotal
        discount = cart.applied_discount or Decimal('0')
        total = subtotal - discount

        self._order_counter += 1
        order = Order(
            id=self._order_counter,
            user_id=user_id,
            items=tuple(OrderLine.from_cart_item(item) for item in cart.items),
            subtotal=subtotal,
            discount_code=cart.discount_code,
            discount=discount,
            total=total,
            created_at=utcnow(),
        )
        self._orders.append(order)

        if cart.discount_code:
            record = self._codes_by_value.get(cart.discount_code)
            if record and record.mark_used():
                self._emit('discount_code_redeemed', code=record.code)

        cart.clear()
        logger.info(f"[STORE] Order #{order.id} created user={user_id} total={order.total} discount={order.discount}")
        self._emit('order_created', order=order)

        if self._milestone_reached():
            self._mint_code(DiscountCodeSource.MILESTONE)

        return order

    @synchronized
    def get_orders(self, user_id: Optional[str] = None) -> List[Order]:
        if user_id is None:
            return list(self._orders)
        return [o for o in self._orders if o.user_id == user_id]

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    @synchronized
    def get_statistics(self) -> Statistics:
        """Aggregate purchase statistics across all orders (pure read)."""
        return Statistics(
            items_purchased=sum(order.items_count for order in self._orders),
            total_purchase_amount=sum((order.total for order in self._orders), Decimal('0')),
            discount_codes=[code.copy() for code in self._discount_codes],
            total_discount_amount=sum((order.discount for order in self._orders), Decimal('0')),
            total_orders=self._order_counter,
        )

    @synchronized
    def snapshot(self) -> Dict[str, int]:
        """Counters for health reporting."""
        return {
            'carts': len(self._carts),
            'orders': len(self._orders),
            'orderCounter': self._order_counter,
            'discountCodes': len(self._discount_codes),
            'unusedDiscountCodes': sum(1 for c in self._discount_codes if not c.is_used),
        }

    @synchronized
    def reset(self) -> None:
        """Drop all carts, orders and discount codes."""
        self._carts.clear()
        self._orders.clear()
        self._discount_codes.clear()
        self._codes_by_value.clear()
        self._order_counter = 0
        logger.info("[STORE] State reset")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _discount_for(self, cart: Cart) -> Decimal:
        return cart.subtotal * self.discount_rate

    def _milestone_reached(self) -> bool:
        return self._order_counter > 0 and self._order_counter % self.milestone == 0

    def _next_code_value(self) -> str:
        # Millisecond stamp, bumped so two codes minted in the same ms differ.
        stamp = max(int(time.time() * 1000), self._last_code_stamp + 1)
        self._last_code_stamp = stamp
        return f"{self.code_prefix}{stamp}"

    def _mint_code(self, source: DiscountCodeSource) -> DiscountCode:
        record = DiscountCode(code=self._next_code_value(), created_at=utcnow(), source=source)
        self._discount_codes.append(record)
        self._codes_by_value[record.code] = record
        logger.info(f"[STORE] Discount code {record.code} generated ({source.value}) at order count {self._order_counter}")
        self._emit('discount_code_generated', code=record.code, source=source.value)
        return record


def init_store(app: Flask) -> StoreEngine:
    """Build the store engine from app config and register it on the app."""
    engine = StoreEngine.from_config(app.config)
    if not hasattr(app, 'extensions'):
        app.extensions = {}
    app.extensions['store'] = engine
    app.logger.info(
        f"[STORE] Engine ready: milestone={engine.milestone} "
        f"rate={engine.discount_rate} prefix={engine.code_prefix}"
    )
    return engine


def get_store() -> StoreEngine:
    """Get the store engine of the current app."""
    engine = current_app.extensions.get('store')
    if engine is None:
        raise RuntimeError("Store not initialized.")
    return engine
