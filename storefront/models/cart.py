"""Cart and cart line models (in-memory)."""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import List, Optional

from storefront.utils.formatters import money_json


@dataclass
class CartItem:
    """A single cart line. Unique by id within a cart."""

    id: str
    name: str
    price: Decimal
    quantity: int = 1

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def copy(self) -> 'CartItem':
        return replace(self)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'price': money_json(self.price),
            'quantity': self.quantity,
        }


@dataclass
class Cart:
    """
    A user's pending selection of items prior to checkout.

    One cart per user id. The cart is never deleted, it is reset to the
    empty state after checkout.
    """

    user_id: str
    items: List[CartItem] = field(default_factory=list)
    discount_code: Optional[str] = None
    applied_discount: Decimal = Decimal('0')

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal('0'))

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find_item(self, item_id: str) -> Optional[CartItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def clear(self) -> None:
        """Reset to the canonical empty state."""
        self.items = []
        self.discount_code = None
        self.applied_discount = Decimal('0')

    def to_dict(self):
        return {
            'items': [item.to_dict() for item in self.items],
            'discountCode': self.discount_code,
            'appliedDiscount': money_json(self.applied_discount),
        }

    def __repr__(self):
        return f"<Cart(user_id={self.user_id!r}, items={len(self.items)}, discount_code={self.discount_code!r})>"
