"""Order model: an immutable record of a completed checkout."""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple

from storefront.models.cart import CartItem
from storefront.utils.formatters import money_json, iso_datetime


@dataclass(frozen=True)
class OrderLine:
    """Frozen copy of a cart line taken at checkout."""

    id: str
    name: str
    price: Decimal
    quantity: int

    @classmethod
    def from_cart_item(cls, item: CartItem) -> 'OrderLine':
        return cls(id=item.id, name=item.name, price=item.price, quantity=item.quantity)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'price': money_json(self.price),
            'quantity': self.quantity,
        }


@dataclass(frozen=True)
class Order:
    id: int
    user_id: str
    items: Tuple[OrderLine, ...]
    subtotal: Decimal
    discount_code: Optional[str]
    discount: Decimal
    total: Decimal
    created_at: datetime

    @property
    def items_count(self) -> int:
        """Total units across all lines."""
        return sum(item.quantity for item in self.items)

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'items': [item.to_dict() for item in self.items],
            'subtotal': money_json(self.subtotal),
            'discountCode': self.discount_code,
            'discount': money_json(self.discount),
            'total': money_json(self.total),
            'createdAt': iso_datetime(self.created_at),
        }

    def __repr__(self):
        return f"<Order(id={self.id}, user_id={self.user_id!r}, total={self.total})>"
