"""Discount code model."""
import enum
from dataclasses import dataclass, replace
from datetime import datetime

from storefront.utils.formatters import iso_datetime


class DiscountCodeSource(str, enum.Enum):
    """How a discount code was minted."""
    MILESTONE = 'milestone'
    ADMIN = 'admin'


@dataclass
class DiscountCode:
    """
    Single-use token unlocking the configured percentage discount.

    State machine: unused -> used, flipped only by a checkout that consumes
    a cart referencing the code.
    """

    code: str
    created_at: datetime
    is_used: bool = False
    source: DiscountCodeSource = DiscountCodeSource.MILESTONE

    def mark_used(self) -> bool:
        """Flip to used. Returns False if the code was already used."""
        if self.is_used:
            return False
        self.is_used = True
        return True

    def copy(self) -> 'DiscountCode':
        return replace(self)

    def to_dict(self):
        return {
            'code': self.code,
            'isUsed': self.is_used,
            'createdAt': iso_datetime(self.created_at),
        }

    def __repr__(self):
        return f"<DiscountCode(code={self.code!r}, is_used={self.is_used})>"
