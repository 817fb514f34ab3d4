"""Aggregated store statistics (read model)."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from storefront.models.discount_code import DiscountCode
from storefront.utils.formatters import money_json


@dataclass(frozen=True)
class Statistics:
    items_purchased: int = 0
    total_purchase_amount: Decimal = Decimal('0')
    discount_codes: List[DiscountCode] = field(default_factory=list)
    total_discount_amount: Decimal = Decimal('0')
    total_orders: int = 0

    def to_dict(self):
        return {
            'itemsPurchased': self.items_purchased,
            'totalPurchaseAmount': money_json(self.total_purchase_amount),
            'discountCodes': [code.to_dict() for code in self.discount_codes],
            'totalDiscountAmount': money_json(self.total_discount_amount),
            'totalOrders': self.total_orders,
        }
