"""Domain models for the storefront."""
from storefront.models.cart import Cart, CartItem
from storefront.models.order import Order, OrderLine
from storefront.models.discount_code import DiscountCode, DiscountCodeSource
from storefront.models.statistics import Statistics

__all__ = [
    'Cart',
    'CartItem',
    'Order',
    'OrderLine',
    'DiscountCode',
    'DiscountCodeSource',
    'Statistics',
]
