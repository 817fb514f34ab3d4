"""
Unit tests for the in-memory domain models.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from storefront.models import Cart, CartItem, Order, OrderLine, DiscountCode
from storefront.utils.formatters import money_json, to_money, iso_datetime


class TestCartModel:

    def test_subtotal(self):
        cart = Cart(user_id='u', items=[
            CartItem(id='1', name='A', price=Decimal('10.50'), quantity=2),
            CartItem(id='2', name='B', price=Decimal('5'), quantity=1),
        ])
        assert cart.subtotal == Decimal('26.00')

    def test_clear(self):
        cart = Cart(user_id='u', items=[CartItem(id='1', name='A', price=Decimal('1'))],
                    discount_code='X', applied_discount=Decimal('0.1'))
        cart.clear()

        assert cart.is_empty
        assert cart.discount_code is None
        assert cart.applied_discount == 0


class TestOrderModel:

    def test_to_dict(self):
        order = Order(
            id=3,
            user_id='u',
            items=(OrderLine(id='1', name='Widget', price=Decimal('50'), quantity=2),),
            subtotal=Decimal('100'),
            discount_code='DISCOUNT1',
            discount=Decimal('10.00'),
            total=Decimal('90.00'),
            created_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        )

        assert order.to_dict() == {
            'id': 3,
            'userId': 'u',
            'items': [{'id': '1', 'name': 'Widget', 'price': 50, 'quantity': 2}],
            'subtotal': 100,
            'discountCode': 'DISCOUNT1',
            'discount': 10,
            'total': 90,
            'createdAt': '2024-01-02T03:04:05.000Z',
        }
        assert order.items_count == 2

    def test_order_is_immutable(self):
        order = Order(id=1, user_id='u', items=(), subtotal=Decimal('0'), discount_code=None,
                      discount=Decimal('0'), total=Decimal('0'), created_at=datetime.now(timezone.utc))
        with pytest.raises(AttributeError):
            order.total = Decimal('1')

    def test_order_line_is_frozen(self):
        line = OrderLine.from_cart_item(CartItem(id='1', name='A', price=Decimal('2'), quantity=3))

        with pytest.raises(AttributeError):
            line.quantity = 10
        assert line.to_dict() == {'id': '1', 'name': 'A', 'price': 2, 'quantity': 3}


class TestDiscountCodeModel:

    def test_mark_used(self):
        code = DiscountCode(code='DISCOUNT1', created_at=datetime.now(timezone.utc))
        assert code.is_used is False
        assert code.mark_used() is True
        assert code.to_dict()['isUsed'] is True

    def test_mark_used_only_flips_once(self):
        code = DiscountCode(code='DISCOUNT1', created_at=datetime.now(timezone.utc))
        code.mark_used()

        assert code.mark_used() is False
        assert code.is_used is True


class TestFormatters:

    @pytest.mark.parametrize('value, expected', [
        (Decimal('100'), 100),
        (Decimal('10.00'), 10),
        (Decimal('29.99'), 29.99),
        (None, 0),
    ])
    def test_money_json(self, value, expected):
        assert money_json(value) == expected

    def test_to_money_avoids_float_artifacts(self):
        assert to_money(0.1) == Decimal('0.1')

    @pytest.mark.parametrize('value', ['abc', True, None])
    def test_to_money_rejects_non_numbers(self, value):
        with pytest.raises(ValueError):
            to_money(value)

    def test_iso_datetime_none(self):
        assert iso_datetime(None) is None
