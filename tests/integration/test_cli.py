"""
Integration tests for Flask CLI commands.
"""

from storefront.services.store_service import get_store


class TestStoreConfigCommand:

    def test_prints_configuration(self, runner):
        result = runner.invoke(args=['store-config'])

        assert result.exit_code == 0
        assert 'Milestone (NTH_ORDER): 5' in result.output
        assert 'DISCOUNT' in result.output


class TestSimulateOrdersCommand:

    def test_defaults_to_one_milestone(self, runner, app):
        result = runner.invoke(args=['simulate-orders'])

        assert result.exit_code == 0
        assert '5 orders placed' in result.output
        assert 'Discount code: DISCOUNT' in result.output
        with app.app_context():
            assert get_store().order_count == 5

    def test_custom_order_count(self, runner, app):
        result = runner.invoke(args=['simulate-orders', '--orders', '3', '--price', '20', '--quantity', '2'])

        assert result.exit_code == 0
        assert 'Discount code' not in result.output
        assert 'Items purchased:   6' in result.output
        assert 'Purchase amount:   120' in result.output

    def test_invalid_price(self, runner, app):
        result = runner.invoke(args=['simulate-orders', '--price', 'abc'])

        assert 'Invalid price' in result.output
        with app.app_context():
            assert get_store().order_count == 0
