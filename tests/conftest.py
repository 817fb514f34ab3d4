import pytest
from decimal import Decimal

from storefront import create_app
from storefront.models import CartItem
from storefront.services.store_service import StoreEngine


@pytest.fixture(scope='function')
def app():
    """Create application instance for testing (fresh store per test)."""
    app = create_app('config.TestingConfig')
    return app


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def runner(app):
    """Create CLI test runner."""
    return app.test_cli_runner()


@pytest.fixture(scope='function')
def store():
    """Standalone store engine with the default milestone of 5."""
    return StoreEngine(milestone=5)


@pytest.fixture
def make_item():
    """Factory for cart items."""
    def _make(item_id='1', name='Test Product', price=100, quantity=1):
        return CartItem(id=item_id, name=name, price=Decimal(str(price)), quantity=quantity)
    return _make


@pytest.fixture
def place_orders(make_item):
    """Place `count` single-item orders on a store."""
    def _place(store, count, user_id='order-user', price=10, quantity=1):
        orders = []
        for _ in range(count):
            store.add_item(user_id, make_item(price=price, quantity=quantity))
            orders.append(store.checkout(user_id))
        return orders
    return _place


@pytest.fixture
def discount_code(store, place_orders):
    """A valid unused discount code, minted by reaching the first milestone."""
    place_orders(store, store.milestone)
    return store.get_statistics().discount_codes[-1].code
