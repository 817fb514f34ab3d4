"""
Client API blueprint - cart and checkout.

Thin HTTP layer: parse and validate the request, call the store engine,
render the result. Errors propagate as StoreError subclasses and are
rendered by the app-level error handler.
"""
import logging
from flask import Blueprint, request, jsonify

from storefront.schemas import (
    parse_request,
    CartQuery,
    AddToCartRequest,
    UpdateQuantityRequest,
    ApplyDiscountRequest,
    CheckoutRequest,
)
from storefront.services.store_service import get_store

logger = logging.getLogger(__name__)

client_bp = Blueprint('client', __name__, url_prefix='/api/client')


def _json_body():
    return request.get_json(silent=True)


@client_bp.route('/cart', methods=['GET'])
def get_cart():
    """Get the cart of a user (created empty on first access)."""
    query = parse_request(CartQuery, request.args.to_dict())
    cart = get_store().get_or_create_cart(query.user_id)
    return jsonify(cart.to_dict())


@client_bp.route('/cart/add', methods=['POST'])
def add_to_cart():
    """Add an item to the cart, accumulating quantity for a known id."""
    payload = parse_request(AddToCartRequest, _json_body())
    cart = get_store().add_item(payload.user_id, payload.item.to_cart_item())
    return jsonify({
        'success': True,
        'message': 'Item added to cart',
        'cart': cart.to_dict()
    })


@client_bp.route('/cart/update-quantity', methods=['POST'])
def update_cart_quantity():
    """Change an item quantity by a signed delta; zero or less removes it."""
    payload = parse_request(UpdateQuantityRequest, _json_body())
    cart = get_store().update_item_quantity(payload.user_id, payload.item_id, payload.quantity_change)
    return jsonify({
        'success': True,
        'message': 'Cart updated successfully',
        'cart': cart.to_dict()
    })


@client_bp.route('/cart/apply-discount', methods=['POST'])
def apply_discount():
    payload = parse_request(ApplyDiscountRequest, _json_body())
    cart = get_store().apply_discount(payload.user_id, payload.discount_code)
    return jsonify({
        'success': True,
        'message': 'Discount code applied successfully',
        'cart': cart.to_dict()
    })


@client_bp.route('/checkout', methods=['POST'])
def checkout():
    """Checkout the cart and create an order."""
    payload = parse_request(CheckoutRequest, _json_body())
    order = get_store().checkout(payload.user_id)

    return jsonify({
        'success': True,
        'message': 'Order placed successfully',
        'order': order.to_dict()
    })
