"""Main blueprint with API index and health check endpoints."""
from flask import Blueprint, jsonify, current_app
from storefront.services.store_service import get_store

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """API index listing the available endpoints."""
    return jsonify({
        'message': current_app.config.get('API_NAME', 'Ecommerce Store API'),
        'version': current_app.config.get('API_VERSION', '1.0.0'),
        'endpoints': {
            'client': {
                'GET /api/client/cart': 'Get cart by userId',
                'POST /api/client/cart/add': 'Add item to cart',
                'POST /api/client/cart/update-quantity': 'Change item quantity by a signed delta',
                'POST /api/client/cart/apply-discount': 'Apply discount code to cart',
                'POST /api/client/checkout': 'Checkout and place order'
            },
            'admin': {
                'POST /api/admin/generate-discount-code': 'Generate discount code (if nth order condition is met)',
                'GET /api/admin/statistics': 'Get store statistics'
            }
        }
    })


@main_bp.route('/health')
def health():
    """
    Health check endpoint.

    Returns:
        200: Healthy, with store counters
    """
    store = get_store()
    return jsonify({
        'status': 'healthy',
        'store': store.snapshot(),
        'config': {
            'nthOrder': store.milestone,
            'discountRate': float(store.discount_rate)
        }
    }), 200
