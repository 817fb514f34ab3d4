"""
Admin API blueprint - discount code generation and statistics.
"""
import logging
from flask import Blueprint, jsonify

from storefront.services.store_service import get_store

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix='/api/admin')


@admin_bp.route('/generate-discount-code', methods=['POST'])
def generate_discount_code():
    """
    Generate a discount code on demand.

    Only succeeds when the order count is a nonzero multiple of the
    configured milestone (NTH_ORDER).

    Returns:
        200: {success, message, code, nthOrder, note}
        400: milestone not reached
    """
    store = get_store()
    code = store.request_discount_code_generation()
    logger.info(f"Admin generated discount code {code}")

    return jsonify({
        'success': True,
        'message': 'Discount code generated successfully',
        'code': code,
        'nthOrder': store.milestone,
        'note': f'This code is generated every {store.milestone} orders'
    })


@admin_bp.route('/statistics', methods=['GET'])
def get_statistics():
    """Store statistics: items purchased, amounts, discount codes, order count."""
    stats = get_store().get_statistics()
    return jsonify({
        'success': True,
        'data': stats.to_dict()
    })
