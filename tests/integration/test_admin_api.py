"""
Integration tests for the admin API, index, health and metrics endpoints.
"""

import re

from prometheus_client import REGISTRY


def place_order(client, user_id='buyer', price=10, quantity=1):
    client.post('/api/client/cart/add', json={
        'userId': user_id,
        'item': {'id': '1', 'name': 'Product', 'price': price, 'quantity': quantity}
    })
    return client.post('/api/client/checkout', json={'userId': user_id})


class TestGenerateDiscountCode:
    """Test admin discount code generation."""

    def test_rejected_before_milestone(self, client):
        place_order(client)

        response = client.post('/api/admin/generate-discount-code')

        assert response.status_code == 400
        data = response.get_json()
        assert data['error'] == 'milestone_not_reached'
        assert data['message'] == 'Discount code can only be generated every 5 orders. Current order count: 1'

    def test_rejected_with_no_orders(self, client):
        response = client.post('/api/admin/generate-discount-code')
        assert response.status_code == 400

    def test_generated_on_milestone(self, client):
        for _ in range(5):
            place_order(client)

        response = client.post('/api/admin/generate-discount-code')

        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['message'] == 'Discount code generated successfully'
        assert re.match(r'^DISCOUNT\d+$', data['code'])
        assert data['nthOrder'] == 5
        assert data['note'] == 'This code is generated every 5 orders'

    def test_admin_and_auto_codes_coexist(self, client):
        """Auto-minted code at checkout plus one admin code for the same milestone."""
        for _ in range(5):
            place_order(client)
        client.post('/api/admin/generate-discount-code')

        codes = client.get('/api/admin/statistics').get_json()['data']['discountCodes']
        assert len(codes) == 2
        assert codes[0]['code'] != codes[1]['code']


class TestStatistics:
    """Test statistics endpoint."""

    def test_empty(self, client):
        response = client.get('/api/admin/statistics')

        assert response.status_code == 200
        assert response.get_json() == {
            'success': True,
            'data': {
                'itemsPurchased': 0,
                'totalPurchaseAmount': 0,
                'discountCodes': [],
                'totalDiscountAmount': 0,
                'totalOrders': 0,
            }
        }

    def test_sums(self, client):
        for _ in range(3):
            place_order(client, price=50, quantity=2)

        data = client.get('/api/admin/statistics').get_json()['data']

        assert data['itemsPurchased'] == 6
        assert data['totalPurchaseAmount'] == 300
        assert data['totalDiscountAmount'] == 0
        assert data['totalOrders'] == 3


class TestMainEndpoints:
    """Test index, health and error rendering."""

    def test_index(self, client):
        data = client.get('/').get_json()

        assert data['message'] == 'Ecommerce Store API'
        assert 'POST /api/client/checkout' in data['endpoints']['client']
        assert 'GET /api/admin/statistics' in data['endpoints']['admin']

    def test_health(self, client):
        place_order(client)

        response = client.get('/health')

        assert response.status_code == 200
        data = response.get_json()
        assert data['status'] == 'healthy'
        assert data['store']['orderCounter'] == 1
        assert data['config'] == {'nthOrder': 5, 'discountRate': 0.1}

    def test_unknown_route_is_json_404(self, client):
        response = client.get('/api/client/nope')

        assert response.status_code == 404
        assert response.get_json()['status'] == 'error'

    def test_wrong_method_is_json_405(self, client):
        response = client.get('/api/client/checkout')

        assert response.status_code == 405
        assert 'POST' in response.headers['Allow']
        assert response.content_type == 'application/json'
        assert response.get_json()['error'] == 'method_not_allowed'


class TestMetrics:
    """Test Prometheus exposition."""

    def test_metrics_endpoint(self, client):
        place_order(client)

        response = client.get('/metrics')

        assert response.status_code == 200
        body = response.get_data(as_text=True)
        assert 'http_requests_total' in body
        assert 'store_orders_total' in body

    def test_redeemed_counter_counts_each_code_once(self, client):
        """Two carts sharing one code: only the first checkout consumes it."""
        def redeemed():
            return REGISTRY.get_sample_value('store_discount_codes_redeemed_total') or 0

        for _ in range(5):
            place_order(client)
        code = client.get('/api/admin/statistics').get_json()['data']['discountCodes'][0]['code']

        for user_id in ('a', 'b'):
            client.post('/api/client/cart/add', json={
                'userId': user_id,
                'item': {'id': '1', 'name': 'Product', 'price': 100}
            })
            client.post('/api/client/cart/apply-discount', json={'userId': user_id, 'discountCode': code})

        before = redeemed()
        client.post('/api/client/checkout', json={'userId': 'a'})
        client.post('/api/client/checkout', json={'userId': 'b'})

        assert redeemed() - before == 1

    def test_generated_counter_by_source(self, client):
        def generated(source):
            return REGISTRY.get_sample_value('store_discount_codes_generated_total', {'source': source}) or 0

        milestone_before, admin_before = generated('milestone'), generated('admin')
        for _ in range(5):
            place_order(client)
        client.post('/api/admin/generate-discount-code')

        assert generated('milestone') - milestone_before == 1
        assert generated('admin') - admin_before == 1
