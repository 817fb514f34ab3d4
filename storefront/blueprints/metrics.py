"""
Prometheus metrics blueprint for observability.

Exposes /metrics with HTTP request metrics and store-level counters
(orders, sales amount, discount codes generated and redeemed).
This endpoint should be restricted to internal network or monitoring systems only.
"""
from flask import Blueprint, Response, request, g
from prometheus_client import Counter, Histogram, Gauge, generate_latest, CollectorRegistry, CONTENT_TYPE_LATEST
from prometheus_client import multiprocess, REGISTRY
import logging
import time
import os

logger = logging.getLogger(__name__)

metrics_bp = Blueprint('metrics', __name__)

# Check if running in multi-process mode (Gunicorn)
MULTIPROCESS_MODE = os.environ.get('PROMETHEUS_MULTIPROC_DIR') is not None

# Use multiprocess registry in production with Gunicorn
if MULTIPROCESS_MODE:
    registry = CollectorRegistry()
    multiprocess.MultiProcessCollector(registry)
else:
    registry = REGISTRY

_metric_registry = registry if not MULTIPROCESS_MODE else None

# HTTP Request Metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'http_status'],
    registry=_metric_registry
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request latency in seconds',
    ['method', 'endpoint'],
    registry=_metric_registry,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0)
)

http_requests_in_flight = Gauge(
    'http_requests_in_flight',
    'Number of HTTP requests currently being processed',
    registry=_metric_registry
)

# Store metrics
store_orders_total = Counter(
    'store_orders_total',
    'Orders created by checkout',
    ['discounted'],
    registry=_metric_registry
)

store_sales_amount_total = Counter(
    'store_sales_amount_total',
    'Sum of order totals after discount',
    registry=_metric_registry
)

store_discount_codes_generated_total = Counter(
    'store_discount_codes_generated_total',
    'Discount codes minted',
    ['source'],
    registry=_metric_registry
)

store_discount_codes_redeemed_total = Counter(
    'store_discount_codes_redeemed_total',
    'Discount codes consumed by a checkout',
    registry=_metric_registry
)


def record_store_event(event, **data) -> None:
    """Store engine listener updating the store counters."""
    try:
        if event == 'order_created':
            order = data['order']
            discounted = order.discount_code is not None
            store_orders_total.labels(discounted=str(discounted).lower()).inc()
            store_sales_amount_total.inc(float(order.total))
        elif event == 'discount_code_redeemed':
            store_discount_codes_redeemed_total.inc()
        elif event == 'discount_code_generated':
            store_discount_codes_generated_total.labels(source=data['source']).inc()
    except Exception as e:
        # Don't break store operations if metrics fail
        logger.warning(f"Failed to record store metric {event}: {e}")


def setup_metrics_instrumentation(app):
    """
    Setup before_request and after_request hooks for automatic metrics collection.

    This should be called from app factory after app creation.
    """

    @app.before_request
    def before_request_metrics():
        """Record request start time and increment in-flight counter."""
        g._prometheus_metrics_start_time = time.time()
        http_requests_in_flight.inc()

    @app.after_request
    def after_request_metrics(response):
        """Record request metrics after response is ready."""
        try:
            if hasattr(g, '_prometheus_metrics_start_time'):
                duration = time.time() - g._prometheus_metrics_start_time

                # Get endpoint name (e.g., 'client.add_to_cart')
                endpoint = request.endpoint or 'unknown'
                method = request.method
                status = response.status_code

                http_request_duration_seconds.labels(
                    method=method,
                    endpoint=endpoint
                ).observe(duration)

                http_requests_total.labels(
                    method=method,
                    endpoint=endpoint,
                    http_status=status
                ).inc()

                http_requests_in_flight.dec()
        except Exception as e:
            # Don't break request flow if metrics fail
            app.logger.warning(f"Failed to record metrics: {e}")

        return response


@metrics_bp.route('/metrics')
def metrics():
    """
    Prometheus metrics endpoint.

    SECURITY NOTE:
    - This endpoint is NOT authenticated
    - Should be restricted by network/firewall rules in production

    Returns:
        Response: Prometheus-formatted metrics in text/plain
    """
    data = generate_latest(registry)
    return Response(data, mimetype=CONTENT_TYPE_LATEST)
