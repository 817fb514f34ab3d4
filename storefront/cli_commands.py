"""
Flask CLI commands for the store.

Commands:
- flask store-config: Show discount milestone, rate and code prefix
- flask simulate-orders: Run a batch of checkouts against the store engine
"""

import click
from flask import current_app

from storefront.exceptions import StoreError
from storefront.models import CartItem
from storefront.services.store_service import get_store
from storefront.utils.formatters import to_money


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('store-config')
    def store_config():
        """Show the discount configuration of the store engine."""
        store = get_store()
        click.echo(f'Milestone (NTH_ORDER): {store.milestone}')
        click.echo(f'Discount rate:         {store.discount_rate}')
        click.echo(f'Code prefix:           {store.code_prefix}')

    @app.cli.command('simulate-orders')
    @click.option('--orders', default=None, type=click.IntRange(min=1), help='Number of checkouts (default: one milestone)')
    @click.option('--price', default='10', help='Unit price of the simulated item')
    @click.option('--quantity', default=1, type=click.IntRange(min=1), help='Units per order')
    @click.option('--user-id', default='cli-user', help='User id placing the orders')
    def simulate_orders(orders, price, quantity, user_id):
        """Place ORDERS checkouts and print the minted codes and statistics."""
        store = get_store()
        orders = orders or store.milestone

        try:
            unit_price = to_money(price)
        except ValueError:
            unit_price = None
        if unit_price is None or unit_price < 0:
            click.echo(click.style(f'❌ Invalid price: {price}', fg='red'))
            return

        codes_before = len(store.get_statistics().discount_codes)

        try:
            for _ in range(orders):
                store.add_item(user_id, CartItem(id='sim-1', name='Simulated item', price=unit_price, quantity=quantity))
                order = store.checkout(user_id)
                click.echo(f'Order #{order.id}: total={order.total}')
        except StoreError as e:
            current_app.logger.error(f"Simulation aborted: {e.message}")
            click.echo(click.style(f'❌ {e.message}', fg='red'))
            return

        stats = store.get_statistics()
        minted = stats.discount_codes[codes_before:]

        click.echo(click.style(f'\n✅ {orders} orders placed', fg='green', bold=True))
        for code in minted:
            click.echo(f'   Discount code: {code.code}')
        click.echo(f'   Total orders:      {stats.total_orders}')
        click.echo(f'   Items purchased:   {stats.items_purchased}')
        click.echo(f'   Purchase amount:   {stats.total_purchase_amount}')
        click.echo(f'   Discount amount:   {stats.total_discount_amount}')
