"""CLI commands for inspecting orders."""

from __future__ import annotations

import click

from orderbot.application.dto import OrderDTO
from orderbot.application.show_order import ListOrdersHandler, ShowOrderHandler
from orderbot.domain.exceptions import DomainException
from orderbot.infrastructure.bootstrap import order_repository
from orderbot.infrastructure.cli.settings import load_settings


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.user_id}  Tel: {dto.phone}")
    click.echo(f"Address:  {dto.address}")
    click.echo(f"Delivery: {dto.delivery_type}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>8} {'Unit':<8} {'Price':>12} {'Total':>14}")
    click.echo(f"  {'-'*70}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>8} {item.unit:<8} "
            f"{item.unit_price:>12} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*70}")
    click.echo(f"  {'Order Total':<40} {dto.total:>30}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository(load_settings()))

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--limit", type=int, default=None, help="Maximum number of orders.")
def order_list(limit: int | None) -> None:
    """List recent orders, most recent first."""
    settings = load_settings()
    handler = ListOrdersHandler(
        order_repository(settings), limit or settings.recent_orders_limit
    )

    try:
        orders = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return
    for dto in orders:
        click.echo(f"#{dto.id:<5} {dto.status:<10} {dto.total:>14}  {dto.created_at}")
