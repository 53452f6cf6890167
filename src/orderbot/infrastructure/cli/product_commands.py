"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from orderbot.application.add_product import AddProductHandler
from orderbot.application.seed_catalog import SeedCatalogHandler
from orderbot.application.update_product import UpdateProductHandler
from orderbot.domain.exceptions import DomainException
from orderbot.infrastructure.bootstrap import product_repository
from orderbot.infrastructure.cli.settings import load_settings


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 25000).")
@click.option("--unit", required=True, help="Unit label (e.g. sac, m3, pièce).")
@click.option("--stock", type=int, default=None, help="Stock; omit for unlimited.")
@click.option("--description", default=None, help="Optional description.")
def product_add(
    name: str, price: str, unit: str, stock: int | None, description: str | None
) -> None:
    """Add a new product to the catalog."""
    settings = load_settings()
    handler = AddProductHandler(product_repository(settings), settings.currency)

    try:
        product = handler.handle(
            name=name, price=price, unit=unit, stock=stock, description=description
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price} / {product.unit}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    try:
        products = product_repository(load_settings()).list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>12} {'Unit':<8} {'Stock':>8}")
    click.echo("-" * 62)
    for p in products:
        stock = "∞" if p.stock is None else str(p.stock)
        click.echo(f"{p.id:<6} {p.name:<24} {str(p.price):>12} {p.unit:<8} {stock:>8}")


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--price", required=True, help="New unit price.")
def product_update(product_id: int, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(product_repository(load_settings()))

    try:
        product = handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} price updated to {product.price}")


@click.command("seed")
def product_seed() -> None:
    """Fill an empty catalog with the starter products."""
    settings = load_settings()
    handler = SeedCatalogHandler(product_repository(settings), settings.currency)

    try:
        added = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not added:
        click.echo("Catalog already has products; nothing seeded.")
        return
    click.echo(f"Seeded {len(added)} products.")
