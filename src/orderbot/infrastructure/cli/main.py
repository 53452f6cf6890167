import logging

import click

from orderbot.infrastructure.cli.bot_commands import run
from orderbot.infrastructure.cli.order_commands import order_list, order_show
from orderbot.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_seed,
    product_update,
)


@click.group()
def cli() -> None:
    """Orderbot — conversational ordering assistant"""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )
    # Set higher logging level for httpx to avoid every API call being logged
    logging.getLogger("httpx").setLevel(logging.WARNING)


@cli.group()
def order() -> None:
    """Inspect orders."""


@cli.group()
def product() -> None:
    """Manage the catalog."""


# Register subcommands
cli.add_command(run)
order.add_command(order_list)
order.add_command(order_show)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_seed)
product.add_command(product_update)
