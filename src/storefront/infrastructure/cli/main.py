import click

from storefront.infrastructure.bootstrap import settings
from storefront.infrastructure.cli.cart_commands import cart_add, cart_show
from storefront.infrastructure.cli.order_commands import (
    order_checkout,
    order_list,
    order_show,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_featured,
    product_list,
    product_show,
    product_update,
)
from storefront.infrastructure.config import ConfigError
from storefront.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """Storefront: product catalog, shopping cart and checkout."""
    try:
        configure_logging(settings().log_level)
    except ConfigError as exc:
        raise click.ClickException(str(exc))


@cli.group()
def product() -> None:
    """Browse and manage the product catalog."""


@cli.group()
def cart() -> None:
    """Manage a shopping cart."""


@cli.group()
def order() -> None:
    """Place and inspect orders."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_featured)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
cart.add_command(cart_add)
cart.add_command(cart_show)
order.add_command(order_checkout)
order.add_command(order_list)
order.add_command(order_show)
