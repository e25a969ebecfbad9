"""CLI commands for the shopping cart.

The cart token plays the part of the browser cookie: pass it back with
``--cart-id`` or export it as ``STOREFRONT_CART_ID``.
"""

from __future__ import annotations

import click

from storefront.application.add_cart_item import AddCartItemHandler
from storefront.application.dto import CartDTO
from storefront.application.show_cart import ShowCartHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import products_client, shopping_cart_service

cart_id_option = click.option(
    "--cart-id",
    envvar="STOREFRONT_CART_ID",
    default=None,
    help="Cart token (env: STOREFRONT_CART_ID).",
)


def _display_cart(dto: CartDTO) -> None:
    if dto.cart_id:
        click.echo(f"Cart: {dto.cart_id}")
    if not dto.items:
        click.echo("Cart is empty.")
        return
    click.echo(f"  {'ID':<5} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*53}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<5} {item.product_name:<20} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*53}")
    click.echo(f"  {'Cart Total':<33} {dto.total:>20}")


@click.command("add")
@cart_id_option
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", default=1, show_default=True, type=int, help="How many to add.")
def cart_add(cart_id: str | None, product_id: int, quantity: int) -> None:
    """Add a product to the cart (a new cart is created when no token is given)."""
    handler = AddCartItemHandler(
        products_client=products_client(),
        carts=shopping_cart_service(),
    )

    try:
        dto = handler.handle(cart_id=cart_id, product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)


@click.command("show")
@cart_id_option
def cart_show(cart_id: str | None) -> None:
    """Show the cart's contents."""
    handler = ShowCartHandler(carts=shopping_cart_service())

    try:
        dto = handler.handle(cart_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_cart(dto)
