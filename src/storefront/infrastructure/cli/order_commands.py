"""CLI commands for checkout and placed orders."""

from __future__ import annotations

import click

from storefront.application.checkout import CheckoutHandler
from storefront.application.dto import OrderDTO, RequestedItem
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.address import Address
from storefront.infrastructure.bootstrap import (
    order_repository,
    products_client,
    settings,
    shopping_cart_service,
)
from storefront.infrastructure.cli.cart_commands import cart_id_option

_ADDRESS_FORMAT = "name;street1;street2;postal code;city;country"


def _parse_items(raw: str) -> list[RequestedItem]:
    """Parse '1:3,5:2' into RequestedItem list."""
    items: list[RequestedItem] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        pid_str, qty_str = pair.split(":", 1)
        try:
            items.append(RequestedItem(product_id=int(pid_str), quantity=int(qty_str)))
        except ValueError:
            raise click.BadParameter(f"Invalid item '{pair}'. Both parts must be integers.")
    return items


def _parse_address(raw: str, factory, option: str) -> Address:
    parts = raw.split(";")
    if len(parts) != 6:
        raise click.BadParameter(
            f"Expected '{_ADDRESS_FORMAT}' (6 fields, street2 may be empty).",
            param_hint=option,
        )
    try:
        return factory(*parts)
    except DomainException as exc:
        raise click.BadParameter(str(exc), param_hint=option)


@click.command("checkout")
@cart_id_option
@click.option("--delivery", required=True, help=f"Delivery address as '{_ADDRESS_FORMAT}'.")
@click.option("--billing", default=None, help="Billing address (defaults to the delivery address).")
@click.option("--items", "items_str", default=None, help="Items as 'ProductId:Qty,...' (defaults to the cart).")
def order_checkout(
    cart_id: str | None,
    delivery: str,
    billing: str | None,
    items_str: str | None,
) -> None:
    """Place an order and clear the cart.

    Prices are re-read from the catalog, so the order may differ from
    what the cart showed if a price changed in the meantime.
    """
    delivery_address = _parse_address(delivery, Address.delivery, "--delivery")
    billing_address = _parse_address(billing or delivery, Address.billing, "--billing")
    requested = _parse_items(items_str) if items_str else None

    config = settings()
    handler = CheckoutHandler(
        products_client=products_client(),
        order_repo=order_repository(),
        carts=shopping_cart_service(),
        lookup_timeout=config.lookup_timeout,
        max_workers=config.lookup_workers,
    )

    result = handler.handle(
        cart_id=cart_id,
        delivery_address=delivery_address,
        billing_address=billing_address,
        requested_items=requested,
    )

    if not result.success:
        raise click.ClickException(f"{result.error_kind.value}: {result.error}")

    click.echo(f"Order {result.order_id} placed  (total={result.total})")
    if cart_id and not result.cart_cleared:
        click.echo("Warning: the cart could not be cleared.", err=True)


def _display_address(label: str, address) -> None:
    lines = [address.name, address.street1, address.street2,
             f"{address.postal_code} {address.city}", address.country]
    click.echo(f"{label}:")
    for line in lines:
        if line:
            click.echo(f"  {line}")


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order {dto.order_id}")
    click.echo(f"Placed: {dto.order_date}")
    click.echo()
    _display_address("Deliver to", dto.delivery_address)
    _display_address("Bill to", dto.billing_address)
    click.echo()
    click.echo(f"  {'Item':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of a placed order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
def order_list() -> None:
    """List placed orders."""
    handler = ListOrdersHandler(order_repo=order_repository())

    try:
        orders = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'Order':<18} {'Placed':<22} {'Items':>5} {'Total':>12}")
    click.echo("-" * 60)
    for dto in orders:
        click.echo(f"{dto.order_id:<18} {dto.order_date:<22} {len(dto.items):>5} {dto.total:>12}")
