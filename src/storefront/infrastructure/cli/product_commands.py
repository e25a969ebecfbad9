"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.show_product import (
    ListFeaturedProductsHandler,
    ShowProductHandler,
)
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository, products_client


def _print_products(products) -> None:
    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>10}  Featured")
    click.echo("-" * 50)
    for p in products:
        featured = "yes" if p.is_featured else ""
        click.echo(f"{p.id:<6} {p.name:<24} {str(p.price):>10}  {featured}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--description", default="", help="Short description.")
@click.option("--featured", is_flag=True, default=False, help="Show on the front page.")
@click.option("--thumbnail-url", default="", help="Thumbnail image URL.")
@click.option("--image-url", default="", help="Full-size image URL.")
def product_add(
    name: str,
    price: str,
    description: str,
    featured: bool,
    thumbnail_url: str,
    image_url: str,
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(
            name=name,
            price=price,
            description=description,
            is_featured=featured,
            thumbnail_url=thumbnail_url,
            image_url=image_url,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' added at {dto.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    try:
        products = product_repository().list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return
    _print_products(products)


@click.command("featured")
def product_featured() -> None:
    """List featured products."""
    handler = ListFeaturedProductsHandler(products_client=products_client())

    try:
        products = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No featured products.")
        return
    _print_products(products)


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_show(product_id: int) -> None:
    """Show a single product."""
    handler = ShowProductHandler(products_client=products_client())

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id}: {dto.name}")
    click.echo(f"Price:    {dto.price}")
    if dto.description:
        click.echo(f"About:    {dto.description}")
    click.echo(f"Featured: {'yes' if dto.is_featured else 'no'}")


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
def product_update(product_id: int, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(product_repo=product_repository())

    try:
        dto = handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' now costs {dto.price}")
