"""Domain → DTO mapping shared by the query and command handlers."""

from __future__ import annotations

from storefront.application.dto import (
    AddressDTO,
    CartDTO,
    CartItemDTO,
    OrderDTO,
    OrderItemDTO,
    ProductDTO,
)
from storefront.domain.model.address import Address
from storefront.domain.model.cart import CartItem
from storefront.domain.model.order import Order
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        description=product.description,
        price=str(product.price),
        is_featured=product.is_featured,
        thumbnail_url=product.thumbnail_url,
        image_url=product.image_url,
    )


def cart_to_dto(cart_id: str | None, items: list[CartItem]) -> CartDTO:
    total = Money.zero()
    for item in items:
        total = total + item.line_total
    return CartDTO(
        cart_id=cart_id,
        items=[
            CartItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in items
        ],
        total=str(total),
    )


def _address_to_dto(address: Address) -> AddressDTO:
    return AddressDTO(
        role=address.role.value,
        name=address.name,
        street1=address.street1,
        street2=address.street2,
        postal_code=address.postal_code,
        city=address.city,
        country=address.country,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        order_id=order.order_id,
        order_date=order.order_date.strftime("%Y-%m-%d %H:%M UTC"),
        delivery_address=_address_to_dto(order.delivery_address),
        billing_address=_address_to_dto(order.billing_address),
        items=[
            OrderItemDTO(
                name=item.name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        total=str(order.total),
    )
