"""Application service: Add Cart Item use case.

The product is looked up first so the cart only ever holds products the
catalog knows about, with the name and price it reported at that moment.
A caller without a cart token gets a new one back.
"""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.application.mapping import cart_to_dto
from storefront.application.products_client import ProductsClient
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import CartItem, new_cart_id
from storefront.domain.model.value_objects import Quantity
from storefront.domain.service.shopping_cart_service import ShoppingCartService


class AddCartItemHandler:

    def __init__(
        self,
        products_client: ProductsClient,
        carts: ShoppingCartService,
    ) -> None:
        self._products_client = products_client
        self._carts = carts

    def handle(self, cart_id: str | None, product_id: int, quantity: int) -> CartDTO:
        qty = Quantity(quantity)

        product = self._products_client.get_product(product_id)
        if product is None:
            raise ValidationError(f"Product #{product_id} does not exist")

        if not cart_id:
            cart_id = new_cart_id()

        items = self._carts.add_item(
            cart_id,
            CartItem(
                product_id=product.id,
                product_name=product.name,
                unit_price=product.price,
                quantity=qty,
            ),
        )
        return cart_to_dto(cart_id, items)
