"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from storefront.application.dto import CartDTO
from storefront.application.mapping import cart_to_dto
from storefront.domain.service.shopping_cart_service import ShoppingCartService


class ShowCartHandler:

    def __init__(self, carts: ShoppingCartService) -> None:
        self._carts = carts

    def handle(self, cart_id: str | None) -> CartDTO:
        """A caller without a token simply has an empty cart."""
        if not cart_id:
            return cart_to_dto(None, [])
        return cart_to_dto(cart_id, self._carts.get_items(cart_id))
