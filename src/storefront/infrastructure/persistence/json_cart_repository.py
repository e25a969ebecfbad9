"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import ContextManager

from storefront.domain.model.cart import CartItem, ShoppingCart
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, "carts")

    # --- CartRepository interface ---------------------------------------------

    def get(self, cart_id: str) -> ShoppingCart | None:
        with self._file.locked():
            for raw in self._file.read():
                if raw["cart_id"] == cart_id:
                    return self._to_domain(raw)
        return None

    def lock(self, cart_id: str) -> ContextManager:
        # One lock file guards every cart in the store.
        return self._file.locked()

    def save(self, cart: ShoppingCart) -> None:
        with self._file.locked():
            records = self._file.read()
            for i, raw in enumerate(records):
                if raw["cart_id"] == cart.cart_id:
                    records[i] = self._to_raw(cart)
                    break
            else:
                records.append(self._to_raw(cart))
            self._file.write(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: ShoppingCart) -> dict:
        return {
            "cart_id": cart.cart_id,
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                    "quantity": item.quantity.value,
                }
                for item in cart.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> ShoppingCart:
        return ShoppingCart(
            cart_id=raw["cart_id"],
            items=[
                CartItem(
                    product_id=i["product_id"],
                    product_name=i["product_name"],
                    unit_price=Money(Decimal(i["unit_price"]), i.get("currency", "USD")),
                    quantity=Quantity(i["quantity"]),
                )
                for i in raw["items"]
            ],
        )
