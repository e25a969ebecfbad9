"""Product aggregate.

Products belong to the catalog and live independently of carts and
orders. Carts and orders keep their own copies of name and price, so a
price change here never rewrites what a customer already holds.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog."""

    id: int
    name: str
    price: Money
    description: str = ""
    is_featured: bool = False
    thumbnail_url: str = ""
    image_url: str = ""

    def update_price(self, new_price: Money) -> None:
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price
