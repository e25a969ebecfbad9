"""ShoppingCart aggregate.

A cart is addressed by an opaque token handed to the customer. It holds
at most one line per product; adding a product that is already in the
cart grows that line instead of appending a second one.
"""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass, field, replace

from storefront.domain.model.value_objects import Money, Quantity

CART_TOKEN_LENGTH = 30


def new_cart_id() -> str:
    """Issue a fresh cart token of uppercase ASCII letters."""
    return "".join(
        secrets.choice(string.ascii_uppercase) for _ in range(CART_TOKEN_LENGTH)
    )


@dataclass
class CartItem:
    """Snapshot of a product as it was when put in the cart."""

    product_id: int
    product_name: str
    unit_price: Money
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass
class ShoppingCart:
    """Aggregate root for a customer's cart.

    Invariant: ``items`` never holds two lines with the same product id.
    """

    cart_id: str
    items: list[CartItem] = field(default_factory=list)

    def add_item(self, item: CartItem) -> None:
        """Merge *item* into the cart.

        An existing line for the same product keeps its name and price and
        has its quantity increased; otherwise a copy of *item* is appended
        so the caller's object is never shared with the cart.
        """
        existing = self._find_item(item.product_id)
        if existing is None:
            self.items.append(replace(item))
        else:
            existing.quantity = existing.quantity + item.quantity

    def clear(self) -> None:
        self.items = []

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    def _find_item(self, product_id: int) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None
