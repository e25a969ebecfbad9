"""Order aggregate.

An Order is built once at checkout and never changes afterwards: there
is no setter, no status transition and no delete. Its items are copies
of the data fetched from the catalog at checkout time, not references
to the cart lines they came from.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.address import Address, AddressRole
from storefront.domain.model.value_objects import Money, Quantity

ORDER_ID_LENGTH = 16


def new_order_id() -> str:
    return uuid.uuid4().hex[:ORDER_ID_LENGTH].upper()


@dataclass(frozen=True)
class OrderLine:
    """Input to ``Order.create``: what was bought and at which price."""

    name: str
    quantity: Quantity
    unit_price: Money


@dataclass(frozen=True)
class OrderItem:

    item_id: int
    name: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Order:
    """Aggregate root for placed orders.

    Use ``Order.create()`` for new orders. The constructor is kept for
    repositories reconstituting stored orders and re-checks that the
    stored total still matches the items.
    """

    order_id: str
    delivery_address: Address
    billing_address: Address
    items: tuple[OrderItem, ...]
    total: Money
    order_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.delivery_address.role is not AddressRole.DELIVERY:
            raise ValidationError("Delivery address must have the Delivery role")
        if self.billing_address.role is not AddressRole.BILLING:
            raise ValidationError("Billing address must have the Billing role")
        if not self.items:
            raise ValidationError("Order must contain at least one item")

        expected = Money.zero(self.total.currency)
        for item in self.items:
            expected = expected + item.line_total
        if expected != self.total:
            raise ValidationError(
                f"Order total {self.total} does not match its items ({expected})"
            )

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        delivery_address: Address,
        billing_address: Address,
        lines: list[OrderLine],
    ) -> Order:
        """Build a new order, numbering items from 1 and summing the total."""
        if not lines:
            raise ValidationError("Order must contain at least one item")

        items: list[OrderItem] = []
        total = Money.zero(lines[0].unit_price.currency)
        for line in lines:
            item = OrderItem(
                item_id=len(items) + 1,
                name=line.name,
                quantity=line.quantity,
                unit_price=line.unit_price,
            )
            items.append(item)
            total = total + item.line_total

        return Order(
            order_id=new_order_id(),
            delivery_address=delivery_address,
            billing_address=billing_address,
            items=tuple(items),
            total=total,
        )

    @property
    def addresses(self) -> tuple[Address, Address]:
        return (self.delivery_address, self.billing_address)
