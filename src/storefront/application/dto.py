"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class RequestedItem:
    """Input: a product id and how many of it the customer wants."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class ProductDTO:

    id: int
    name: str
    description: str
    price: str  # formatted, e.g. "$15.00"
    is_featured: bool
    thumbnail_url: str
    image_url: str


@dataclass(frozen=True)
class CartItemDTO:

    product_id: int
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    """Output: a cart and the token that identifies it.

    ``cart_id`` is None when the caller presented no token.
    """

    cart_id: str | None
    items: list[CartItemDTO]
    total: str


@dataclass(frozen=True)
class AddressDTO:

    role: str
    name: str
    street1: str
    street2: str | None
    postal_code: str
    city: str
    country: str


@dataclass(frozen=True)
class OrderItemDTO:

    name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    order_id: str
    order_date: str
    delivery_address: AddressDTO
    billing_address: AddressDTO
    items: list[OrderItemDTO]
    total: str


class CheckoutState(Enum):
    PENDING = "Pending"
    VALIDATING_PRODUCTS = "ValidatingProducts"
    BUILDING_ORDER = "BuildingOrder"
    PERSISTING = "Persisting"
    COMMITTED = "Committed"
    CLEARING_CART = "ClearingCart"
    DONE = "Done"
    ABORTED = "Aborted"


class CheckoutError(Enum):
    VALIDATION_FAILURE = "ValidationFailure"
    PRODUCT_UNAVAILABLE = "ProductUnavailable"
    PERSISTENCE_FAILURE = "PersistenceFailure"


@dataclass(frozen=True)
class CheckoutResult:
    """Output of a checkout attempt.

    On failure ``order_id`` and ``total`` are None and ``error`` holds a
    human-readable cause. A successful checkout whose cart could not be
    cleared reports ``cart_cleared=False``.
    """

    success: bool
    state: CheckoutState
    order_id: str | None = None
    total: str | None = None
    error: str | None = None
    error_kind: CheckoutError | None = None
    cart_cleared: bool = False
    missing_product_ids: list[int] = field(default_factory=list)

    @staticmethod
    def aborted(
        kind: CheckoutError, error: str, missing_product_ids: list[int] | None = None
    ) -> CheckoutResult:
        return CheckoutResult(
            success=False,
            state=CheckoutState.ABORTED,
            error=error,
            error_kind=kind,
            missing_product_ids=list(missing_product_ids or []),
        )
