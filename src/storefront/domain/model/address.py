"""Address value object.

Delivery and billing addresses share one shape and are told apart by
their ``role`` tag, which is also what the order store persists.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import ValidationError


class AddressRole(Enum):
    DELIVERY = "Delivery"
    BILLING = "Billing"


_REQUIRED_FIELDS = ("name", "street1", "postal_code", "city", "country")


@dataclass(frozen=True)
class Address:

    role: AddressRole
    name: str
    street1: str
    street2: str | None
    postal_code: str
    city: str
    country: str

    def __post_init__(self) -> None:
        if not isinstance(self.role, AddressRole):
            raise ValidationError(f"Unknown address role: {self.role!r}")
        for field_name in _REQUIRED_FIELDS:
            value = getattr(self, field_name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(
                    f"{self.role.value} address {field_name.replace('_', ' ')} is required"
                )
            object.__setattr__(self, field_name, value.strip())
        street2 = self.street2.strip() if self.street2 else ""
        object.__setattr__(self, "street2", street2 or None)

    @classmethod
    def delivery(
        cls,
        name: str,
        street1: str,
        street2: str | None,
        postal_code: str,
        city: str,
        country: str,
    ) -> Address:
        return cls(AddressRole.DELIVERY, name, street1, street2, postal_code, city, country)

    @classmethod
    def billing(
        cls,
        name: str,
        street1: str,
        street2: str | None,
        postal_code: str,
        city: str,
        country: str,
    ) -> Address:
        return cls(AddressRole.BILLING, name, street1, street2, postal_code, city, country)
