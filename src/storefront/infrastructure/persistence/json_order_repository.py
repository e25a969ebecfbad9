"""JSON-file-backed implementation of OrderRepository.

Each order is one document with its items nested in order and exactly
two addresses, each tagged with ``address_type`` (Delivery / Billing).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.address import Address, AddressRole
from storefront.domain.model.order import Order, OrderItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, "orders")

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        with self._file.locked():
            for raw in self._file.read():
                if raw["order_id"] == order_id:
                    return self._to_domain(raw)
        return None

    def list_all(self) -> list[Order]:
        with self._file.locked():
            return [self._to_domain(raw) for raw in self._file.read()]

    def add(self, order: Order) -> None:
        with self._file.locked():
            orders = self._file.read()
            if any(raw["order_id"] == order.order_id for raw in orders):
                raise ValidationError(f"Order {order.order_id} already exists")
            orders.append(self._to_raw(order))
            self._file.write(orders)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "order_id": order.order_id,
            "order_date": order.order_date.isoformat(),
            "total": str(order.total.amount),
            "currency": order.total.currency,
            "items": [
                {
                    "item_id": item.item_id,
                    "name": item.name,
                    "quantity": item.quantity.value,
                    "price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
            "addresses": [
                {
                    "address_type": address.role.value,
                    "name": address.name,
                    "street1": address.street1,
                    "street2": address.street2,
                    "postal_code": address.postal_code,
                    "city": address.city,
                    "country": address.country,
                }
                for address in order.addresses
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        addresses = {
            a["address_type"]: Address(
                role=AddressRole(a["address_type"]),
                name=a["name"],
                street1=a["street1"],
                street2=a.get("street2"),
                postal_code=a["postal_code"],
                city=a["city"],
                country=a["country"],
            )
            for a in raw["addresses"]
        }
        return Order(
            order_id=raw["order_id"],
            delivery_address=addresses[AddressRole.DELIVERY.value],
            billing_address=addresses[AddressRole.BILLING.value],
            items=tuple(
                OrderItem(
                    item_id=i["item_id"],
                    name=i["name"],
                    quantity=Quantity(i["quantity"]),
                    unit_price=Money(Decimal(i["price"]), i.get("currency", "USD")),
                )
                for i in raw["items"]
            ),
            total=Money(Decimal(raw["total"]), raw.get("currency", "USD")),
            order_date=datetime.fromisoformat(raw["order_date"]),
        )
