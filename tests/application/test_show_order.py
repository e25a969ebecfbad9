"""Integration tests for the order query use cases."""

import pytest

from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.address import Address
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeOrderRepository


def _order() -> Order:
    return Order.create(
        Address.delivery("Alice", "1 Main St", None, "11122", "Stockholm", "SE"),
        Address.billing("Bob", "2 Side St", "Apt 1", "11133", "Solna", "SE"),
        [
            OrderLine("Widget", Quantity(2), Money.of("15.00")),
            OrderLine("Lamp", Quantity(1), Money.of("19.99")),
        ],
    )


class TestShowOrder:

    def test_show(self):
        repo = FakeOrderRepository()
        order = _order()
        repo.add(order)

        dto = ShowOrderHandler(repo).handle(order.order_id)

        assert dto.order_id == order.order_id
        assert dto.total == "$49.99"
        assert dto.delivery_address.role == "Delivery"
        assert dto.billing_address.role == "Billing"
        assert dto.billing_address.street2 == "Apt 1"
        assert [(i.name, i.quantity, i.line_total) for i in dto.items] == [
            ("Widget", 2, "$30.00"),
            ("Lamp", 1, "$19.99"),
        ]

    def test_lookup_is_case_insensitive(self):
        repo = FakeOrderRepository()
        order = _order()
        repo.add(order)
        assert ShowOrderHandler(repo).handle(order.order_id.lower()).order_id == order.order_id

    def test_missing(self):
        with pytest.raises(EntityNotFoundError, match="not found"):
            ShowOrderHandler(FakeOrderRepository()).handle("0123456789ABCDEF")


class TestListOrders:

    def test_empty(self):
        assert ListOrdersHandler(FakeOrderRepository()).handle() == []

    def test_lists_all(self):
        repo = FakeOrderRepository()
        repo.add(_order())
        repo.add(_order())
        assert len(ListOrdersHandler(repo).handle()) == 2
