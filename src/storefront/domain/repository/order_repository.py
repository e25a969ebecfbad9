"""Abstract repository for the Order aggregate.

Orders are append-only: there is no update or delete.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, oldest first."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Durably store a new order.

        Raises ValidationError if an order with the same ID exists and
        PersistenceError if the write did not succeed.
        """
