"""Abstract repository for the ShoppingCart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import nullcontext
from typing import ContextManager

from storefront.domain.model.cart import ShoppingCart


class CartRepository(ABC):

    @abstractmethod
    def get(self, cart_id: str) -> ShoppingCart | None:
        """Return the stored cart, or None if it was never written."""

    @abstractmethod
    def save(self, cart: ShoppingCart) -> None:
        """Persist a new or updated cart."""

    def lock(self, cart_id: str) -> ContextManager:
        """Hold while loading, changing and saving one cart.

        Stores shared between processes override this; a store private
        to one process needs nothing beyond the caller's own locking.
        """
        return nullcontext()
