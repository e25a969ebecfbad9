"""Domain service: Shopping Cart access.

Each cart has exactly one writer at a time. Operations on the same cart
id take that cart's lock around the whole load-mutate-save cycle, so two
concurrent adds can never lose an update. Operations on different carts
take different locks and run in parallel. The store's own lock is held
inside the cart lock, which keeps the cycle whole when other processes
share the store.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator

import structlog

from storefront.domain.model.cart import CartItem, ShoppingCart
from storefront.domain.repository.cart_repository import CartRepository

logger = structlog.get_logger(__name__)


class _CartLock:
    """A cart's lock plus the number of callers holding or awaiting it."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class ShoppingCartService:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo
        self._locks: dict[str, _CartLock] = {}
        self._registry_lock = threading.Lock()

    def add_item(self, cart_id: str, item: CartItem) -> list[CartItem]:
        """Add or merge *item* and return the cart's items afterwards."""
        with self._locked(cart_id):
            cart = self._cart_repo.get(cart_id) or ShoppingCart(cart_id=cart_id)
            cart.add_item(item)
            self._cart_repo.save(cart)
            logger.info(
                "cart_item_added",
                cart_id=cart_id,
                product_id=item.product_id,
                quantity=item.quantity.value,
            )
            return self._copy_items(cart)

    def get_items(self, cart_id: str) -> list[CartItem]:
        """Return the cart's items; an unknown cart is simply empty."""
        with self._locked(cart_id):
            cart = self._cart_repo.get(cart_id)
            if cart is None:
                return []
            return self._copy_items(cart)

    def clear(self, cart_id: str) -> None:
        with self._locked(cart_id):
            cart = self._cart_repo.get(cart_id)
            if cart is None or cart.is_empty:
                return
            cart.clear()
            self._cart_repo.save(cart)
            logger.info("cart_cleared", cart_id=cart_id)

    # --- Internal helpers -----------------------------------------------------

    @contextmanager
    def _locked(self, cart_id: str) -> Iterator[None]:
        with self._registry_lock:
            entry = self._locks.get(cart_id)
            if entry is None:
                entry = self._locks[cart_id] = _CartLock()
            entry.users += 1
        try:
            with entry.lock, self._cart_repo.lock(cart_id):
                yield
        finally:
            with self._registry_lock:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[cart_id]

    @staticmethod
    def _copy_items(cart: ShoppingCart) -> list[CartItem]:
        return [replace(item) for item in cart.items]
