"""Application service: Checkout use case.

Turns a cart (or an explicit list of product ids and quantities) into a
persisted Order:

1. Look every distinct product up concurrently and wait for all of them.
2. Abort if any product is missing or its lookup failed. Nothing is
   written in that case.
3. Build the Order from the *fetched* names and prices, so a stale price
   sitting in the cart is never charged.
4. Persist the Order. If that fails the cart is left untouched.
5. Clear the cart. If that fails the order still stands and the checkout
   is reported as successful; the leftover cart is only logged.

No step is retried; the caller re-submits.
"""

from __future__ import annotations

import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait

import structlog

from storefront.application import metrics
from storefront.application.dto import (
    CheckoutError,
    CheckoutResult,
    CheckoutState,
    RequestedItem,
)
from storefront.application.products_client import ProductsClient
from storefront.domain.exceptions import ProductUnavailableError, ValidationError
from storefront.domain.model.address import Address
from storefront.domain.model.order import Order, OrderLine
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.service.shopping_cart_service import ShoppingCartService

logger = structlog.get_logger(__name__)

DEFAULT_LOOKUP_TIMEOUT = 5.0
DEFAULT_MAX_WORKERS = 8
_START_POLL_INTERVAL = 0.01


class CheckoutHandler:

    def __init__(
        self,
        products_client: ProductsClient,
        order_repo: OrderRepository,
        carts: ShoppingCartService,
        lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self._products_client = products_client
        self._order_repo = order_repo
        self._carts = carts
        self._lookup_timeout = lookup_timeout
        self._max_workers = max_workers

    def handle(
        self,
        cart_id: str | None,
        delivery_address: Address,
        billing_address: Address,
        requested_items: list[RequestedItem] | None = None,
    ) -> CheckoutResult:
        """Place an order and clear the cart it came from.

        When *requested_items* is None every line of the cart is ordered
        with its cart quantity. Failures are returned as an aborted
        CheckoutResult, never raised.
        """
        log = logger.bind(cart_id=cart_id)
        self._enter(log, CheckoutState.PENDING)

        try:
            lines = self._resolve_request(cart_id, requested_items)
        except ValidationError as exc:
            log.info("checkout_rejected", reason=str(exc))
            return self._abort(CheckoutError.VALIDATION_FAILURE, str(exc))

        self._enter(log, CheckoutState.VALIDATING_PRODUCTS)
        try:
            products = self._fetch_products(sorted({pid for pid, _ in lines}))
        except ProductUnavailableError as exc:
            log.warning("checkout_products_unavailable", product_ids=exc.product_ids)
            return self._abort(
                CheckoutError.PRODUCT_UNAVAILABLE, str(exc), exc.product_ids
            )

        self._enter(log, CheckoutState.BUILDING_ORDER)
        try:
            order = Order.create(
                delivery_address,
                billing_address,
                [
                    OrderLine(
                        name=products[pid].name,
                        quantity=quantity,
                        unit_price=products[pid].price,
                    )
                    for pid, quantity in lines
                ],
            )
        except ValidationError as exc:
            log.info("checkout_rejected", reason=str(exc))
            return self._abort(CheckoutError.VALIDATION_FAILURE, str(exc))

        log = log.bind(order_id=order.order_id)
        self._enter(log, CheckoutState.PERSISTING)
        try:
            self._order_repo.add(order)
        except Exception as exc:
            # Any store failure, typed or not, must come back as a result.
            log.error("checkout_persistence_failed", exc_info=True)
            return self._abort(
                CheckoutError.PERSISTENCE_FAILURE,
                f"Order could not be saved: {exc}",
            )
        self._enter(log, CheckoutState.COMMITTED)
        metrics.orders_total.inc()
        log.info("order_placed", total=str(order.total), items=len(order.items))

        cart_cleared = self._clear_cart(log, cart_id)

        self._enter(log, CheckoutState.DONE)
        return CheckoutResult(
            success=True,
            state=CheckoutState.DONE,
            order_id=order.order_id,
            total=str(order.total),
            cart_cleared=cart_cleared,
        )

    # --- Steps ----------------------------------------------------------------

    def _resolve_request(
        self,
        cart_id: str | None,
        requested_items: list[RequestedItem] | None,
    ) -> list[tuple[int, Quantity]]:
        if requested_items is None:
            cart_items = self._carts.get_items(cart_id) if cart_id else []
            lines = [(item.product_id, item.quantity) for item in cart_items]
        else:
            lines = [
                (item.product_id, Quantity(item.quantity)) for item in requested_items
            ]
        if not lines:
            raise ValidationError("Order must contain at least one item")
        return lines

    def _fetch_products(self, product_ids: list[int]) -> dict[int, Product]:
        """Fan out one lookup per product id and join on all of them.

        A lookup that runs longer than the lookup timeout counts as
        failed. The pool is not waited on, so a hung lookup cannot hold
        the checkout past its own deadline.
        """
        started: dict[int, float] = {}

        def lookup(product_id: int) -> Product | None:
            started[product_id] = time.monotonic()
            return self._products_client.get_product(product_id)

        pool = ThreadPoolExecutor(
            max_workers=min(self._max_workers, len(product_ids)),
            thread_name_prefix="product-lookup",
        )
        try:
            futures: dict[Future, int] = {
                pool.submit(lookup, pid): pid for pid in product_ids
            }
            done, overdue = self._join(futures, started)
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        products: dict[int, Product] = {}
        missing: list[int] = []
        for future in overdue:
            logger.warning("product_lookup_timed_out", product_id=futures[future])
            missing.append(futures[future])
        for future in done:
            pid = futures[future]
            if future.exception() is not None:
                logger.warning(
                    "product_lookup_failed",
                    product_id=pid,
                    error=str(future.exception()),
                )
                missing.append(pid)
                continue
            product = future.result()
            if product is None:
                missing.append(pid)
            else:
                products[pid] = product

        if missing:
            missing.sort()
            ids = ", ".join(f"#{pid}" for pid in missing)
            raise ProductUnavailableError(
                f"Products unavailable: {ids}", product_ids=missing
            )
        return products

    def _join(
        self,
        futures: dict[Future, int],
        started: dict[int, float],
    ) -> tuple[set[Future], set[Future]]:
        """Wait until every lookup is done, one fails or one overruns.

        Each lookup's clock starts when a worker picks it up, so lookups
        queued behind others keep their whole budget. Returns the
        finished futures and the overdue ones.
        """
        done: set[Future] = set()
        pending = set(futures)
        while pending:
            now = time.monotonic()
            deadlines = {
                f: started[futures[f]] + self._lookup_timeout
                for f in pending
                if futures[f] in started
            }
            overdue = {f for f, deadline in deadlines.items() if deadline <= now}
            if overdue:
                return done, overdue
            # A worker may have taken a lookup without stamping it yet.
            timeout = min(deadlines.values()) - now if deadlines else _START_POLL_INTERVAL
            finished, pending = wait(pending, timeout=timeout, return_when=FIRST_COMPLETED)
            done |= finished
            if any(f.exception() is not None for f in finished):
                break
        return done, set()

    def _clear_cart(self, log, cart_id: str | None) -> bool:
        if not cart_id:
            return False
        self._enter(log, CheckoutState.CLEARING_CART)
        try:
            self._carts.clear(cart_id)
        except Exception:
            # The order is committed; a cart left full is tolerated.
            log.warning("checkout_cart_clear_failed", exc_info=True)
            return False
        return True

    @staticmethod
    def _enter(log, state: CheckoutState) -> None:
        log.debug("checkout_state", state=state.value)

    @staticmethod
    def _abort(
        kind: CheckoutError,
        error: str,
        missing_product_ids: list[int] | None = None,
    ) -> CheckoutResult:
        metrics.checkouts_aborted.labels(reason=kind.value).inc()
        return CheckoutResult.aborted(kind, error, missing_product_ids)
