"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers
and the only reader of Settings. Every other module depends only on
abstractions.
"""

from __future__ import annotations

import threading
from pathlib import Path

from storefront.application.products_client import ProductsClient
from storefront.domain.service.shopping_cart_service import ShoppingCartService
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.products.catalog_products_client import (
    CatalogProductsClient,
)
from storefront.infrastructure.products.http_products_client import (
    HttpProductsClient,
)

# One cart service per store file, so every caller in the process shares
# the same per-cart locks.
_cart_services: dict[Path, ShoppingCartService] = {}
_cart_services_lock = threading.Lock()


def settings() -> Settings:
    return Settings.from_env()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(settings().data_dir / "orders.json")


def products_client() -> ProductsClient:
    config = settings()
    if config.products_url:
        return HttpProductsClient(config.products_url, timeout=config.lookup_timeout)
    return CatalogProductsClient(product_repository())


def shopping_cart_service() -> ShoppingCartService:
    path = (settings().data_dir / "carts.json").resolve()
    with _cart_services_lock:
        service = _cart_services.get(path)
        if service is None:
            service = _cart_services[path] = ShoppingCartService(JsonCartRepository(path))
        return service
