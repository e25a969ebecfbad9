"""ProductsClient served from the local catalog store."""

from __future__ import annotations

from storefront.application.products_client import ProductsClient
from storefront.domain.exceptions import PersistenceError, ProductLookupError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository


class CatalogProductsClient(ProductsClient):

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def get_product(self, product_id: int) -> Product | None:
        try:
            return self._product_repo.get_by_id(product_id)
        except PersistenceError as exc:
            raise ProductLookupError(str(exc)) from exc

    def get_featured_products(self) -> list[Product]:
        try:
            return self._product_repo.list_featured()
        except PersistenceError as exc:
            raise ProductLookupError(str(exc)) from exc
