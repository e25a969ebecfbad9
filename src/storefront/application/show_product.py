"""Application service: product queries answered by the ProductsClient."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.application.mapping import product_to_dto
from storefront.application.products_client import ProductsClient
from storefront.domain.exceptions import EntityNotFoundError


class ShowProductHandler:

    def __init__(self, products_client: ProductsClient) -> None:
        self._products_client = products_client

    def handle(self, product_id: int) -> ProductDTO:
        product = self._products_client.get_product(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        return product_to_dto(product)


class ListFeaturedProductsHandler:

    def __init__(self, products_client: ProductsClient) -> None:
        self._products_client = products_client

    def handle(self) -> list[ProductDTO]:
        return [product_to_dto(p) for p in self._products_client.get_featured_products()]
