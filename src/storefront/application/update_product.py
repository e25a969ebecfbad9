"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.application.mapping import product_to_dto
from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: int, new_price: str) -> ProductDTO:
        """Reprice a catalog product and return it as stored.

        Carts keep the price they were filled at, but checkout re-reads
        the catalog, so the next order placed is charged the new price.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")

        product.update_price(Money.of(new_price))
        self._product_repo.save(product)
        return product_to_dto(product)
