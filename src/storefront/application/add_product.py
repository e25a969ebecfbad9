"""Application service: Add Product use case."""

from __future__ import annotations

from storefront.application.dto import ProductDTO
from storefront.application.mapping import product_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        description: str = "",
        is_featured: bool = False,
        thumbnail_url: str = "",
        image_url: str = "",
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        if self._product_repo.get_by_name(name.strip()) is not None:
            raise ValidationError(f"Product '{name.strip()}' already exists")

        money = Money.of(price)
        if money.amount <= 0:
            raise ValidationError("Product price must be greater than zero")

        product = Product(
            id=self._product_repo.next_id(),
            name=name.strip(),
            price=money,
            description=description.strip(),
            is_featured=is_featured,
            thumbnail_url=thumbnail_url,
            image_url=image_url,
        )
        self._product_repo.save(product)
        return product_to_dto(product)
