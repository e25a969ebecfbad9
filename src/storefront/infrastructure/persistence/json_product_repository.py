"""JSON-file-backed implementation of ProductRepository (the catalog)."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path, "products")

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> int:
        products = self._load()
        return max(products, default=0) + 1

    def get_by_id(self, product_id: int) -> Product | None:
        return self._load().get(product_id)

    def get_by_name(self, name: str) -> Product | None:
        for product in self._load().values():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        with self._file.locked():
            products = self._load()
            products[product.id] = product
            self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[int, Product]:
        with self._file.locked():
            raw = self._file.read()
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                price=Money(Decimal(item["price"]), item.get("currency", "USD")),
                description=item.get("description", ""),
                is_featured=item.get("is_featured", False),
                thumbnail_url=item.get("thumbnail_url", ""),
                image_url=item.get("image_url", ""),
            )
            for item in raw
        }

    def _persist(self, products: dict[int, Product]) -> None:
        self._file.write([
            {
                "id": p.id,
                "name": p.name,
                "description": p.description,
                "price": str(p.price.amount),
                "currency": p.price.currency,
                "is_featured": p.is_featured,
                "thumbnail_url": p.thumbnail_url,
                "image_url": p.image_url,
            }
            for p in sorted(products.values(), key=lambda p: p.id)
        ])
