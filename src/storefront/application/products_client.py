"""Product Lookup Client interface.

The storefront never reads the catalog store directly; it asks a
ProductsClient, which may be a remote catalog service or the local
catalog. A product that no longer exists is reported as ``None``, not
as an error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.product import Product


class ProductsClient(ABC):

    @abstractmethod
    def get_product(self, product_id: int) -> Product | None:
        """Return the current product record, or None if it does not exist.

        Raises ProductLookupError when the catalog cannot be reached.
        """

    @abstractmethod
    def get_featured_products(self) -> list[Product]:
        """Return the products flagged as featured."""
