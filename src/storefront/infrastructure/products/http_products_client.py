"""ProductsClient talking to a remote catalog service over HTTP.

The catalog answers ``GET api/products/{id}`` with a product document or
404, and ``GET api/products/featured`` with a list of documents. Field
names are matched case-insensitively (``isFeatured``, ``IsFeatured`` and
``isfeatured`` are the same field).
"""

from __future__ import annotations

from decimal import Decimal

import requests
import structlog

from storefront.application.products_client import ProductsClient
from storefront.domain.exceptions import DomainException, ProductLookupError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money

logger = structlog.get_logger(__name__)


class HttpProductsClient(ProductsClient):

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def get_product(self, product_id: int) -> Product | None:
        response = self._get(f"/api/products/{product_id}")
        if response.status_code == 404:
            logger.debug("product_not_found", product_id=product_id)
            return None
        return self._to_domain(self._decode(response))

    def get_featured_products(self) -> list[Product]:
        payload = self._decode(self._get("/api/products/featured"))
        if not isinstance(payload, list):
            raise ProductLookupError("Featured products response is not a list")
        return [self._to_domain(raw) for raw in payload]

    # --- HTTP helpers ---------------------------------------------------------

    def _get(self, path: str) -> requests.Response:
        url = self._base_url + path
        try:
            return self._session.get(
                url, timeout=self._timeout, headers={"Accept": "application/json"}
            )
        except requests.RequestException as exc:
            raise ProductLookupError(f"GET {url} failed: {exc}") from exc

    @staticmethod
    def _decode(response: requests.Response):
        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            raise ProductLookupError(f"Catalog returned {response.status_code}") from exc
        try:
            return response.json(parse_float=Decimal)
        except ValueError as exc:
            raise ProductLookupError("Catalog returned a body that is not JSON") from exc

    @staticmethod
    def _to_domain(raw) -> Product:
        if not isinstance(raw, dict):
            raise ProductLookupError("Product document is not a JSON object")
        fields = {str(key).lower(): value for key, value in raw.items()}
        is_featured = fields.get("isfeatured", False)
        if not isinstance(is_featured, bool):
            raise ProductLookupError(
                f"Malformed product document: isFeatured must be a boolean, got {is_featured!r}"
            )
        try:
            return Product(
                id=int(fields["id"]),
                name=fields["name"],
                price=Money.of(fields["price"]),
                description=fields.get("description") or "",
                is_featured=is_featured,
                thumbnail_url=fields.get("thumbnailurl") or "",
                image_url=fields.get("imageurl") or "",
            )
        except (KeyError, TypeError, ValueError, DomainException) as exc:
            raise ProductLookupError(f"Malformed product document: {exc}") from exc
