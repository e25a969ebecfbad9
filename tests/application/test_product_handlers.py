"""Integration tests for the product catalog use cases."""

import pytest

from storefront.application.add_product import AddProductHandler
from storefront.application.show_product import (
    ListFeaturedProductsHandler,
    ShowProductHandler,
)
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.products.catalog_products_client import (
    CatalogProductsClient,
)
from tests.fakes import FakeProductRepository


def _repo() -> FakeProductRepository:
    return FakeProductRepository([
        Product(id=1, name="Widget", price=Money.of("15.00"), is_featured=True),
        Product(id=2, name="Gadget", price=Money.of("25.00")),
    ])


class TestAddProduct:

    def test_assigns_next_id(self):
        repo = _repo()
        dto = AddProductHandler(repo).handle("Lamp", "19.99", description="Bright")
        assert dto.id == 3
        assert dto.price == "$19.99"
        assert repo.get_by_id(3).description == "Bright"

    def test_first_product_gets_id_1(self):
        dto = AddProductHandler(FakeProductRepository()).handle("Lamp", "19.99")
        assert dto.id == 1

    def test_duplicate_name_rejected(self):
        with pytest.raises(ValidationError, match="already exists"):
            AddProductHandler(_repo()).handle("widget", "1.00")

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            AddProductHandler(_repo()).handle("  ", "1.00")

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            AddProductHandler(_repo()).handle("Freebie", "0")


class TestUpdateProduct:

    def test_price_changed(self):
        repo = _repo()
        UpdateProductHandler(repo).handle(1, "17.50")
        assert repo.get_by_id(1).price == Money.of("17.50")

    def test_returns_stored_product(self):
        dto = UpdateProductHandler(_repo()).handle(1, "29.9")
        assert dto.id == 1
        assert dto.name == "Widget"
        assert dto.price == "$29.90"

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError, match="not found"):
            UpdateProductHandler(_repo()).handle(42, "1.00")

    def test_zero_price_rejected(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            UpdateProductHandler(_repo()).handle(1, "0")


class TestProductQueries:

    def test_show_product(self):
        dto = ShowProductHandler(CatalogProductsClient(_repo())).handle(2)
        assert dto.name == "Gadget"
        assert not dto.is_featured

    def test_show_missing_product(self):
        with pytest.raises(EntityNotFoundError):
            ShowProductHandler(CatalogProductsClient(_repo())).handle(99)

    def test_featured(self):
        dtos = ListFeaturedProductsHandler(CatalogProductsClient(_repo())).handle()
        assert [d.name for d in dtos] == ["Widget"]
