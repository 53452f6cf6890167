"""Tests for the catalog administration use cases."""

import pytest

from orderbot.application.add_product import AddProductHandler
from orderbot.application.seed_catalog import STARTER_CATALOG, SeedCatalogHandler
from orderbot.application.update_product import UpdateProductHandler
from orderbot.domain.exceptions import EntityNotFoundError, ValidationError
from orderbot.domain.model.product import Product
from orderbot.domain.model.value_objects import Money
from tests.fakes import FakeProductRepository


class TestAddProduct:

    def test_assigns_next_id(self):
        repo = FakeProductRepository([
            Product(id=4, name="Moellon", price=Money.of("1200"), unit="pièce"),
        ])
        product = AddProductHandler(repo, "Ar").handle("Sable", "60000", "m3", stock=50)
        assert product.id == 5
        assert repo.get_by_id(5).price == Money.of("60000")
        assert product.stock == 50

    def test_duplicate_name_rejected(self):
        repo = FakeProductRepository([
            Product(id=1, name="Moellon", price=Money.of("1200"), unit="pièce"),
        ])
        with pytest.raises(ValidationError, match="already exists"):
            AddProductHandler(repo, "Ar").handle(" moellon ", "1000", "pièce")

    def test_unit_required(self):
        with pytest.raises(ValidationError, match="unit"):
            AddProductHandler(FakeProductRepository(), "Ar").handle("Sable", "1", " ")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            AddProductHandler(FakeProductRepository(), "Ar").handle("Sable", "-5", "m3")


class TestUpdateProduct:

    def test_changes_price(self):
        repo = FakeProductRepository([
            Product(id=5, name="Ciment (sac 50kg)", price=Money.of("25000"), unit="sac"),
        ])
        product = UpdateProductHandler(repo).handle(5, "26000")
        assert product.price == Money.of("26000")

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError):
            UpdateProductHandler(FakeProductRepository()).handle(9, "1")


class TestSeedCatalog:

    def test_seeds_empty_catalog(self):
        repo = FakeProductRepository()
        added = SeedCatalogHandler(repo, "Ar").handle()
        assert len(added) == len(STARTER_CATALOG)
        cement = repo.get_by_id(5)
        assert cement.name == "Ciment (sac 50kg)"
        assert cement.price == Money.of("25000")
        assert cement.unit == "sac"

    def test_leaves_existing_catalog_alone(self):
        repo = FakeProductRepository([
            Product(id=1, name="Moellon", price=Money.of("1200"), unit="pièce"),
        ])
        assert SeedCatalogHandler(repo, "Ar").handle() == []
        assert len(repo.list_all()) == 1
