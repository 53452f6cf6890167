"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from decimal import Decimal

from orderbot.domain.model.product import Product
from orderbot.domain.model.value_objects import DEFAULT_CURRENCY, Money
from orderbot.domain.repository.product_repository import ProductRepository
from orderbot.infrastructure.persistence.json_file import JsonFileStore


class JsonProductRepository(JsonFileStore, ProductRepository):

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        return self._load().get(product_id)

    def list_all(self) -> list[Product]:
        return sorted(self._load().values(), key=lambda p: p.id)

    def save(self, product: Product) -> None:
        products = self._load()
        products[product.id] = product
        self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[int, Product]:
        records = self._load_raw()
        with self._decoding():
            return self._decode(records)

    @staticmethod
    def _decode(records: list[dict]) -> dict[int, Product]:
        return {
            int(item["id"]): Product(
                id=int(item["id"]),
                name=item["name"],
                price=Money(Decimal(item["price"]), item.get("currency", DEFAULT_CURRENCY)),
                unit=item["unit"],
                stock=item.get("stock"),
                description=item.get("description"),
            )
            for item in records
        }

    def _persist(self, products: dict[int, Product]) -> None:
        self._persist_raw([
            {
                "id": p.id,
                "name": p.name,
                "price": str(p.price.amount),
                "currency": p.price.currency,
                "unit": p.unit,
                "stock": p.stock,
                "description": p.description,
            }
            for p in sorted(products.values(), key=lambda p: p.id)
        ])
