"""Application service: Add Product use case."""

from __future__ import annotations

from orderbot.domain.exceptions import ValidationError
from orderbot.domain.model.product import Product
from orderbot.domain.model.value_objects import Money
from orderbot.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository, currency: str) -> None:
        self._product_repo = product_repo
        self._currency = currency

    def handle(
        self,
        name: str,
        price: str,
        unit: str,
        stock: int | None = None,
        description: str | None = None,
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")

        all_products = self._product_repo.list_all()
        if any(p.name.lower() == name.strip().lower() for p in all_products):
            raise ValidationError(f"Product '{name}' already exists")

        # Auto-assign ID based on existing products
        next_id = max((p.id for p in all_products), default=0) + 1

        product = Product(
            id=next_id,
            name=name.strip(),
            price=Money.of(price, self._currency),
            unit=unit.strip(),
            stock=stock,
            description=description,
        )
        self._product_repo.save(product)
        return product
