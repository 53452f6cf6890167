"""Application service: Update Product use case."""

from __future__ import annotations

from orderbot.domain.exceptions import EntityNotFoundError
from orderbot.domain.model.product import Product
from orderbot.domain.model.value_objects import Money
from orderbot.domain.repository.product_repository import ProductRepository


class UpdateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: int, new_price: str) -> Product:
        """Update a product's price.

        This does NOT affect any existing orders: their items captured a
        price snapshot at confirmation time. Carts are priced afresh.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        product.update_price(Money.of(new_price, product.price.currency))
        self._product_repo.save(product)
        return product
