"""Application service: Seed Catalog use case.

Fills an empty catalog with the starter building-materials range.
"""

from __future__ import annotations

from orderbot.application.add_product import AddProductHandler
from orderbot.domain.model.product import Product
from orderbot.domain.repository.product_repository import ProductRepository

STARTER_CATALOG = [
    ("Brique pleine", "800", "pièce", 10000, "Brique standard 20x10x5"),
    ("Moellon", "1200", "pièce", 5000, "Moellon pour mur"),
    ("Gravillon (m3)", "350000", "m3", 200, "Gravillon 0-10mm"),
    ("Fer Ø10 (par bar)", "15000", "barre", 1000, "Fer rond Ø10, 6m"),
    ("Ciment (sac 50kg)", "25000", "sac", 2000, "Ciment OPC 50kg"),
]


class SeedCatalogHandler:

    def __init__(self, product_repo: ProductRepository, currency: str) -> None:
        self._product_repo = product_repo
        self._add = AddProductHandler(product_repo, currency)

    def handle(self) -> list[Product]:
        """Add the starter products; does nothing if the catalog has any product."""
        if self._product_repo.list_all():
            return []
        return [
            self._add.handle(name, price, unit, stock, description)
            for name, price, unit, stock, description in STARTER_CATALOG
        ]
