"""Product aggregate.

Products live independently of carts and orders. They are administered
outside the conversation: prices change, products are added and removed
from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderbot.domain.exceptions import ValidationError
from orderbot.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    ``stock`` is informational only; ``None`` means unlimited.
    """

    id: int
    name: str
    price: Money
    unit: str
    stock: int | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
        if not self.unit or not self.unit.strip():
            raise ValidationError("Product unit is required")
        if self.stock is not None and self.stock < 0:
            raise ValidationError("Product stock cannot be negative")

    @property
    def label(self) -> str:
        """Catalog button text, e.g. ``Ciment (sac 50kg) — 25000 Ar / sac``."""
        return f"{self.name} — {self.price} / {self.unit}"

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because order items
        capture a price snapshot at confirmation time.
        """
        self.price = new_price
