"""Order aggregate — the durable result of a confirmed checkout.

The Order is an aggregate root that owns its items. Items and totals are
fixed at creation; only ``status`` changes afterwards, and only through
the operator pathway.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

from orderbot.domain.exceptions import ValidationError
from orderbot.domain.model.delivery import DeliveryType
from orderbot.domain.model.value_objects import Money, Quantity

NEW_STATUS = "NEW"

# Any single word; accented letters allowed (LIVRÉ, ANNULÉ).
_STATUS_RE = re.compile(r"^\w+$")


def normalize_status(token: str) -> str:
    """Upper-case a status token; the vocabulary is open."""
    cleaned = (token or "").strip().upper()
    if not _STATUS_RE.match(cleaned):
        raise ValidationError(f"Invalid status token: {token!r}")
    return cleaned


@dataclass(frozen=True)
class OrderItem:
    """Captures the price of a product at confirmation time.

    ``product_name`` and ``unit`` are kept with the price so an order
    still reads the same after the catalog changes.
    """

    product_id: int
    product_name: str
    unit: str
    quantity: Quantity
    unit_price: Money  # locked at confirmation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@dataclass
class Order:
    """Aggregate root for confirmed orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    user_id: int
    items: list[OrderItem]
    total: Money
    delivery_type: DeliveryType
    address: str
    phone: str
    status: str = NEW_STATUS
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        user_id: int,
        items: list[OrderItem],
        delivery_type: DeliveryType,
        surcharge: Money,
        address: str,
        phone: str,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not items:
            raise ValidationError("Order must contain at least one item")
        if not address or not address.strip():
            raise ValidationError("Delivery address is required")
        if not phone or not phone.strip():
            raise ValidationError("Phone number is required")

        total = surcharge
        for item in items:
            total = total + item.line_total

        return Order(
            id=None,
            user_id=user_id,
            items=list(items),
            total=total,
            delivery_type=delivery_type,
            address=address.strip(),
            phone=phone.strip(),
        )

    # --- State transitions ----------------------------------------------------

    def set_status(self, token: str) -> str:
        """Replace the status with the normalized token and return it."""
        self.status = normalize_status(token)
        return self.status

