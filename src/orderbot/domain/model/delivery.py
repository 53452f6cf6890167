"""Delivery options offered at checkout."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from orderbot.domain.model.value_objects import Money


class DeliveryType(Enum):
    STANDARD = "STANDARD"
    EXPRESS = "EXPRESS"


@dataclass(frozen=True)
class DeliveryPolicy:
    """The two priced delivery choices.

    Standard is always free; Express carries a fixed surcharge.
    """

    express_surcharge: Money

    def surcharge_for(self, delivery_type: DeliveryType) -> Money:
        if delivery_type is DeliveryType.EXPRESS:
            return self.express_surcharge
        return Money.zero(self.express_surcharge.currency)

    def label_for(self, delivery_type: DeliveryType) -> str:
        surcharge = self.surcharge_for(delivery_type)
        if delivery_type is DeliveryType.EXPRESS:
            return f"Express (24–48h) — {surcharge}"
        return f"Standard (2–4 jours) — {surcharge}"

    @property
    def labels(self) -> list[str]:
        return [self.label_for(t) for t in DeliveryType]

    def match(self, text: str) -> DeliveryType | None:
        """Resolve a reply to a delivery type, or None when it names neither.

        An exact label wins; otherwise the reply must mention "express" or
        "standard" (case-insensitive). Nothing defaults silently.
        """
        cleaned = (text or "").strip()
        for delivery_type in DeliveryType:
            if cleaned == self.label_for(delivery_type):
                return delivery_type
        lowered = cleaned.lower()
        if "express" in lowered:
            return DeliveryType.EXPRESS
        if "standard" in lowered:
            return DeliveryType.STANDARD
        return None
