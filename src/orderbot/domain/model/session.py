"""Session — one user's in-progress cart and checkout.

A Session lives for exactly one checkout attempt. The ``stage`` field is
the only source of truth for where the user is in the funnel; the
transition methods below keep the optional fields consistent with it:

- ``pending_product_id`` is set only in AWAITING_QUANTITY
- ``delivery_type`` is set only from AWAITING_ADDRESS onwards
- ``total`` is set only in AWAITING_CONFIRMATION
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from orderbot.domain.exceptions import ValidationError
from orderbot.domain.model.delivery import DeliveryType
from orderbot.domain.model.value_objects import Money, Quantity


class Stage(Enum):
    IDLE = "IDLE"
    AWAITING_QUANTITY = "AWAITING_QUANTITY"
    AWAITING_DELIVERY_CHOICE = "AWAITING_DELIVERY_CHOICE"
    AWAITING_ADDRESS = "AWAITING_ADDRESS"
    AWAITING_PHONE = "AWAITING_PHONE"
    AWAITING_CONFIRMATION = "AWAITING_CONFIRMATION"


CHECKOUT_STAGES = frozenset({
    Stage.AWAITING_DELIVERY_CHOICE,
    Stage.AWAITING_ADDRESS,
    Stage.AWAITING_PHONE,
    Stage.AWAITING_CONFIRMATION,
})


@dataclass(frozen=True)
class CartLine:
    product_id: int
    quantity: Quantity


@dataclass
class Session:
    user_id: int
    lines: list[CartLine] = field(default_factory=list)
    stage: Stage = Stage.IDLE
    pending_product_id: int | None = None
    delivery_type: DeliveryType | None = None
    address: str | None = None
    phone: str | None = None
    total: Money | None = None

    # --- Queries --------------------------------------------------------------

    @property
    def is_blank(self) -> bool:
        """True when the session carries nothing worth keeping."""
        return self.stage is Stage.IDLE and not self.lines

    @property
    def in_checkout(self) -> bool:
        return self.stage in CHECKOUT_STAGES

    def snapshot(self) -> Session:
        """Independent copy; lines are immutable so a shallow list copy is enough."""
        return replace(self, lines=list(self.lines))

    # --- Cart building --------------------------------------------------------

    def select_product(self, product_id: int) -> None:
        if self.in_checkout:
            raise ValidationError("Cannot change the cart during checkout")
        self.pending_product_id = product_id
        self.stage = Stage.AWAITING_QUANTITY

    def add_pending(self, quantity: Quantity) -> CartLine:
        if self.stage is not Stage.AWAITING_QUANTITY or self.pending_product_id is None:
            raise ValidationError("No product is waiting for a quantity")
        line = CartLine(product_id=self.pending_product_id, quantity=quantity)
        self.lines.append(line)
        self.pending_product_id = None
        self.stage = Stage.IDLE
        return line

    def abandon_selection(self) -> None:
        if self.stage is Stage.AWAITING_QUANTITY:
            self.pending_product_id = None
            self.stage = Stage.IDLE

    def drop_products(self, product_ids: set[int]) -> None:
        """Remove every line for the given products; invalidates any total."""
        self.lines = [line for line in self.lines if line.product_id not in product_ids]
        self.total = None

    # --- Checkout funnel ------------------------------------------------------

    def begin_checkout(self) -> None:
        if not self.lines:
            raise ValidationError("Cart is empty")
        self.pending_product_id = None
        self.delivery_type = None
        self.address = None
        self.phone = None
        self.total = None
        self.stage = Stage.AWAITING_DELIVERY_CHOICE

    def choose_delivery(self, delivery_type: DeliveryType) -> None:
        self._expect(Stage.AWAITING_DELIVERY_CHOICE)
        self.delivery_type = delivery_type
        self.stage = Stage.AWAITING_ADDRESS

    def set_address(self, address: str) -> None:
        self._expect(Stage.AWAITING_ADDRESS)
        self.address = _required(address, "Address")
        self.stage = Stage.AWAITING_PHONE

    def set_phone(self, phone: str) -> None:
        """Record the phone; the stage moves on only once a total is offered."""
        self._expect(Stage.AWAITING_PHONE)
        self.phone = _required(phone, "Phone number")

    def offer_confirmation(self, total: Money) -> None:
        if self.stage not in (Stage.AWAITING_PHONE, Stage.AWAITING_CONFIRMATION):
            raise ValidationError(f"Cannot offer confirmation from {self.stage.value}")
        if self.phone is None:
            raise ValidationError("Phone number is required")
        self.total = total
        self.stage = Stage.AWAITING_CONFIRMATION

    def clear(self) -> None:
        self.lines = []
        self.stage = Stage.IDLE
        self.pending_product_id = None
        self.delivery_type = None
        self.address = None
        self.phone = None
        self.total = None

    # --- Internal helpers -----------------------------------------------------

    def _expect(self, stage: Stage) -> None:
        if self.stage is not stage:
            raise ValidationError(
                f"Expected stage {stage.value}, session is in {self.stage.value}"
            )


def _required(text: str, what: str) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValidationError(f"{what} is required")
    return cleaned
