"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the transport, CLI and application layers
without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Sender:
    """Input: who sent an inbound event."""

    user_id: int
    first_name: str = ""
    last_name: str = ""
    username: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class InlineButton:
    label: str
    payload: str


@dataclass(frozen=True)
class OutboundMessage:
    """Output: one message to send, with at most one kind of keyboard.

    ``keyboard`` is a reply keyboard (rows of labels), ``buttons`` an
    inline button set (one button per row), ``remove_keyboard`` hides a
    previously shown reply keyboard.
    """

    text: str
    keyboard: tuple[tuple[str, ...], ...] | None = None
    buttons: tuple[InlineButton, ...] | None = None
    remove_keyboard: bool = False
    html: bool = False


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order item as displayed to the operator."""

    product_name: str
    unit: str
    quantity: str
    unit_price: str  # formatted, e.g. "25000 Ar"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the operator."""

    id: int
    user_id: int
    status: str
    delivery_type: str
    address: str
    phone: str
    total: str
    created_at: str
    items: list[OrderItemDTO] = field(default_factory=list)
