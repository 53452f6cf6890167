"""Inbound conversation events.

The transport turns every update into exactly one of these before the
state machine sees it: menu labels and confirm/cancel labels become
their events, inline product buttons become ProductSelected, anything
else is FreeText.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from orderbot.application import messages


class MenuAction(Enum):
    BROWSE = "BROWSE"
    VIEW_CART = "VIEW_CART"
    CLEAR_CART = "CLEAR_CART"
    CHECKOUT = "CHECKOUT"
    SUPPORT = "SUPPORT"
    BACK = "BACK"


@dataclass(frozen=True)
class FreeText:
    text: str


@dataclass(frozen=True)
class MenuTapped:
    action: MenuAction


@dataclass(frozen=True)
class ProductSelected:
    product_id: int


@dataclass(frozen=True)
class ConfirmTapped:
    pass


@dataclass(frozen=True)
class CancelTapped:
    pass


Event = Union[FreeText, MenuTapped, ProductSelected, ConfirmTapped, CancelTapped]

PRODUCT_PAYLOAD_PREFIX = messages.PRODUCT_PAYLOAD_PREFIX

_LABEL_EVENTS: dict[str, Event] = {
    messages.BROWSE_LABEL: MenuTapped(MenuAction.BROWSE),
    messages.ADD_PRODUCT_LABEL: MenuTapped(MenuAction.BROWSE),
    messages.VIEW_CART_LABEL: MenuTapped(MenuAction.VIEW_CART),
    messages.CLEAR_CART_LABEL: MenuTapped(MenuAction.CLEAR_CART),
    messages.CHECKOUT_LABEL: MenuTapped(MenuAction.CHECKOUT),
    messages.SUPPORT_LABEL: MenuTapped(MenuAction.SUPPORT),
    messages.BACK_LABEL: MenuTapped(MenuAction.BACK),
    messages.CONFIRM_LABEL: ConfirmTapped(),
    messages.CANCEL_LABEL: CancelTapped(),
}


def event_from_text(text: str | None) -> Event:
    """Map a text message to its event; unknown text stays FreeText."""
    cleaned = (text or "").strip()
    return _LABEL_EVENTS.get(cleaned, FreeText(cleaned))


def event_from_payload(payload: str | None) -> ProductSelected | None:
    """Decode an inline button payload such as ``p_5``; None if foreign."""
    if not payload or not payload.startswith(PRODUCT_PAYLOAD_PREFIX):
        return None
    raw_id = payload[len(PRODUCT_PAYLOAD_PREFIX):]
    if not raw_id.isdecimal():
        return None
    return ProductSelected(int(raw_id))
