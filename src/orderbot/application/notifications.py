"""Notification Dispatcher: routes outbound messages to the transport.

Every send is fire-and-forget from the caller's point of view. A send is
bounded by a timeout, and any failure is logged and dropped: by the time
an operator summary or status notice goes out, the order is already
committed and nothing here may undo or retry that.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod

from orderbot.application import messages
from orderbot.application.dto import OutboundMessage
from orderbot.domain.model.order import Order

logger = logging.getLogger(__name__)


class MessageSender(ABC):
    """Port to the chat transport."""

    @abstractmethod
    async def send(self, chat_id: int, message: OutboundMessage) -> None:
        """Deliver *message* to *chat_id*; raise on failure."""


class NotificationDispatcher:

    def __init__(
        self,
        sender: MessageSender,
        operator_id: int,
        timeout: float = 10.0,
    ) -> None:
        self._sender = sender
        self._operator_id = operator_id
        self._timeout = timeout

    @property
    def operator_id(self) -> int:
        return self._operator_id

    async def notify_customer(self, user_id: int, message: OutboundMessage | str) -> bool:
        if isinstance(message, str):
            message = OutboundMessage(text=message)
        return await self._deliver(user_id, message, "customer reply")

    async def notify_operator(self, order: Order, customer_display: str) -> bool:
        return await self._deliver(
            self._operator_id,
            messages.new_order(order, customer_display),
            f"operator summary for order #{order.id}",
        )

    async def notify_status_change(self, order: Order) -> bool:
        return await self._deliver(
            order.user_id,
            messages.status_changed(order),
            f"status notice for order #{order.id}",
        )

    async def _deliver(self, chat_id: int, message: OutboundMessage, what: str) -> bool:
        try:
            await asyncio.wait_for(self._sender.send(chat_id, message), self._timeout)
        except asyncio.TimeoutError:
            logger.error("Timed out after %ss sending %s to %s", self._timeout, what, chat_id)
            return False
        except Exception:
            logger.exception("Failed sending %s to %s", what, chat_id)
            return False
        return True
