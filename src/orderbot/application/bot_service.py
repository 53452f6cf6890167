"""Application facade used by the chat transport.

Wires the session store, the checkout machine, the operator commands and
the notification dispatcher together. Each event of a user is handled
while holding that user's session lock, so events of one user are
applied one at a time while different users proceed concurrently.
"""

from __future__ import annotations

import logging

from orderbot.application import messages
from orderbot.application.checkout_machine import CheckoutMachine
from orderbot.application.dto import Sender
from orderbot.application.events import Event, event_from_payload, event_from_text
from orderbot.application.notifications import NotificationDispatcher
from orderbot.application.operator_commands import OperatorCommandHandler, parse_command
from orderbot.application.register_customer import RegisterCustomerHandler
from orderbot.domain.exceptions import PersistenceError, UnauthorizedError
from orderbot.domain.model.customer import Customer
from orderbot.domain.model.session import Session
from orderbot.domain.repository.session_store import SessionStore

logger = logging.getLogger(__name__)


class BotService:

    def __init__(
        self,
        sessions: SessionStore,
        machine: CheckoutMachine,
        operator: OperatorCommandHandler,
        dispatcher: NotificationDispatcher,
        register: RegisterCustomerHandler,
    ) -> None:
        self._sessions = sessions
        self._machine = machine
        self._operator = operator
        self._dispatcher = dispatcher
        self._register = register

    async def start(self, sender: Sender) -> None:
        """Greet the user and remember them."""
        try:
            self._register.handle(sender)
        except PersistenceError:
            logger.exception("Could not record customer %s", sender.user_id)
        await self._dispatcher.notify_customer(sender.user_id, messages.welcome(sender.first_name))

    async def handle_text(self, sender: Sender, text: str | None) -> None:
        command = parse_command(text)
        is_operator = sender.user_id == self._dispatcher.operator_id
        if command is not None and (is_operator or (text or "").lstrip().startswith("/")):
            await self._run_operator_command(sender, command)
            return
        await self.handle_event(sender, event_from_text(text))

    async def handle_payload(self, sender: Sender, payload: str | None) -> None:
        event = event_from_payload(payload)
        if event is None:
            logger.debug("Ignoring unknown payload %r from %s", payload, sender.user_id)
            return
        await self.handle_event(sender, event)

    async def handle_event(self, sender: Sender, event: Event) -> None:
        user_id = sender.user_id
        async with self._sessions.lock(user_id):
            session = self._sessions.get(user_id) or Session(user_id=user_id)
            transition = self._machine.handle(session, event)
            if transition.session.is_blank:
                self._sessions.delete(user_id)
            else:
                self._sessions.put(transition.session)

            for reply in transition.replies:
                await self._dispatcher.notify_customer(user_id, reply)

        if transition.placed_order is not None:
            customer = Customer(
                user_id=user_id, name=sender.full_name, username=sender.username
            )
            await self._dispatcher.notify_operator(transition.placed_order, customer.display)

    async def _run_operator_command(self, sender: Sender, command) -> None:
        try:
            result = self._operator.handle(sender.user_id, command)
        except UnauthorizedError:
            logger.debug("Dropped %s from non-operator %s", command.name, sender.user_id)
            return
        except PersistenceError:
            logger.exception("Operator command %s failed", command.name)
            await self._dispatcher.notify_customer(sender.user_id, messages.generic_failure())
            return

        await self._dispatcher.notify_customer(sender.user_id, result.reply)
        if result.changed_order is not None:
            await self._dispatcher.notify_status_change(result.changed_order)
