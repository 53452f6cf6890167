"""Application service: operator-only commands.

Grammar (a leading ``/`` and a ``@botname`` suffix are tolerated)::

    list_orders
    view_order <id>
    set_status <id> <TOKEN>

Text that does not match exactly is not a command. Only the configured
operator identity may run commands; anybody else gets UnauthorizedError,
which the transport drops without answering.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from orderbot.application import messages
from orderbot.application.dto import OutboundMessage
from orderbot.application.show_order import ListOrdersHandler, ShowOrderHandler
from orderbot.domain.exceptions import EntityNotFoundError, UnauthorizedError
from orderbot.domain.model.order import Order
from orderbot.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)

_COMMAND_RE = re.compile(
    r"^/?(?P<name>list_orders|view_order|set_status)(?:@\w+)?"
    r"(?P<args>(?:\s+\S+)*)\s*$"
)
_ARITY = {"list_orders": 0, "view_order": 1, "set_status": 2}


@dataclass(frozen=True)
class OperatorCommand:
    name: str
    order_id: int | None = None
    status: str | None = None


@dataclass
class OperatorResult:
    reply: OutboundMessage
    changed_order: Order | None = None


def parse_command(text: str | None) -> OperatorCommand | None:
    """Parse operator text into a command, or None if it is not one."""
    match = _COMMAND_RE.match((text or "").strip())
    if match is None:
        return None
    name = match.group("name")
    args = match.group("args").split()
    if len(args) != _ARITY[name]:
        return None
    if name == "list_orders":
        return OperatorCommand(name)
    if not args[0].isdecimal():
        return None
    if name == "view_order":
        return OperatorCommand(name, order_id=int(args[0]))
    if not re.fullmatch(r"\w+", args[1]):
        return None
    return OperatorCommand(name, order_id=int(args[0]), status=args[1])


class OperatorCommandHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        operator_id: int,
        recent_limit: int = 50,
    ) -> None:
        self._order_repo = order_repo
        self._operator_id = operator_id
        self._recent_limit = recent_limit

    def authorize(self, caller_id: int) -> None:
        if caller_id != self._operator_id:
            raise UnauthorizedError(f"User {caller_id} is not the operator")

    def handle(self, caller_id: int, command: OperatorCommand) -> OperatorResult:
        """Run *command*; raises UnauthorizedError for anyone but the operator."""
        self.authorize(caller_id)

        if command.name == "list_orders":
            orders = ListOrdersHandler(self._order_repo, self._recent_limit).handle()
            reply = messages.orders_list(orders) if orders else messages.no_orders()
            return OperatorResult(reply=reply)

        if command.name == "view_order":
            try:
                dto = ShowOrderHandler(self._order_repo).handle(command.order_id)
            except EntityNotFoundError:
                return OperatorResult(reply=messages.order_not_found())
            return OperatorResult(reply=messages.order_detail(dto))

        return self._set_status(command.order_id, command.status)

    def _set_status(self, order_id: int, token: str) -> OperatorResult:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            return OperatorResult(reply=messages.order_not_found())
        previous = order.status
        order.set_status(token)
        self._order_repo.save(order)
        logger.info("Order #%s status %s -> %s", order.id, previous, order.status)
        return OperatorResult(reply=messages.status_updated(order), changed_order=order)
