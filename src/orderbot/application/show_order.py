"""Application service: Show Order / List Orders use cases (queries)."""

from __future__ import annotations

from orderbot.application.dto import OrderDTO, OrderItemDTO
from orderbot.domain.exceptions import EntityNotFoundError
from orderbot.domain.model.order import Order
from orderbot.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return to_dto(order)


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository, limit: int = 50) -> None:
        self._order_repo = order_repo
        self._limit = limit

    def handle(self) -> list[OrderDTO]:
        return [to_dto(order) for order in self._order_repo.list_recent(self._limit)]


def to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status,
        delivery_type=order.delivery_type.value,
        address=order.address,
        phone=order.phone,
        total=str(order.total),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        items=[
            OrderItemDTO(
                product_name=item.product_name,
                unit=item.unit,
                quantity=str(item.quantity),
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
    )
