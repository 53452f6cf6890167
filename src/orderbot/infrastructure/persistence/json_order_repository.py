"""JSON-file-backed implementation of OrderRepository.

An order is one JSON document with its items embedded, so saving the
header and its items is a single atomic file replacement.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from orderbot.domain.model.delivery import DeliveryType
from orderbot.domain.model.order import Order, OrderItem
from orderbot.domain.model.value_objects import DEFAULT_CURRENCY, Money, Quantity
from orderbot.domain.repository.order_repository import OrderRepository
from orderbot.infrastructure.persistence.json_file import JsonFileStore


class JsonOrderRepository(JsonFileStore, OrderRepository):

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        records = self._load_raw()
        with self._decoding():
            for raw in records:
                if raw["id"] == order_id:
                    return self._to_domain(raw)
        return None

    def list_recent(self, limit: int) -> list[Order]:
        records = self._load_raw()
        with self._decoding():
            orders = [self._to_domain(raw) for raw in records]
        orders.sort(key=lambda o: (o.created_at, o.id), reverse=True)
        return orders[:limit]

    def save(self, order: Order) -> None:
        orders = self._load_raw()

        with self._decoding():
            if order.id is None:
                new_id = self._next_id(orders)
            else:
                new_id = order.id
            raw_order = self._to_raw(order, new_id)

            # Upsert: replace if exists, otherwise append
            for i, raw in enumerate(orders):
                if raw["id"] == new_id:
                    orders[i] = raw_order
                    break
            else:
                orders.append(raw_order)

        self._persist_raw(orders)
        order.id = new_id

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _next_id(orders: list[dict]) -> int:
        return max((o["id"] for o in orders), default=0) + 1

    @staticmethod
    def _to_raw(order: Order, order_id: int) -> dict:
        return {
            "id": order_id,
            "user_id": order.user_id,
            "status": order.status,
            "total": str(order.total.amount),
            "currency": order.total.currency,
            "delivery_type": order.delivery_type.value,
            "address": order.address,
            "phone": order.phone,
            "created_at": order.created_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "product_name": item.product_name,
                    "unit": item.unit,
                    "quantity": str(item.quantity.value),
                    "unit_price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", DEFAULT_CURRENCY)
        items = [
            OrderItem(
                product_id=i["product_id"],
                product_name=i["product_name"],
                unit=i["unit"],
                quantity=Quantity(Decimal(i["quantity"])),
                unit_price=Money(Decimal(i["unit_price"]), currency),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            user_id=raw["user_id"],
            items=items,
            total=Money(Decimal(raw["total"]), currency),
            delivery_type=DeliveryType(raw["delivery_type"]),
            address=raw["address"],
            phone=raw["phone"],
            status=raw["status"],
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
