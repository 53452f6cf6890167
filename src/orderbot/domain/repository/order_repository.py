"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderbot.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_recent(self, limit: int) -> list[Order]:
        """Return at most *limit* orders, most recent first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order, header and items in one write.

        Assigns ``order.id`` when it is None.
        """
