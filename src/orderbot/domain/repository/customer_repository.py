"""Abstract repository for Customer records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderbot.domain.model.customer import Customer


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: int) -> Customer | None:
        """Return a customer by chat identity, or None if unknown."""

    @abstractmethod
    def save(self, customer: Customer) -> None:
        """Persist a new or updated customer."""
