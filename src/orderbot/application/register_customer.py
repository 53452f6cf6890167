"""Application service: Register Customer use case."""

from __future__ import annotations

from orderbot.application.dto import Sender
from orderbot.domain.model.customer import Customer
from orderbot.domain.repository.customer_repository import CustomerRepository


class RegisterCustomerHandler:

    def __init__(self, customer_repo: CustomerRepository) -> None:
        self._customer_repo = customer_repo

    def handle(self, sender: Sender) -> Customer:
        """Record a customer the first time they talk to the bot.

        Known customers are returned untouched.
        """
        existing = self._customer_repo.get_by_id(sender.user_id)
        if existing is not None:
            return existing
        customer = Customer(
            user_id=sender.user_id,
            name=sender.full_name,
            username=sender.username,
        )
        self._customer_repo.save(customer)
        return customer
