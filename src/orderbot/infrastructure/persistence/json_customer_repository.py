"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

from orderbot.domain.model.customer import Customer
from orderbot.domain.repository.customer_repository import CustomerRepository
from orderbot.infrastructure.persistence.json_file import JsonFileStore


class JsonCustomerRepository(JsonFileStore, CustomerRepository):

    def get_by_id(self, user_id: int) -> Customer | None:
        records = self._load_raw()
        with self._decoding():
            for raw in records:
                if raw["user_id"] == user_id:
                    return self._to_domain(raw)
        return None

    def save(self, customer: Customer) -> None:
        records = self._load_raw()
        with self._decoding():
            for i, raw in enumerate(records):
                if raw["user_id"] == customer.user_id:
                    records[i] = self._to_raw(customer)
                    break
            else:
                records.append(self._to_raw(customer))
        self._persist_raw(records)

    @staticmethod
    def _to_raw(customer: Customer) -> dict:
        return {
            "user_id": customer.user_id,
            "name": customer.name,
            "username": customer.username,
            "phone": customer.phone,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            user_id=raw["user_id"],
            name=raw.get("name", ""),
            username=raw.get("username", ""),
            phone=raw.get("phone"),
        )
