"""Customer record: who talked to the bot."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Customer:
    user_id: int
    name: str
    username: str = ""
    phone: str | None = None

    @property
    def display(self) -> str:
        """Identity shown to the operator, e.g. ``Rakoto Jean (@rjean)``."""
        handle = f"@{self.username}" if self.username else "@—"
        name = self.name or "Client"
        return f"{name} ({handle})"
