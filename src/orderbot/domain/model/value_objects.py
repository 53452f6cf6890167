"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from orderbot.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "Ar"

# Whole reply must be a number; comma or dot as decimal separator.
_QUANTITY_RE = re.compile(r"^(\d+(?:[.,]\d*)?|[.,]\d+)$")


def _plain(value: Decimal) -> str:
    """Render a Decimal without exponent or useless trailing zeros."""
    if value == value.to_integral_value():
        return f"{value:.0f}"
    return f"{value.normalize():f}"


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: Quantity | int) -> Money:
        if isinstance(factor, Quantity):
            return Money(self.amount * factor.value, self.currency)
        if isinstance(factor, int) and not isinstance(factor, bool):
            return Money(self.amount * factor, self.currency)
        raise TypeError(
            f"Can only multiply Money by Quantity or int, got {type(factor).__name__}"
        )

    # --- Display --------------------------------------------------------------

    @property
    def number(self) -> str:
        """The bare amount, e.g. ``25000`` or ``12.5``."""
        return _plain(self.amount)

    def __str__(self) -> str:
        return f"{self.number} {self.currency}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0"), currency)

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A strictly positive quantity.

    Fractional values are allowed for volume-priced units (0.5 m3).
    """

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise ValidationError(
                f"Quantity must be a Decimal, got {type(self.value).__name__}"
            )
        if not self.value.is_finite() or self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return _plain(self.value)

    @staticmethod
    def of(value: str | int | Decimal) -> Quantity:
        try:
            return Quantity(Decimal(str(value)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid quantity: {value!r}") from exc

    @staticmethod
    def parse(text: str) -> Quantity:
        """Parse a chat reply such as ``2``, ``0.5`` or ``0,5``."""
        cleaned = (text or "").strip()
        if not _QUANTITY_RE.match(cleaned):
            raise ValidationError(f"Invalid quantity: {text!r}")
        return Quantity.of(cleaned.replace(",", "."))
