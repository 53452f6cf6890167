"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from orderbot.domain.exceptions import ValidationError
from orderbot.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("25000"))
        assert m.amount == Decimal("25000")
        assert m.currency == "Ar"

    def test_of_factory_from_string(self):
        assert Money.of("800").amount == Decimal("800")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("lots")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_zero_is_allowed(self):
        assert Money.zero().amount == Decimal("0")

    def test_addition(self):
        assert Money.of("50000") + Money.of("20000") == Money.of("70000")

    def test_multiplication_by_fractional_quantity(self):
        assert Money.of("350000") * Quantity.of("0.5") == Money.of("175000")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("10") * 1.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "Ar") + Money(Decimal("5"), "EUR")

    def test_str_formatting(self):
        assert str(Money.of("25000")) == "25000 Ar"
        assert str(Money.of("25000.00")) == "25000 Ar"
        assert str(Money.of("12.50")) == "12.5 Ar"

    def test_equal_amounts_with_different_exponents_compare_equal(self):
        assert Money.of("50000") == Money.of("50000.0")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    @pytest.mark.parametrize(
        "text, expected",
        [("2", "2"), ("10", "10"), ("0.5", "0.5"), ("0,5", "0.5"), (" 3 ", "3"), ("1,25", "1.25")],
    )
    def test_parse_valid(self, text, expected):
        assert Quantity.parse(text).value == Decimal(expected)

    @pytest.mark.parametrize("text", ["0", "0.0", "-1", "abc", "", "10 sacs", "1e3", "NaN", "1.2.3"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValidationError):
            Quantity.parse(text)

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(Decimal("0"))

    def test_int_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Quantity(3)

    def test_str(self):
        assert str(Quantity.of("2")) == "2"
        assert str(Quantity.of("0.50")) == "0.5"
