"""Unit tests for the Order aggregate and its business rules."""

from decimal import Decimal

import pytest

from orderbot.domain.exceptions import ValidationError
from orderbot.domain.model.delivery import DeliveryType
from orderbot.domain.model.order import NEW_STATUS, Order, OrderItem, normalize_status
from orderbot.domain.model.value_objects import Money, Quantity


def _make_item(qty: str = "2", price: str = "25000", product_id: int = 5) -> OrderItem:
    """Helper to build a valid order item."""
    return OrderItem(
        product_id=product_id,
        product_name="Ciment (sac 50kg)",
        unit="sac",
        quantity=Quantity.of(qty),
        unit_price=Money.of(price),
    )


def _create(items=None, surcharge="0", address="Lot 12 Analakely", phone="0341234567"):
    return Order.create(
        user_id=42,
        items=[_make_item()] if items is None else items,
        delivery_type=DeliveryType.STANDARD,
        surcharge=Money.of(surcharge),
        address=address,
        phone=phone,
    )


class TestOrderCreation:

    def test_happy_path(self):
        order = _create()
        assert order.user_id == 42
        assert order.status == NEW_STATUS
        assert order.total == Money.of("50000")
        assert order.id is None  # assigned by repository

    def test_total_includes_surcharge(self):
        order = _create(surcharge="20000")
        assert order.total == Money.of("70000")

    def test_fractional_quantity_total(self):
        order = _create(items=[_make_item(qty="0.5", price="350000")])
        assert order.total == Money.of("175000")

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            _create(items=[])

    def test_blank_address_rejected(self):
        with pytest.raises(ValidationError, match="address"):
            _create(address="   ")

    def test_blank_phone_rejected(self):
        with pytest.raises(ValidationError, match="Phone"):
            _create(phone="")

    def test_address_and_phone_are_trimmed(self):
        order = _create(address="  Lot 12  ", phone=" 034 ")
        assert order.address == "Lot 12"
        assert order.phone == "034"


class TestOrderStatus:

    def test_set_status_uppercases(self):
        order = _create()
        assert order.set_status("livré") == "LIVRÉ"
        assert order.status == "LIVRÉ"

    def test_open_vocabulary(self):
        assert normalize_status("en_cours") == "EN_COURS"
        assert normalize_status("whatever") == "WHATEVER"

    @pytest.mark.parametrize("token", ["", "  ", "two words", "bad-token"])
    def test_invalid_tokens_rejected(self, token):
        with pytest.raises(ValidationError, match="Invalid status"):
            normalize_status(token)


class TestOrderItem:

    def test_line_total_calculation(self):
        assert _make_item(qty="3", price="800").line_total == Money.of("2400")

    def test_price_is_snapshot(self):
        item = _make_item(price="25000")
        assert item.unit_price.amount == Decimal("25000")
