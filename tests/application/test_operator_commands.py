"""Tests for operator command parsing and execution."""

import pytest

from orderbot.application.operator_commands import (
    OperatorCommand,
    OperatorCommandHandler,
    parse_command,
)
from orderbot.domain.exceptions import UnauthorizedError
from orderbot.domain.model.delivery import DeliveryType
from orderbot.domain.model.order import Order, OrderItem
from orderbot.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeOrderRepository

OPERATOR = 1000


def _setup(order_count: int = 1):
    orders = FakeOrderRepository()
    for _ in range(order_count):
        order = Order.create(
            user_id=42,
            items=[
                OrderItem(5, "Ciment (sac 50kg)", "sac", Quantity.of("2"), Money.of("25000"))
            ],
            delivery_type=DeliveryType.STANDARD,
            surcharge=Money.zero(),
            address="Lot 12 Analakely",
            phone="0341234567",
        )
        orders.save(order)
    return OperatorCommandHandler(orders, OPERATOR, recent_limit=50), orders


# ── Parsing ──────────────────────────────────────────────────────────────────


class TestParseCommand:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("list_orders", OperatorCommand("list_orders")),
            ("/list_orders", OperatorCommand("list_orders")),
            ("/list_orders@MadaBot", OperatorCommand("list_orders")),
            ("view_order 3", OperatorCommand("view_order", order_id=3)),
            ("/view_order 3", OperatorCommand("view_order", order_id=3)),
            ("set_status 7 LIVRÉ", OperatorCommand("set_status", order_id=7, status="LIVRÉ")),
            ("/set_status  7   en_cours ", OperatorCommand("set_status", order_id=7, status="en_cours")),
        ],
    )
    def test_valid(self, text, expected):
        assert parse_command(text) == expected

    @pytest.mark.parametrize(
        "text",
        [
            None,
            "",
            "list_orders now",
            "view_order",
            "view_order abc",
            "view_order 3 4",
            "set_status 7",
            "set_status x LIVRÉ",
            "set_status 7 EN-COURS",
            "set_status 7 LIVRÉ extra",
            "delete_order 1",
            "please list_orders",
        ],
    )
    def test_not_a_command(self, text):
        assert parse_command(text) is None


# ── Execution ────────────────────────────────────────────────────────────────


class TestAuthorization:

    def test_other_identity_is_refused(self):
        handler, orders = _setup()
        with pytest.raises(UnauthorizedError):
            handler.handle(42, OperatorCommand("set_status", order_id=1, status="LIVRÉ"))
        assert orders.get_by_id(1).status == "NEW"

    def test_refused_for_read_commands_too(self):
        handler, _ = _setup()
        with pytest.raises(UnauthorizedError):
            handler.handle(42, OperatorCommand("list_orders"))


class TestListOrders:

    def test_lists_recent_orders(self):
        handler, _ = _setup(order_count=2)
        result = handler.handle(OPERATOR, OperatorCommand("list_orders"))
        assert "#1" in result.reply.text
        assert "#2" in result.reply.text
        assert result.changed_order is None

    def test_no_orders(self):
        handler, _ = _setup(order_count=0)
        result = handler.handle(OPERATOR, OperatorCommand("list_orders"))
        assert result.reply.text == "Aucune commande."

    def test_respects_limit(self):
        _, orders = _setup(order_count=3)
        handler = OperatorCommandHandler(orders, OPERATOR, recent_limit=2)
        result = handler.handle(OPERATOR, OperatorCommand("list_orders"))
        assert result.reply.text.count("\n#") == 2


class TestViewOrder:

    def test_shows_details_and_hint(self):
        handler, _ = _setup()
        result = handler.handle(OPERATOR, OperatorCommand("view_order", order_id=1))
        text = result.reply.text
        assert "<b>Commande #1</b>" in text
        assert "Ciment (sac 50kg): 2 sac x 25000 Ar = 50000 Ar" in text
        assert "/set_status 1 STATUS" in text

    def test_unknown_order(self):
        handler, _ = _setup()
        result = handler.handle(OPERATOR, OperatorCommand("view_order", order_id=99))
        assert result.reply.text == "Commande introuvable."


class TestSetStatus:

    def test_updates_and_reports_changed_order(self):
        handler, orders = _setup()
        result = handler.handle(
            OPERATOR, OperatorCommand("set_status", order_id=1, status="livré")
        )
        assert orders.get_by_id(1).status == "LIVRÉ"
        assert result.changed_order is orders.get_by_id(1)
        assert result.reply.text == "Commande #1 mise à jour: LIVRÉ"

    def test_unknown_order_changes_nothing(self):
        handler, _ = _setup()
        result = handler.handle(
            OPERATOR, OperatorCommand("set_status", order_id=99, status="LIVRÉ")
        )
        assert result.reply.text == "Commande introuvable."
        assert result.changed_order is None
