"""Unit tests for CartPricingService."""

import pytest

from orderbot.domain.exceptions import EntityNotFoundError
from orderbot.domain.model.delivery import DeliveryPolicy, DeliveryType
from orderbot.domain.model.product import Product
from orderbot.domain.model.session import CartLine
from orderbot.domain.model.value_objects import Money, Quantity
from orderbot.domain.service.cart_pricing_service import CartPricingService
from tests.fakes import FakeProductRepository


def _setup():
    products = FakeProductRepository([
        Product(id=1, name="Brique pleine", price=Money.of("800"), unit="pièce"),
        Product(id=3, name="Gravillon (m3)", price=Money.of("350000"), unit="m3"),
        Product(id=5, name="Ciment (sac 50kg)", price=Money.of("25000"), unit="sac"),
    ])
    service = CartPricingService(products, DeliveryPolicy(Money.of("20000")))
    return service, products


def _line(product_id: int, qty: str) -> CartLine:
    return CartLine(product_id=product_id, quantity=Quantity.of(qty))


class TestQuote:

    def test_items_total_without_delivery(self):
        service, _ = _setup()
        quote = service.quote([_line(5, "2"), _line(1, "100")])
        assert quote.items_total == Money.of("130000")
        assert quote.surcharge == Money.zero()
        assert quote.total == Money.of("130000")

    def test_express_adds_surcharge(self):
        service, _ = _setup()
        quote = service.quote([_line(5, "2")], DeliveryType.EXPRESS)
        assert quote.total == Money.of("70000")

    def test_standard_adds_nothing(self):
        service, _ = _setup()
        quote = service.quote([_line(5, "2")], DeliveryType.STANDARD)
        assert quote.total == Money.of("50000")

    def test_fractional_quantity(self):
        service, _ = _setup()
        quote = service.quote([_line(3, "0.5")])
        assert quote.lines[0].subtotal == Money.of("175000")

    def test_reads_current_price(self):
        service, products = _setup()
        products.get_by_id(5).update_price(Money.of("26000"))
        assert service.quote([_line(5, "2")]).total == Money.of("52000")

    def test_lines_keep_cart_order(self):
        service, _ = _setup()
        quote = service.quote([_line(5, "1"), _line(1, "1"), _line(5, "3")])
        assert [pl.product.id for pl in quote.lines] == [5, 1, 5]

    def test_missing_product_raises(self):
        service, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="#9"):
            service.quote([_line(9, "1")])


class TestMissingProducts:

    def test_reports_only_vanished_ids(self):
        service, products = _setup()
        products.remove(1)
        assert service.missing_products([_line(1, "1"), _line(5, "1")]) == {1}

    def test_empty_when_all_present(self):
        service, _ = _setup()
        assert service.missing_products([_line(5, "1")]) == set()
