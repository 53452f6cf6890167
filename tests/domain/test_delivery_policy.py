"""Unit tests for delivery options and surcharges."""

import pytest

from orderbot.domain.model.delivery import DeliveryPolicy, DeliveryType
from orderbot.domain.model.value_objects import Money


@pytest.fixture
def policy() -> DeliveryPolicy:
    return DeliveryPolicy(express_surcharge=Money.of("20000"))


class TestSurcharge:

    def test_standard_is_free(self, policy):
        assert policy.surcharge_for(DeliveryType.STANDARD) == Money.zero()

    def test_express_carries_surcharge(self, policy):
        assert policy.surcharge_for(DeliveryType.EXPRESS) == Money.of("20000")


class TestLabels:

    def test_labels_show_the_price(self, policy):
        assert policy.labels == [
            "Standard (2–4 jours) — 0 Ar",
            "Express (24–48h) — 20000 Ar",
        ]


class TestMatch:

    def test_exact_labels(self, policy):
        assert policy.match("Standard (2–4 jours) — 0 Ar") is DeliveryType.STANDARD
        assert policy.match("Express (24–48h) — 20000 Ar") is DeliveryType.EXPRESS

    @pytest.mark.parametrize("text", ["express", "EXPRESS svp", "Je veux Express"])
    def test_mentions_express(self, policy, text):
        assert policy.match(text) is DeliveryType.EXPRESS

    @pytest.mark.parametrize("text", ["standard", "Standard"])
    def test_mentions_standard(self, policy, text):
        assert policy.match(text) is DeliveryType.STANDARD

    @pytest.mark.parametrize("text", ["", "vite", "livraison rapide"])
    def test_unrecognized_reply_does_not_default(self, policy, text):
        assert policy.match(text) is None
