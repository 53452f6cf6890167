"""Domain service: Cart Pricing.

Prices a cart against the catalog as it is *now*. Every caller (cart
view, order summary, finalizer) goes through here so that all totals
are computed the same way and always from fresh product reads; nothing
is ever priced from a cached value.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderbot.domain.exceptions import EntityNotFoundError
from orderbot.domain.model.delivery import DeliveryPolicy, DeliveryType
from orderbot.domain.model.product import Product
from orderbot.domain.model.session import CartLine
from orderbot.domain.model.value_objects import Money, Quantity
from orderbot.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class PricedLine:
    product: Product
    quantity: Quantity

    @property
    def unit_price(self) -> Money:
        return self.product.price

    @property
    def subtotal(self) -> Money:
        return self.product.price * self.quantity


@dataclass(frozen=True)
class CartQuote:
    lines: list[PricedLine]
    items_total: Money
    surcharge: Money

    @property
    def total(self) -> Money:
        return self.items_total + self.surcharge


class CartPricingService:

    def __init__(self, product_repo: ProductRepository, policy: DeliveryPolicy) -> None:
        self._product_repo = product_repo
        self._policy = policy

    @property
    def policy(self) -> DeliveryPolicy:
        return self._policy

    def missing_products(self, lines: list[CartLine]) -> set[int]:
        """IDs of cart products that are no longer in the catalog."""
        return {
            line.product_id
            for line in lines
            if self._product_repo.get_by_id(line.product_id) is None
        }

    def quote(
        self,
        lines: list[CartLine],
        delivery_type: DeliveryType | None = None,
    ) -> CartQuote:
        """Price every line; add the delivery surcharge when a type is given.

        Raises EntityNotFoundError if a product has left the catalog.
        """
        currency = self._policy.express_surcharge.currency
        priced: list[PricedLine] = []
        items_total = Money.zero(currency)

        for line in lines:
            product = self._product_repo.get_by_id(line.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product #{line.product_id} not found")
            priced_line = PricedLine(product=product, quantity=line.quantity)
            items_total = items_total + priced_line.subtotal
            priced.append(priced_line)

        if delivery_type is None:
            surcharge = Money.zero(currency)
        else:
            surcharge = self._policy.surcharge_for(delivery_type)

        return CartQuote(lines=priced, items_total=items_total, surcharge=surcharge)
