"""Application service: Finalize Order use case.

Turns a session waiting for confirmation into a durable Order. Prices
are read from the catalog here, at confirmation time, and the order
header and all of its items are written in a single repository call.
"""

from __future__ import annotations

import logging

from orderbot.domain.exceptions import PriceChangedError, ValidationError
from orderbot.domain.model.order import Order, OrderItem
from orderbot.domain.model.session import Session, Stage
from orderbot.domain.repository.order_repository import OrderRepository
from orderbot.domain.service.cart_pricing_service import CartPricingService

logger = logging.getLogger(__name__)


class OrderFinalizer:

    def __init__(
        self,
        order_repo: OrderRepository,
        pricing: CartPricingService,
    ) -> None:
        self._order_repo = order_repo
        self._pricing = pricing

    def finalize(self, session: Session) -> Order:
        """Persist the order the user was shown.

        Steps:
        1. Re-price every line from the catalog (snapshot of unit prices).
        2. Refuse if the fresh total differs from the one shown
           (PriceChangedError); the caller re-offers confirmation.
        3. Let the Order aggregate validate, then save header + items.

        Raises EntityNotFoundError if a product left the catalog and
        PersistenceError if the write fails; nothing is written then.
        """
        if session.stage is not Stage.AWAITING_CONFIRMATION or session.total is None:
            raise ValidationError("Session is not waiting for confirmation")
        if session.delivery_type is None:
            raise ValidationError("Delivery type is required")

        quote = self._pricing.quote(session.lines, session.delivery_type)
        if quote.total != session.total:
            raise PriceChangedError(shown=session.total, current=quote.total)

        items = [
            OrderItem(
                product_id=line.product.id,
                product_name=line.product.name,
                unit=line.product.unit,
                quantity=line.quantity,
                unit_price=line.unit_price,  # <-- price snapshot
            )
            for line in quote.lines
        ]
        order = Order.create(
            user_id=session.user_id,
            items=items,
            delivery_type=session.delivery_type,
            surcharge=quote.surcharge,
            address=session.address or "",
            phone=session.phone or "",
        )
        self._order_repo.save(order)

        logger.info(
            "Order #%s persisted for user %s (total %s, %d items)",
            order.id, order.user_id, order.total, len(order.items),
        )
        return order
