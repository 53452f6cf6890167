"""Application service: the per-user checkout state machine.

``CheckoutMachine.handle`` interprets one inbound event against one
Session and returns the resulting Session together with the replies to
send and, on a successful confirmation, the persisted Order.

The funnel is linear:

    IDLE -> AWAITING_QUANTITY -> IDLE ... -> AWAITING_DELIVERY_CHOICE
         -> AWAITING_ADDRESS -> AWAITING_PHONE -> AWAITING_CONFIRMATION

Cancel (and clearing the cart) is the only way back. The total is
computed once, when the phone number arrives, and the finalizer refuses
to persist anything that differs from it.

Handling works on a copy of the Session: if a store fails mid-event the
caller gets the untouched original back with a generic failure reply.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from orderbot.application import messages
from orderbot.application.dto import OutboundMessage
from orderbot.application.events import (
    CancelTapped,
    ConfirmTapped,
    Event,
    FreeText,
    MenuAction,
    MenuTapped,
    ProductSelected,
)
from orderbot.application.finalize_order import OrderFinalizer
from orderbot.domain.exceptions import (
    EntityNotFoundError,
    PersistenceError,
    PriceChangedError,
    ValidationError,
)
from orderbot.domain.model.order import Order
from orderbot.domain.model.session import Session, Stage
from orderbot.domain.model.value_objects import Quantity
from orderbot.domain.repository.product_repository import ProductRepository
from orderbot.domain.service.cart_pricing_service import CartPricingService, CartQuote

logger = logging.getLogger(__name__)


@dataclass
class Transition:
    session: Session
    replies: list[OutboundMessage] = field(default_factory=list)
    placed_order: Order | None = None


class CheckoutMachine:

    def __init__(
        self,
        product_repo: ProductRepository,
        pricing: CartPricingService,
        finalizer: OrderFinalizer,
        support_contact: str,
    ) -> None:
        self._product_repo = product_repo
        self._pricing = pricing
        self._finalizer = finalizer
        self._support_contact = support_contact

    def handle(self, session: Session, event: Event) -> Transition:
        working = session.snapshot()
        transition = Transition(session=working)
        try:
            self._dispatch(working, event, transition)
        except (PersistenceError, EntityNotFoundError):
            logger.exception(
                "Event %r failed for user %s in %s; session kept",
                event, session.user_id, session.stage.value,
            )
            return Transition(session=session, replies=[messages.generic_failure()])
        return transition

    # --- Dispatch -------------------------------------------------------------

    def _dispatch(self, session: Session, event: Event, out: Transition) -> None:
        if isinstance(event, CancelTapped):
            session.clear()
            out.replies.append(messages.order_cancelled())
        elif isinstance(event, ConfirmTapped):
            self._on_confirm(session, out)
        elif isinstance(event, ProductSelected):
            self._on_product_selected(session, event.product_id, out)
        elif isinstance(event, MenuTapped):
            self._on_menu(session, event.action, out)
        elif isinstance(event, FreeText):
            self._on_free_text(session, event.text, out)
        else:
            raise TypeError(f"Unknown event {event!r}")

    def _on_menu(self, session: Session, action: MenuAction, out: Transition) -> None:
        if action is MenuAction.VIEW_CART:
            self._view_cart(session, out)
        elif action is MenuAction.CLEAR_CART:
            session.clear()
            out.replies.append(messages.cart_cleared())
        elif action is MenuAction.CHECKOUT:
            self._begin_checkout(session, out)
        elif action is MenuAction.SUPPORT:
            out.replies.append(messages.support(self._support_contact))
        elif session.in_checkout:
            # BROWSE and BACK re-send the current checkout step.
            self._reprompt(session, out)
        elif action is MenuAction.BROWSE:
            out.replies.append(
                messages.catalog(self._product_repo.list_all(), adding=bool(session.lines))
            )
        else:
            out.replies.append(messages.main_menu())

    def _on_free_text(self, session: Session, text: str, out: Transition) -> None:
        stage = session.stage
        if stage is Stage.IDLE:
            return  # unknown input is ignored
        if stage is Stage.AWAITING_QUANTITY:
            self._add_quantity(session, text, out)
        elif stage is Stage.AWAITING_DELIVERY_CHOICE:
            delivery_type = self._pricing.policy.match(text)
            if delivery_type is None:
                out.replies.append(messages.delivery_mismatch(self._pricing.policy))
                return
            session.choose_delivery(delivery_type)
            out.replies.append(messages.address_prompt())
        elif stage is Stage.AWAITING_ADDRESS:
            try:
                session.set_address(text)
            except ValidationError:
                out.replies.extend([messages.empty_reply(), messages.address_prompt()])
                return
            out.replies.append(messages.phone_prompt())
        elif stage is Stage.AWAITING_PHONE:
            try:
                session.set_phone(text)
            except ValidationError:
                out.replies.extend([messages.empty_reply(), messages.phone_prompt()])
                return
            self._offer_confirmation(session, out)
        elif stage is Stage.AWAITING_CONFIRMATION:
            out.replies.append(messages.confirm_or_cancel())

    # --- Cart building --------------------------------------------------------

    def _on_product_selected(self, session: Session, product_id: int, out: Transition) -> None:
        if session.in_checkout:
            out.replies.append(messages.finish_checkout_first())
            return
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            out.replies.append(messages.product_not_found())
            return
        session.select_product(product.id)
        out.replies.append(messages.product_prompt(product))

    def _add_quantity(self, session: Session, text: str, out: Transition) -> None:
        try:
            quantity = Quantity.parse(text)
        except ValidationError:
            out.replies.append(messages.invalid_quantity())
            return

        product = self._product_repo.get_by_id(session.pending_product_id)
        if product is None:
            session.abandon_selection()
            out.replies.append(messages.product_not_found())
            return

        session.add_pending(quantity)
        out.replies.append(messages.added_to_cart(product, quantity))

    def _view_cart(self, session: Session, out: Transition) -> None:
        quote = self._fresh_quote(session, out, with_delivery=False)
        if quote is None:
            return
        out.replies.append(messages.cart_view(quote))
        if session.stage is Stage.AWAITING_CONFIRMATION and session.total is None:
            self._offer_confirmation(session, out)

    # --- Checkout -------------------------------------------------------------

    def _begin_checkout(self, session: Session, out: Transition) -> None:
        if session.in_checkout:
            self._reprompt(session, out)
            return
        self._prune_missing(session, out)
        if not session.lines:
            out.replies.append(messages.cart_empty())
            return
        session.begin_checkout()
        out.replies.append(messages.delivery_prompt(self._pricing.policy))

    def _offer_confirmation(self, session: Session, out: Transition) -> None:
        quote = self._fresh_quote(session, out, with_delivery=True)
        if quote is None:
            return
        session.offer_confirmation(quote.total)
        out.replies.append(messages.order_summary(session, quote))

    def _on_confirm(self, session: Session, out: Transition) -> None:
        if session.stage is not Stage.AWAITING_CONFIRMATION:
            out.replies.append(messages.nothing_to_confirm())
            return
        if session.total is None:
            # The cart changed since the summary; show the new one first.
            self._offer_confirmation(session, out)
            return
        try:
            order = self._finalizer.finalize(session)
        except (PriceChangedError, EntityNotFoundError) as exc:
            logger.info("Re-offering confirmation to user %s: %s", session.user_id, exc)
            out.replies.append(messages.price_changed())
            self._offer_confirmation(session, out)
            return
        session.clear()
        out.placed_order = order
        out.replies.append(messages.order_received(order))

    def _reprompt(self, session: Session, out: Transition) -> None:
        stage = session.stage
        if stage is Stage.AWAITING_DELIVERY_CHOICE:
            out.replies.append(messages.delivery_prompt(self._pricing.policy))
        elif stage is Stage.AWAITING_ADDRESS:
            out.replies.append(messages.address_prompt())
        elif stage is Stage.AWAITING_PHONE:
            out.replies.append(messages.phone_prompt())
        elif stage is Stage.AWAITING_CONFIRMATION:
            out.replies.append(messages.confirm_or_cancel())
        else:
            out.replies.append(messages.main_menu())

    # --- Pricing helpers ------------------------------------------------------

    def _prune_missing(self, session: Session, out: Transition) -> None:
        missing = self._pricing.missing_products(session.lines)
        if missing:
            logger.info("Dropping vanished products %s from user %s", missing, session.user_id)
            session.drop_products(missing)
            out.replies.append(messages.products_removed())

    def _fresh_quote(
        self, session: Session, out: Transition, with_delivery: bool
    ) -> CartQuote | None:
        """Price the cart from the catalog as it is now.

        Returns None (after replying) when the cart is, or becomes, empty;
        a checkout left without lines is abandoned.
        """
        self._prune_missing(session, out)
        if not session.lines:
            if session.in_checkout:
                session.clear()
            out.replies.append(messages.cart_empty())
            return None
        delivery_type = session.delivery_type if with_delivery else None
        return self._pricing.quote(session.lines, delivery_type)
