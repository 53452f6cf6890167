"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from telegram.ext import Application

from orderbot.application.bot_service import BotService
from orderbot.application.checkout_machine import CheckoutMachine
from orderbot.application.finalize_order import OrderFinalizer
from orderbot.application.notifications import MessageSender, NotificationDispatcher
from orderbot.application.operator_commands import OperatorCommandHandler
from orderbot.application.register_customer import RegisterCustomerHandler
from orderbot.domain.model.delivery import DeliveryPolicy
from orderbot.domain.model.value_objects import Money
from orderbot.domain.service.cart_pricing_service import CartPricingService
from orderbot.infrastructure.config import Settings
from orderbot.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from orderbot.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from orderbot.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from orderbot.infrastructure.persistence.memory_session_store import (
    InMemorySessionStore,
)
from orderbot.infrastructure.transport.telegram_bot import TelegramBot
from orderbot.infrastructure.transport.telegram_sender import TelegramSender


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.data_dir / "products.json")


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir / "orders.json")


def customer_repository(settings: Settings) -> JsonCustomerRepository:
    return JsonCustomerRepository(settings.data_dir / "users.json")


def delivery_policy(settings: Settings) -> DeliveryPolicy:
    return DeliveryPolicy(express_surcharge=Money(settings.express_surcharge, settings.currency))


def bot_service(settings: Settings, sender: MessageSender) -> BotService:
    products = product_repository(settings)
    orders = order_repository(settings)
    pricing = CartPricingService(products, delivery_policy(settings))

    machine = CheckoutMachine(
        product_repo=products,
        pricing=pricing,
        finalizer=OrderFinalizer(orders, pricing),
        support_contact=settings.support_contact,
    )
    return BotService(
        sessions=InMemorySessionStore(),
        machine=machine,
        operator=OperatorCommandHandler(
            orders, settings.admin_chat_id, settings.recent_orders_limit
        ),
        dispatcher=NotificationDispatcher(
            sender, settings.admin_chat_id, timeout=settings.send_timeout
        ),
        register=RegisterCustomerHandler(customer_repository(settings)),
    )


def telegram_bot(settings: Settings) -> TelegramBot:
    application = (
        Application.builder()
        .token(settings.telegram_token)
        .concurrent_updates(True)
        .build()
    )
    sender = TelegramSender(application.bot)
    return TelegramBot(application, bot_service(settings, sender))
