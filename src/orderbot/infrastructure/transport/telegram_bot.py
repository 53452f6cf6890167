"""Telegram front end: turns updates into BotService calls."""

from __future__ import annotations

import logging

from telegram import Update, User
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from orderbot.application.bot_service import BotService
from orderbot.application.dto import Sender

logger = logging.getLogger(__name__)

OPERATOR_COMMANDS = ["list_orders", "view_order", "set_status"]
# Edits of already handled messages are not new input.
NOT_EDITED = ~filters.UpdateType.EDITED_MESSAGE


def sender_from(user: User) -> Sender:
    return Sender(
        user_id=user.id,
        first_name=user.first_name or "",
        last_name=user.last_name or "",
        username=user.username or "",
    )


class TelegramBot:

    def __init__(self, application: Application, service: BotService) -> None:
        self.application = application
        self.service = service
        self._setup_handlers()

    def _setup_handlers(self) -> None:
        """Set up all command, callback and message handlers."""
        self.application.add_handler(
            CommandHandler("start", self.start_command, filters=NOT_EDITED)
        )
        self.application.add_handler(
            CommandHandler(OPERATOR_COMMANDS, self.operator_command, filters=NOT_EDITED)
        )
        self.application.add_handler(CallbackQueryHandler(self.handle_callback))
        self.application.add_handler(
            MessageHandler(
                filters.TEXT & ~filters.COMMAND & NOT_EDITED, self.handle_message
            )
        )
        self.application.add_error_handler(self.error_handler)

    async def start_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        user = update.effective_user
        logger.info("User %s (%s) started the bot", user.id, user.first_name)
        await self.service.start(sender_from(user))

    async def operator_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self.service.handle_text(sender_from(update.effective_user), update.effective_message.text)

    async def handle_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self.service.handle_text(sender_from(update.effective_user), update.effective_message.text)

    async def handle_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        try:
            await query.answer()
        except TelegramError:
            logger.warning("Could not answer callback query %s", query.id)
        await self.service.handle_payload(sender_from(query.from_user), query.data)

    async def error_handler(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        logger.error("Error while handling update %r", update, exc_info=context.error)

    def run(self) -> None:
        logger.info("Bot started")
        self.application.run_polling(allowed_updates=Update.ALL_TYPES)
