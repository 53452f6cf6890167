"""MessageSender backed by the Telegram Bot API."""

from __future__ import annotations

from telegram import (
    Bot,
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    ReplyKeyboardMarkup,
    ReplyKeyboardRemove,
)
from telegram.constants import ParseMode

from orderbot.application.dto import OutboundMessage
from orderbot.application.notifications import MessageSender


def to_markup(
    message: OutboundMessage,
) -> InlineKeyboardMarkup | ReplyKeyboardMarkup | ReplyKeyboardRemove | None:
    """Translate the keyboard of *message* into Telegram markup."""
    if message.buttons:
        return InlineKeyboardMarkup(
            [[InlineKeyboardButton(b.label, callback_data=b.payload)] for b in message.buttons]
        )
    if message.keyboard:
        return ReplyKeyboardMarkup(
            [list(row) for row in message.keyboard], resize_keyboard=True
        )
    if message.remove_keyboard:
        return ReplyKeyboardRemove()
    return None


class TelegramSender(MessageSender):

    def __init__(self, bot: Bot) -> None:
        self._bot = bot

    async def send(self, chat_id: int, message: OutboundMessage) -> None:
        await self._bot.send_message(
            chat_id=chat_id,
            text=message.text,
            parse_mode=ParseMode.HTML if message.html else None,
            reply_markup=to_markup(message),
        )
