"""Configuration loaded from the environment (and an optional ``.env``)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_SUPPORT_CONTACT = (
    "Contact support: +261 34 XX XX XX (ou écris ici) — "
    "Nous répondons en heures ouvrables."
)


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass(frozen=True)
class Settings:
    telegram_token: str | None
    admin_chat_id: int | None
    data_dir: Path
    currency: str = "Ar"
    express_surcharge: Decimal = Decimal("20000")
    send_timeout: float = 10.0
    recent_orders_limit: int = 50
    support_contact: str = DEFAULT_SUPPORT_CONTACT
    log_level: str = "INFO"

    @staticmethod
    def from_env(require_bot: bool = True, env_file: str | None = None) -> Settings:
        """Build settings from environment variables.

        With *require_bot* the bot token and the operator chat id must be
        present; the catalog CLI does not need them.
        """
        load_dotenv(env_file)

        token = os.getenv("TELEGRAM_TOKEN") or None
        admin_chat_id = _optional_int("ADMIN_CHAT_ID")
        if require_bot:
            if not token:
                raise ConfigurationError("TELEGRAM_TOKEN is not set")
            if not admin_chat_id:
                raise ConfigurationError("ADMIN_CHAT_ID is not set")

        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigurationError(f"LOG_LEVEL is not a logging level: {log_level!r}")

        settings = Settings(
            telegram_token=token,
            admin_chat_id=admin_chat_id,
            data_dir=Path(os.getenv("DATA_DIR", "data")),
            currency=os.getenv("CURRENCY", "Ar"),
            express_surcharge=_decimal("EXPRESS_SURCHARGE", "20000"),
            send_timeout=_positive_float("SEND_TIMEOUT", "10"),
            recent_orders_limit=_optional_int("RECENT_ORDERS_LIMIT") or 50,
            support_contact=os.getenv("SUPPORT_CONTACT", DEFAULT_SUPPORT_CONTACT),
            log_level=log_level,
        )
        logger.debug("Settings loaded (data_dir=%s)", settings.data_dir)
        return settings


def _optional_int(key: str) -> int | None:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc


def _decimal(key: str, default: str) -> Decimal:
    raw = os.getenv(key, default)
    try:
        value = Decimal(raw)
    except InvalidOperation as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc
    if not value.is_finite() or value < 0:
        raise ConfigurationError(f"{key} must be a non-negative number, got {raw!r}")
    return value


def _positive_float(key: str, default: str) -> float:
    raw = os.getenv(key, default)
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{key} must be positive, got {raw!r}")
    return value
