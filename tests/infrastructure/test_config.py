"""Tests for environment-based configuration."""

import os
from decimal import Decimal
from pathlib import Path

import pytest

from orderbot.infrastructure.config import ConfigurationError, Settings

_KEYS = [
    "TELEGRAM_TOKEN", "ADMIN_CHAT_ID", "DATA_DIR", "CURRENCY", "EXPRESS_SURCHARGE",
    "SEND_TIMEOUT", "RECENT_ORDERS_LIMIT", "SUPPORT_CONTACT", "LOG_LEVEL",
]


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Clean environment; returns a loader that ignores any real .env file."""
    for key in _KEYS:
        monkeypatch.delenv(key, raising=False)

    def _load(**kwargs):
        return Settings.from_env(env_file=str(tmp_path / "missing.env"), **kwargs)

    return monkeypatch, _load


class TestSettings:

    def test_defaults_without_bot(self, env):
        _, load = env
        settings = load(require_bot=False)
        assert settings.telegram_token is None
        assert settings.data_dir == Path("data")
        assert settings.currency == "Ar"
        assert settings.express_surcharge == Decimal("20000")
        assert settings.send_timeout == 10.0
        assert settings.recent_orders_limit == 50
        assert settings.log_level == "INFO"

    def test_bot_settings(self, env):
        monkeypatch, load = env
        monkeypatch.setenv("TELEGRAM_TOKEN", "123:abc")
        monkeypatch.setenv("ADMIN_CHAT_ID", "1000")
        monkeypatch.setenv("EXPRESS_SURCHARGE", "15000")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        settings = load()
        assert settings.admin_chat_id == 1000
        assert settings.express_surcharge == Decimal("15000")
        assert settings.log_level == "DEBUG"

    def test_reads_env_file(self, monkeypatch, tmp_path):
        for key in _KEYS:
            monkeypatch.delenv(key, raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("TELEGRAM_TOKEN=from-file\nADMIN_CHAT_ID=55\n", encoding="utf-8")
        try:
            settings = Settings.from_env(env_file=str(env_file))
        finally:
            os.environ.pop("TELEGRAM_TOKEN", None)
            os.environ.pop("ADMIN_CHAT_ID", None)
        assert settings.telegram_token == "from-file"
        assert settings.admin_chat_id == 55

    def test_token_required_for_bot(self, env):
        monkeypatch, load = env
        monkeypatch.setenv("ADMIN_CHAT_ID", "1000")
        with pytest.raises(ConfigurationError, match="TELEGRAM_TOKEN"):
            load()

    def test_admin_required_for_bot(self, env):
        monkeypatch, load = env
        monkeypatch.setenv("TELEGRAM_TOKEN", "123:abc")
        with pytest.raises(ConfigurationError, match="ADMIN_CHAT_ID"):
            load()

    @pytest.mark.parametrize(
        "key, value",
        [
            ("ADMIN_CHAT_ID", "admin"),
            ("EXPRESS_SURCHARGE", "-1"),
            ("EXPRESS_SURCHARGE", "cher"),
            ("SEND_TIMEOUT", "0"),
            ("LOG_LEVEL", "LOUD"),
        ],
    )
    def test_invalid_values(self, env, key, value):
        monkeypatch, load = env
        monkeypatch.setenv(key, value)
        with pytest.raises(ConfigurationError, match=key):
            load(require_bot=False)
