"""Settings loading shared by the CLI commands."""

from __future__ import annotations

import logging

import click

from orderbot.infrastructure.config import ConfigurationError, Settings


def load_settings(require_bot: bool = False) -> Settings:
    """Load settings, turning configuration problems into CLI errors."""
    try:
        settings = Settings.from_env(require_bot=require_bot)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))
    logging.getLogger().setLevel(settings.log_level)
    return settings
