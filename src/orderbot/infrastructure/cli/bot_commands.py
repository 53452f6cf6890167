"""CLI command that runs the Telegram bot."""

from __future__ import annotations

import click

from orderbot.infrastructure.bootstrap import telegram_bot
from orderbot.infrastructure.cli.settings import load_settings


@click.command("run")
def run() -> None:
    """Start the bot (long polling) until interrupted."""
    settings = load_settings(require_bot=True)
    click.echo(f"Data directory: {settings.data_dir.resolve()}")
    telegram_bot(settings).run()
