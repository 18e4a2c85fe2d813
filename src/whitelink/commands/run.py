"""Command: run the Discord bot."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from whitelink.commands._base import WlCommand

if TYPE_CHECKING:
    from whitelink.commands._context import AppContext


@click.command(
    cls=WlCommand,
    log_level=logging.INFO,
    examples="""\
  # Token and RCON settings from whitelink.toml or the environment
  whitelink run

  # JSON logs for a container
  whitelink --log-json run""",
)
@click.option("--no-sync", is_flag=True, help="Skip registering slash commands on startup.")
@click.pass_obj
def run(app: AppContext, no_sync: bool) -> None:
    """Connect to Discord and keep the whitelist in sync until stopped."""
    settings = app.settings
    if not settings.discord.token:
        raise click.ClickException(
            "No Discord token configured. Set DISCORD_TOKEN or [discord] token."
        )

    from whitelink.bot.client import create_client

    client = create_client(app.bridge, sync_commands=not no_sync)
    client.run(settings.discord.token, log_handler=None)
