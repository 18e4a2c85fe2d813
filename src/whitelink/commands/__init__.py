"""Subcommand modules for whitelink.

Provides register_commands() which uses deferred imports to keep
``whitelink --help`` fast and free of the Discord import.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from whitelink.commands.check import check
    from whitelink.commands.forget import forget
    from whitelink.commands.link import link
    from whitelink.commands.links import links
    from whitelink.commands.run import run
    from whitelink.commands.unlink import unlink

    cli.add_command(run)
    cli.add_command(link)
    cli.add_command(unlink)
    cli.add_command(check)
    cli.add_command(links)
    cli.add_command(forget)
