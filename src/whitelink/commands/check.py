"""Command: show the player name linked to a member."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from whitelink.commands._base import WlCommand

if TYPE_CHECKING:
    from whitelink.commands._context import AppContext


@click.command(
    cls=WlCommand,
    examples="""\
  whitelink check 123456789012345678
  whitelink -q check 123456789012345678""",
)
@click.argument("member_id")
@click.pass_obj
def check(app: AppContext, member_id: str) -> None:
    """Show the Minecraft account linked to MEMBER_ID (no server contact)."""
    from whitelink.services.reconcile import ReconcileService

    svc = ReconcileService(app.bridge)
    app.emit(app.run(svc.check(member_id, app.directory())))
