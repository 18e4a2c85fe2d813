"""Command: link a member to a player name on the operator's behalf."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from whitelink.commands._base import WlCommand

if TYPE_CHECKING:
    from whitelink.commands._context import AppContext


@click.command(
    cls=WlCommand,
    examples="""\
  whitelink link 123456789012345678 Notch
  whitelink --json link 123456789012345678 Notch""",
)
@click.argument("member_id")
@click.argument("name")
@click.pass_obj
def link(app: AppContext, member_id: str, name: str) -> None:
    """Whitelist NAME and record it as MEMBER_ID's linked account."""
    from whitelink.services.reconcile import ReconcileService

    svc = ReconcileService(app.bridge)
    app.emit(app.run(svc.link(member_id, name, app.directory())))
