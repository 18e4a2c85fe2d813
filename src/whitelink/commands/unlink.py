"""Command: remove a member's link and whitelist entry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from whitelink.commands._base import WlCommand

if TYPE_CHECKING:
    from whitelink.commands._context import AppContext


@click.command(
    cls=WlCommand,
    examples="""\
  whitelink unlink 123456789012345678""",
)
@click.argument("member_id")
@click.pass_obj
def unlink(app: AppContext, member_id: str) -> None:
    """Un-whitelist MEMBER_ID's linked account and forget the link."""
    from whitelink.services.reconcile import ReconcileService

    svc = ReconcileService(app.bridge)
    app.emit(app.run(svc.unlink(member_id, app.directory())))
