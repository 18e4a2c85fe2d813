"""Command: apply the member-left path by hand."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from whitelink.commands._base import WlCommand

if TYPE_CHECKING:
    from whitelink.commands._context import AppContext


@click.command(
    cls=WlCommand,
    examples="""\
  # A member left while the bot was offline
  whitelink forget 123456789012345678""",
)
@click.argument("member_id")
@click.pass_obj
def forget(app: AppContext, member_id: str) -> None:
    """Treat MEMBER_ID as having left the guild.

    Removes the linked account from the whitelist and deletes the link.
    Does nothing if the member is not linked.
    """
    from whitelink.services.reconcile import ReconcileService

    svc = ReconcileService(app.bridge)
    app.emit(app.run(svc.member_removed(member_id)))
