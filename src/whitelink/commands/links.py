"""Command: list the local link table."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from whitelink.commands._base import WlCommand

if TYPE_CHECKING:
    from whitelink.commands._context import AppContext


@click.command(
    cls=WlCommand,
    examples="""\
  whitelink links
  whitelink --json links""",
)
@click.pass_obj
def links(app: AppContext) -> None:
    """List every member-to-player link stored locally."""
    from whitelink.services.reconcile import ReconcileService

    svc = ReconcileService(app.bridge)
    app.emit(app.run(svc.list_links()))
