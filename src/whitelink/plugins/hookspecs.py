"""Pluggy hook specifications for whitelink lifecycle events.

Hooks fire synchronously after the link table has been persisted.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("whitelink")


class WhitelinkHookSpec:
    """Hook specifications for the whitelink plugin system."""

    @hookspec
    def post_link(self, member_id: str, name: str, previous: str | None) -> None:
        """Called after a member is linked (or relinked) to *name*."""

    @hookspec
    def post_unlink(self, member_id: str, name: str, reason: str) -> None:
        """Called after a link is removed.

        *reason* is ``"unlink"``, ``"member_removed"``, or ``"role_revoked"``.
        """
