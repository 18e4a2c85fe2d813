"""DirectoryAdapter: what the engine needs from the chat platform.

The engine replies to whoever asked and adds or removes the linked role.
Implementations live with the platform binding (:mod:`whitelink.bot`) or
the CLI (:mod:`whitelink.commands._context`).

Role mutation returns False when the member or role cannot be resolved or
the platform refuses. The engine treats False as "skipped", never as an
error.
"""

from __future__ import annotations

from typing import Protocol


class DirectoryAdapter(Protocol):
    async def reply(self, text: str) -> None:
        """Send *text* privately to the requester."""

    async def add_role(self, member_id: str) -> bool:
        """Give *member_id* the linked role."""

    async def remove_role(self, member_id: str) -> bool:
        """Take the linked role from *member_id* if the member has it."""

