"""ReconcileService: keep the link table, the linked role and the whitelist in step.

Each directory identity is either Unlinked (no record) or Linked(name).
Every operation runs under that member's lock. Writes re-read the table
under the table lock and change only the member's own entry, so work on
other members in the meantime is kept.

Policies carried over from the deployed bot:

- Relinking removes the old name *before* adding the new one and does not
  wait on the removal's outcome. A failed removal is only logged.
- Unlinking is optimistic: the record is deleted whatever the server says
  about ``whitelist remove``.
- Two members may link the same player name. The second link succeeds
  with a warning naming the other holder.

Only ``whitelist add`` replies are interpreted (via :func:`classify`).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from whitelink.domain.identities import (
    INVALID_NAME_MESSAGE,
    directory_key,
    is_valid_remote_identity,
)
from whitelink.domain.links import LinkRecord, LinkTable
from whitelink.domain.outcomes import (
    CommandOutcome,
    classify,
    whitelist_add,
    whitelist_remove,
)
from whitelink.services.base import BaseService
from whitelink.services.result import ServiceError, ServiceResult
from whitelink.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from whitelink.services.directory import DirectoryAdapter

logger = logging.getLogger(__name__)

SAVE_FAILED_WARNING = (
    "The link table could not be saved; this change will be lost on the next restart."
)


class ReconcileService(BaseService):
    """Link, unlink, check, and membership/role event handling."""

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    @traced
    async def link(
        self,
        member_id: str,
        name: str,
        directory: DirectoryAdapter,
    ) -> ServiceResult:
        """Link *member_id* to player *name*, replacing any previous link."""
        op = "link"
        key = directory_key(member_id)

        if not is_valid_remote_identity(name):
            await directory.reply(INVALID_NAME_MESSAGE)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_NAME",
                    message=INVALID_NAME_MESSAGE,
                    detail={"name": name},
                ),
            )

        warnings: list[str] = []
        async with self._bridge.member(key):
            table = self._bridge.store.load()
            current = table.get(key)
            previous = current.remote_identity if current is not None else None

            if previous is not None:
                await directory.reply(
                    f"Your account is already linked to `{previous}`. "
                    f"Updating it to `{name}`..."
                )
                if previous != name:
                    await self._remove_quietly(previous)
            else:
                await directory.reply(f"Linking your account to `{name}`...")

            outcome = classify(await self._run(whitelist_add(name)))
            logger.info("Link %s -> %s: %s", key, name, outcome)

            if outcome is not CommandOutcome.CONFIRMED:
                return await self._link_failed(op, key, name, previous, outcome, directory)

            table = await self._commit(
                key, LinkRecord(directory_identity=key, remote_identity=name), warnings
            )

            others = [holder for holder in table.holders_of(name) if holder != key]
            if others:
                warnings.append(f"`{name}` is also linked to member(s) {', '.join(others)}")
                logger.warning("Player %s is linked to several members: %s", name, others)

        role_updated = False
        if self._bridge.role_enabled:
            role_updated = await directory.add_role(key)

        self._dispatch_event(
            "post_link",
            {"member_id": key, "name": name, "previous": previous},
            warnings,
        )

        message = f"You've linked your account to `{name}` successfully!"
        await directory.reply(self._with_save_note(message, warnings))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "member_id": key,
                "name": name,
                "previous": previous,
                "outcome": str(outcome),
                "role_updated": role_updated,
            },
            warnings=warnings,
        )

    @traced
    async def unlink(self, member_id: str, directory: DirectoryAdapter) -> ServiceResult:
        """Remove *member_id*'s link, whatever the server answers."""
        op = "unlink"
        key = directory_key(member_id)
        warnings: list[str] = []

        async with self._bridge.member(key):
            record = await self._drop_link(key, warnings)

        if record is None:
            message = "You don't have a Minecraft account linked."
            await directory.reply(message)
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="NOT_LINKED", message=message, detail={"member_id": key}),
            )

        role_updated = False
        if self._bridge.role_enabled:
            role_updated = await directory.remove_role(key)

        self._dispatch_event(
            "post_unlink",
            {"member_id": key, "name": record.remote_identity, "reason": "unlink"},
            warnings,
        )

        message = f"Your account has been unlinked from `{record.remote_identity}`!"
        await directory.reply(self._with_save_note(message, warnings))
        return ServiceResult(
            ok=True,
            op=op,
            data={"member_id": key, "name": record.remote_identity, "role_updated": role_updated},
            warnings=warnings,
        )

    @traced
    async def check(
        self,
        member_id: str,
        directory: DirectoryAdapter,
        *,
        label: str | None = None,
    ) -> ServiceResult:
        """Report the player name linked to *member_id*. Issues no commands.

        *label* is how the member is shown in the reply (a mention on
        Discord); defaults to the raw id.
        """
        op = "check"
        key = directory_key(member_id)
        shown = label or key
        record = self._bridge.store.load().get(key)

        if record is None:
            await directory.reply(f"{shown} doesn't have a Minecraft account linked.")
            return ServiceResult(ok=True, op=op, data={"member_id": key, "name": None})

        await directory.reply(f"{shown} is linked to the IGN `{record.remote_identity}`.")
        return ServiceResult(
            ok=True,
            op=op,
            data={"member_id": key, "name": record.remote_identity},
        )

    @traced
    async def list_links(self) -> ServiceResult:
        """List every record in the local link table."""
        table = self._bridge.store.load()
        items = [
            {"member_id": r.directory_identity, "name": r.remote_identity}
            for r in table.records()
        ]
        return ServiceResult(ok=True, op="list_links", data={"items": items, "count": len(items)})

    # ------------------------------------------------------------------
    # Directory events (no requester to answer)
    # ------------------------------------------------------------------

    @traced
    async def member_removed(self, member_id: str) -> ServiceResult:
        """The member left the guild: drop their link and whitelist entry."""
        return await self._drop_for_event("member_removed", member_id)

    @traced
    async def role_changed(self, member_id: str, *, had_role: bool, has_role: bool) -> ServiceResult:
        """The linked role was edited outside the bot.

        Only a configured role going from held to not held drops the link.
        """
        op = "role_changed"
        key = directory_key(member_id)
        if not self._bridge.role_enabled:
            return ServiceResult(
                ok=True, op=op, data={"member_id": key, "removed": False, "reason": "no_role"}
            )
        if not (had_role and not has_role):
            return ServiceResult(
                ok=True, op=op, data={"member_id": key, "removed": False, "reason": "not_revoked"}
            )
        return await self._drop_for_event(op, key, reason="role_revoked")

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _run(self, command: str) -> str:
        with trace_span("rcon") as span:
            raw = await self._bridge.executor.execute(command)
            if span is not None:
                span.annotate("command", command)
        return raw

    async def _remove_quietly(self, name: str) -> None:
        """Issue ``whitelist remove`` without letting its outcome steer anything."""
        raw = await self._run(whitelist_remove(name))
        if not raw:
            logger.warning("whitelist remove %s: no reply from server", name)
        else:
            logger.debug("whitelist remove %s: %s", name, raw)

    async def _drop_link(self, key: str, warnings: list[str]) -> LinkRecord | None:
        """Remove *key*'s record and its whitelist entry. Caller holds the lock."""
        table = self._bridge.store.load()
        record = table.get(key)
        if record is None:
            return None
        await self._remove_quietly(record.remote_identity)
        await self._commit(key, None, warnings)
        logger.info("Unlinked %s from %s", key, record.remote_identity)
        return record

    async def _drop_for_event(
        self,
        op: str,
        member_id: str,
        *,
        reason: str | None = None,
    ) -> ServiceResult:
        key = directory_key(member_id)
        warnings: list[str] = []
        async with self._bridge.member(key):
            record = await self._drop_link(key, warnings)

        if record is None:
            return ServiceResult(ok=True, op=op, data={"member_id": key, "removed": False})

        self._dispatch_event(
            "post_unlink",
            {"member_id": key, "name": record.remote_identity, "reason": reason or op},
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={"member_id": key, "name": record.remote_identity, "removed": True},
            warnings=warnings,
        )

    async def _link_failed(
        self,
        op: str,
        key: str,
        name: str,
        previous: str | None,
        outcome: CommandOutcome,
        directory: DirectoryAdapter,
    ) -> ServiceResult:
        if outcome is CommandOutcome.UNKNOWN:
            code = "SERVER_UNREACHABLE"
            message = (
                f"Error adding `{name}` to the whitelist. "
                "The Minecraft server did not answer, try again later."
            )
        else:
            code = "ADD_REJECTED"
            message = (
                f"Error adding `{name}` to the whitelist. "
                "Verify if you typed the username correctly."
            )
        await directory.reply(message)
        return ServiceResult(
            ok=False,
            op=op,
            data={"member_id": key, "name": name, "previous": previous, "outcome": str(outcome)},
            error=ServiceError(code=code, message=message, detail={"name": name}),
        )

    async def _commit(
        self,
        key: str,
        record: LinkRecord | None,
        warnings: list[str],
    ) -> LinkTable:
        """Write *key*'s entry onto a fresh copy of the table and save it."""
        async with self._bridge.table():
            table = self._bridge.store.load()
            if record is None:
                table.remove(key)
            else:
                table.put(record)
            self._save(table, warnings)
        return table

    def _save(self, table: LinkTable, warnings: list[str]) -> None:
        if not self._bridge.store.save(table):
            warnings.append(SAVE_FAILED_WARNING)

    @staticmethod
    def _with_save_note(message: str, warnings: list[str]) -> str:
        if SAVE_FAILED_WARNING in warnings:
            return f"{message}\n{SAVE_FAILED_WARNING}"
        return message
