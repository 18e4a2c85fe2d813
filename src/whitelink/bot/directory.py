"""Discord implementations of :class:`~whitelink.services.directory.DirectoryAdapter`.

Role changes resolve the member and the role from the guild cache. If
either is missing, or Discord refuses the edit, the change is skipped and
False is returned.
"""

from __future__ import annotations

import logging

import discord

logger = logging.getLogger(__name__)


def _snowflake(value: str | int | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class GuildRoles:
    """Add and remove the linked role inside one guild."""

    def __init__(self, guild: discord.Guild | None, role_id: str | None) -> None:
        self._guild = guild
        self._role_id = _snowflake(role_id)

    def _resolve(self, member_id: str) -> tuple[discord.Member, discord.Role] | None:
        if self._guild is None or self._role_id is None:
            return None
        user_id = _snowflake(member_id)
        if user_id is None:
            return None
        member = self._guild.get_member(user_id)
        role = self._guild.get_role(self._role_id)
        if member is None or role is None:
            return None
        return member, role

    async def add(self, member_id: str) -> bool:
        resolved = self._resolve(member_id)
        if resolved is None:
            return False
        member, role = resolved
        try:
            await member.add_roles(role, reason="Linked a Minecraft account")
        except discord.HTTPException:
            logger.warning("Could not add role %s to %s", role.id, member.id, exc_info=True)
            return False
        return True

    async def remove(self, member_id: str) -> bool:
        resolved = self._resolve(member_id)
        if resolved is None:
            return False
        member, role = resolved
        if role not in member.roles:
            return False
        try:
            await member.remove_roles(role, reason="Unlinked a Minecraft account")
        except discord.HTTPException:
            logger.warning("Could not remove role %s from %s", role.id, member.id, exc_info=True)
            return False
        return True


class InteractionDirectory:
    """Replies to a slash-command interaction; all replies are ephemeral.

    The first reply answers the interaction, later ones are follow-ups.
    Call :meth:`defer` before any slow work: Discord drops interactions
    that get no response within three seconds.
    """

    def __init__(self, interaction: discord.Interaction, role_id: str | None) -> None:
        self._interaction = interaction
        self._roles = GuildRoles(interaction.guild, role_id)

    async def defer(self) -> None:
        if not self._interaction.response.is_done():
            await self._interaction.response.defer(ephemeral=True, thinking=True)

    async def reply(self, text: str) -> None:
        if self._interaction.response.is_done():
            await self._interaction.followup.send(text, ephemeral=True)
        else:
            await self._interaction.response.send_message(text, ephemeral=True)

    async def add_role(self, member_id: str) -> bool:
        return await self._roles.add(member_id)

    async def remove_role(self, member_id: str) -> bool:
        return await self._roles.remove(member_id)
