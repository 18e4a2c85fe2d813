"""Discord client: slash commands and guild member events.

Slash commands (registered to the configured guild):
  /linkmc username   link the caller's Minecraft account
  /unlinkmc          unlink it
  /checkmc user      show a member's linked account (administrators only)

Events:
  on_member_remove   drop the leaving member's link
  on_member_update   drop the link when the linked role is taken away
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands

from whitelink.bot.directory import InteractionDirectory
from whitelink.services.reconcile import ReconcileService

if TYPE_CHECKING:
    from whitelink.infrastructure.bridge import Bridge
    from whitelink.services.result import ServiceResult

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Something went wrong while handling that command."


def _log_result(result: ServiceResult) -> None:
    if result.ok:
        logger.info("%s ok %s", result.op, result.data)
    else:
        code = result.error.code if result.error else "UNKNOWN"
        logger.info("%s failed %s %s", result.op, code, result.data)
    for warning in result.warnings:
        logger.warning("%s: %s", result.op, warning)


def has_role(member: discord.Member, role_id: int) -> bool:
    return any(role.id == role_id for role in member.roles)


class WhitelinkClient(discord.Client):
    """Discord client wired to a :class:`ReconcileService`."""

    def __init__(self, bridge: Bridge, *, sync_commands: bool = True) -> None:
        intents = discord.Intents.default()
        intents.members = True
        super().__init__(intents=intents)
        self.bridge = bridge
        self.service = ReconcileService(bridge)
        self.tree = app_commands.CommandTree(self)
        self._sync_commands = sync_commands
        self._register_commands()

    @property
    def role_id(self) -> str | None:
        return self.bridge.settings.roles.linked_role_id

    def _register_commands(self) -> None:
        service = self.service
        tree = self.tree

        @tree.command(name="linkmc", description="Link your Minecraft account to Discord")
        @app_commands.describe(username="Your Minecraft IGN")
        @app_commands.guild_only()
        async def linkmc(interaction: discord.Interaction, username: str) -> None:
            directory = InteractionDirectory(interaction, self.role_id)
            await directory.defer()
            _log_result(await service.link(str(interaction.user.id), username, directory))

        @tree.command(name="unlinkmc", description="Unlink your Minecraft account from Discord")
        @app_commands.guild_only()
        async def unlinkmc(interaction: discord.Interaction) -> None:
            directory = InteractionDirectory(interaction, self.role_id)
            await directory.defer()
            _log_result(await service.unlink(str(interaction.user.id), directory))

        @tree.command(name="checkmc", description="Verify the Minecraft account linked to a user")
        @app_commands.describe(user="The user to check the linked account")
        @app_commands.default_permissions(administrator=True)
        @app_commands.guild_only()
        async def checkmc(interaction: discord.Interaction, user: discord.User) -> None:
            directory = InteractionDirectory(interaction, self.role_id)
            await directory.defer()
            _log_result(await service.check(str(user.id), directory, label=user.mention))

        @tree.error
        async def on_app_command_error(
            interaction: discord.Interaction,
            error: app_commands.AppCommandError,
        ) -> None:
            logger.error("Slash command failed", exc_info=error)
            try:
                await InteractionDirectory(interaction, None).reply(GENERIC_FAILURE)
            except discord.HTTPException:
                logger.debug("Could not report command failure", exc_info=True)

    async def setup_hook(self) -> None:
        if not self._sync_commands:
            return
        logger.info("Registering slash commands...")
        guild_id = self.bridge.settings.discord.guild_id
        if guild_id:
            guild = discord.Object(id=int(guild_id))
            self.tree.copy_global_to(guild=guild)
            await self.tree.sync(guild=guild)
        else:
            await self.tree.sync()
        logger.info("Commands registered!")

    async def on_ready(self) -> None:
        logger.info("Ready as %s!", self.user)

    async def on_member_remove(self, member: discord.Member) -> None:
        _log_result(await self.service.member_removed(str(member.id)))

    async def on_member_update(self, before: discord.Member, after: discord.Member) -> None:
        if not self.role_id:
            return
        role_id = int(self.role_id)
        had, has = has_role(before, role_id), has_role(after, role_id)
        if had == has:
            return
        _log_result(await self.service.role_changed(str(after.id), had_role=had, has_role=has))

    async def on_error(self, event_method: str, /, *args: object, **kwargs: object) -> None:
        logger.exception("Unhandled error in %s", event_method)


def create_client(bridge: Bridge, *, sync_commands: bool = True) -> WhitelinkClient:
    """Build the Discord client for *bridge*'s settings."""
    return WhitelinkClient(bridge, sync_commands=sync_commands)
