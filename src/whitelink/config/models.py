"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, whitelink.toml only contains
overrides. A working bot needs [rcon] password and the [discord] section.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


def _snowflake(value: Any) -> str | None:
    """Normalize a Discord id; blank means unset."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if not text.isdecimal():
        raise ValueError(f"expected a numeric Discord id, got {value!r}")
    return text


class RconConfig(BaseModel):
    """[rcon] section: the Minecraft server's remote console."""

    model_config = {"frozen": True}

    host: str = "localhost"
    port: int = 25575
    password: str = ""
    timeout: float = 2.0


class DiscordConfig(BaseModel):
    """[discord] section."""

    model_config = {"frozen": True}

    token: str = ""
    client_id: str | None = None
    guild_id: str | None = None

    @field_validator("client_id", "guild_id", mode="before")
    @classmethod
    def _check_ids(cls, value: Any) -> str | None:
        return _snowflake(value)


class RolesConfig(BaseModel):
    """[roles] section.

    Without ``linked_role_id`` no role is ever added or removed, and role
    revocation events are ignored. Whitelist commands are unaffected.
    """

    model_config = {"frozen": True}

    linked_role_id: str | None = None

    @field_validator("linked_role_id", mode="before")
    @classmethod
    def _check_role_id(cls, value: Any) -> str | None:
        return _snowflake(value)

    @property
    def enabled(self) -> bool:
        return bool(self.linked_role_id)


class StoreConfig(BaseModel):
    """[store] section. Relative paths resolve against the config root."""

    model_config = {"frozen": True}

    path: str = "whitelist.json"


class WlConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    rcon: RconConfig = Field(default_factory=RconConfig)
    discord: DiscordConfig = Field(default_factory=DiscordConfig)
    roles: RolesConfig = Field(default_factory=RolesConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
