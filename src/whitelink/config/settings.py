"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs    : CLI flags passed by Click
  2. Env vars       : ``WHITELINK_*`` prefix, ``__`` for nested sections
  3. Legacy env vars: ``RCON_HOST``, ``DISCORD_TOKEN``, ``WHITELISTED_ROLE_ID`` ...
  4. TOML file      : ``whitelink.toml`` discovered via walk-up
  5. Code defaults  : baked into the section models
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any, ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from whitelink.config.discovery import find_config
from whitelink.config.models import DiscordConfig, RconConfig, RolesConfig, StoreConfig

# Plain env names used by existing deployments: name -> (section, field).
# WHIETLISTED_ROLE_ID is a misspelling that shipped and is still set in the wild.
LEGACY_ENV_VARS: dict[str, tuple[str, str]] = {
    "RCON_HOST": ("rcon", "host"),
    "RCON_PORT": ("rcon", "port"),
    "RCON_PASSWORD": ("rcon", "password"),
    "DISCORD_TOKEN": ("discord", "token"),
    "CLIENT_ID": ("discord", "client_id"),
    "GUILD_ID": ("discord", "guild_id"),
    "WHIETLISTED_ROLE_ID": ("roles", "linked_role_id"),
    "WHITELISTED_ROLE_ID": ("roles", "linked_role_id"),
}


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``whitelink.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


class LegacyEnvSettingsSource(PydanticBaseSettingsSource):
    """Map the un-prefixed env names of older deployments onto sections."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, dict[str, str]] = {}
        for env_name, (section, key) in LEGACY_ENV_VARS.items():
            value = os.environ.get(env_name)
            if value:
                self._data.setdefault(section, {})[key] = value

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class WlSettings(BaseSettings):
    """Unified settings for the whitelink CLI and bot.

    Stored on the :class:`~whitelink.commands._context.AppContext` at the
    CLI root level.

    Attributes:
        root: Directory relative store paths resolve against (parent of
            ``whitelink.toml``, or CWD if no config found).
        config_path: The TOML file in use, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "WHITELINK_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    rcon: RconConfig = Field(default_factory=RconConfig)
    discord: DiscordConfig = Field(default_factory=DiscordConfig)
    roles: RolesConfig = Field(default_factory=RolesConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)

    # Retained for type-checker visibility; not used at runtime.
    _toml_path: ClassVar[Path | None] = None

    @property
    def store_file(self) -> Path:
        """Absolute location of the link table file."""
        path = Path(self.store.path)
        if path.is_absolute():
            return path
        return self.root / path

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert legacy env and TOML sources between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            LegacyEnvSettingsSource(settings_cls),
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> WlSettings:
        """Construct settings from a CLI invocation.

        Discovers ``whitelink.toml`` via walk-up (or explicit *config_path*),
        resolves *root* from the config file's parent directory, and merges
        CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(root)

        resolved_root = root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
