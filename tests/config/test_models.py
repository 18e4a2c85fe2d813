"""Tests for configuration section models."""

import pytest

from pydantic import ValidationError

from whitelink.config.models import DiscordConfig, RconConfig, RolesConfig, WlConfig


class TestModels:
    def test_root_defaults(self) -> None:
        cfg = WlConfig()
        assert cfg.rcon.port == 25575
        assert cfg.store.path == "whitelist.json"

    def test_roles_enabled_only_with_id(self) -> None:
        assert RolesConfig().enabled is False
        assert RolesConfig(linked_role_id="").enabled is False
        assert RolesConfig(linked_role_id="1").enabled is True

    @pytest.mark.parametrize("value", ["admins", "12ab", "-5"])
    def test_non_numeric_role_id_rejected(self, value: str) -> None:
        with pytest.raises(ValidationError):
            RolesConfig(linked_role_id=value)

    def test_ids_accept_integers_and_blank(self) -> None:
        assert RolesConfig(linked_role_id=4242).linked_role_id == "4242"
        assert RolesConfig(linked_role_id="  ").linked_role_id is None
        assert DiscordConfig(guild_id=" 999 ").guild_id == "999"

    def test_non_numeric_guild_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DiscordConfig(guild_id="my-server")

    def test_port_coerced_from_string(self) -> None:
        assert RconConfig.model_validate({"port": "25580"}).port == 25580

    def test_frozen(self) -> None:
        with pytest.raises(Exception):
            RconConfig().host = "x"  # type: ignore[misc]
