"""Shared pytest fixtures and test doubles for whitelink tests."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from click.testing import CliRunner

from whitelink.config.settings import LEGACY_ENV_VARS, WlSettings
from whitelink.infrastructure.bridge import Bridge

ADDED = "Added {name} to the whitelist"
REMOVED = "Removed {name} from the whitelist"


class FakeExecutor:
    """Records issued commands and answers like a vanilla server.

    ``replies`` maps an exact command to its reply; unmapped ``add`` and
    ``remove`` commands get the vanilla success text. ``offline`` makes
    every command return ``""`` as the real executor does on failure.
    """

    def __init__(self) -> None:
        self.commands: list[str] = []
        self.replies: dict[str, str] = {}
        self.offline = False

    async def execute(self, command: str) -> str:
        await asyncio.sleep(0)  # yield like a real network call
        self.commands.append(command)
        if self.offline:
            return ""
        if command in self.replies:
            return self.replies[command]
        verb, _, name = command.removeprefix("whitelist ").partition(" ")
        if verb == "add":
            return ADDED.format(name=name)
        if verb == "remove":
            return REMOVED.format(name=name)
        return ""


class FakeDirectory:
    """Records replies and role edits; role edits succeed unless told otherwise."""

    def __init__(self, *, roles_resolve: bool = True) -> None:
        self.replies: list[str] = []
        self.roles_added: list[str] = []
        self.roles_removed: list[str] = []
        self.roles_resolve = roles_resolve

    async def reply(self, text: str) -> None:
        self.replies.append(text)

    async def add_role(self, member_id: str) -> bool:
        if not self.roles_resolve:
            return False
        self.roles_added.append(member_id)
        return True

    async def remove_role(self, member_id: str) -> bool:
        if not self.roles_resolve:
            return False
        self.roles_removed.append(member_id)
        return True


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host environment variables out of settings resolution."""
    import os

    for name in LEGACY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("WHITELINK_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> WlSettings:
    return WlSettings.from_cli(root=tmp_path)


@pytest.fixture
def role_settings(tmp_path: Path) -> WlSettings:
    return WlSettings.from_cli(root=tmp_path, roles={"linked_role_id": "4242"})


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def directory() -> FakeDirectory:
    return FakeDirectory()


@pytest.fixture
def bridge(settings: WlSettings, executor: FakeExecutor) -> Bridge:
    return Bridge(settings, executor=executor)  # type: ignore[arg-type]


@pytest.fixture
def role_bridge(role_settings: WlSettings, executor: FakeExecutor) -> Bridge:
    return Bridge(role_settings, executor=executor)  # type: ignore[arg-type]


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI uses an isolated link table."""
    monkeypatch.chdir(tmp_path)
