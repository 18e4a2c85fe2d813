"""Fixtures for CLI command tests."""

from __future__ import annotations

import pytest

from tests.conftest import FakeExecutor


@pytest.fixture
def fake_rcon(monkeypatch: pytest.MonkeyPatch, _isolated_root: None) -> FakeExecutor:
    """Route every Bridge the CLI builds to one shared fake executor."""
    fake = FakeExecutor()
    monkeypatch.setattr(
        "whitelink.infrastructure.bridge.RemoteExecutor",
        lambda config: fake,
    )
    return fake
