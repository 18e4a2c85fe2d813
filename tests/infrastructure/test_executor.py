"""Tests for RemoteExecutor: one session per command, never raises."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from rcon.exceptions import EmptyResponse, SessionTimeout, WrongPassword

from whitelink.config.models import RconConfig
from whitelink.infrastructure.executor import RemoteExecutor


class Sender:
    def __init__(self, reply: str | Exception = "", *, delay: float = 0.0) -> None:
        self._reply = reply
        self._delay = delay
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def __call__(self, command: str, **kwargs: Any) -> str:
        self.calls.append((command, kwargs))
        if self._delay:
            await asyncio.sleep(self._delay)
        if isinstance(self._reply, Exception):
            raise self._reply
        return self._reply


CONFIG = RconConfig(host="mc.example", port=25575, password="secret", timeout=0.5)


class TestExecute:
    def test_returns_reply(self) -> None:
        send = Sender("Added Notch to the whitelist")
        executor = RemoteExecutor(CONFIG, send=send)

        reply = asyncio.run(executor.execute("whitelist add Notch"))

        assert reply == "Added Notch to the whitelist"
        assert send.calls == [
            (
                "whitelist add Notch",
                {"host": "mc.example", "port": 25575, "passwd": "secret"},
            )
        ]

    @pytest.mark.parametrize(
        "error",
        [
            ConnectionRefusedError("refused"),
            WrongPassword(),
            EmptyResponse(),
            SessionTimeout(),
        ],
    )
    def test_transport_failure_returns_empty(self, error: Exception) -> None:
        executor = RemoteExecutor(CONFIG, send=Sender(error))
        assert asyncio.run(executor.execute("whitelist add Notch")) == ""

    def test_slow_server_times_out(self) -> None:
        config = RconConfig(timeout=0.01)
        executor = RemoteExecutor(config, send=Sender("late", delay=1.0))
        assert asyncio.run(executor.execute("whitelist remove Notch")) == ""

    def test_one_call_per_command(self) -> None:
        send = Sender("ok")
        executor = RemoteExecutor(CONFIG, send=send)

        async def scenario() -> None:
            await executor.execute("whitelist add A_1")
            await executor.execute("whitelist add B_2")

        asyncio.run(scenario())
        assert [command for command, _ in send.calls] == ["whitelist add A_1", "whitelist add B_2"]

    def test_default_timeout_answers_within_interaction_window(self) -> None:
        assert RconConfig().timeout < 3.0
