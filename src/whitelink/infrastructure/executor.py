"""RemoteExecutor: one RCON session per command.

INVARIANT: Never raises for transport problems. A connect, auth, send, or
timeout failure is logged and returned as ``""``, which the classifier
reads as an unknown outcome. No retry and no session reuse.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from rcon.exceptions import EmptyResponse, SessionTimeout, WrongPassword
from rcon.source import rcon

if TYPE_CHECKING:
    from whitelink.config.models import RconConfig

logger = logging.getLogger(__name__)

Sender = Callable[..., Awaitable[str]]


class RemoteExecutor:
    """Run single whitelist commands against the configured server.

    Parameters:
        config: Host, port, password, and timeout for each connection.
        send: Coroutine function with the signature of
            :func:`rcon.source.rcon`; swapped out in tests.
    """

    def __init__(self, config: RconConfig, *, send: Sender | None = None) -> None:
        self._config = config
        self._send = send or rcon

    async def execute(self, command: str) -> str:
        cfg = self._config
        try:
            reply = await asyncio.wait_for(
                self._send(command, host=cfg.host, port=cfg.port, passwd=cfg.password),
                timeout=cfg.timeout,
            )
        except WrongPassword:
            logger.error("RCON authentication failed for %s:%s", cfg.host, cfg.port)
            return ""
        except (OSError, TimeoutError, EmptyResponse, SessionTimeout):
            logger.error("Error executing Minecraft command %r", command, exc_info=True)
            return ""

        logger.debug("RCON %r -> %r", command, reply)
        return reply
