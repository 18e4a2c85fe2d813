"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Bridge initialization, a console
directory adapter for operator commands, and centralized result emission.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import TYPE_CHECKING, Any

import click

from whitelink.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from whitelink.config.settings import WlSettings
    from whitelink.infrastructure.bridge import Bridge
    from whitelink.services.result import ServiceResult


class ConsoleDirectory:
    """Directory adapter for the terminal.

    Replies go to stderr so stdout stays reserved for the rendered result.
    There is no guild to edit, so role changes are always skipped.
    """

    def __init__(self, *, silent: bool = False) -> None:
        self._silent = silent
        self.replies: list[str] = []

    async def reply(self, text: str) -> None:
        self.replies.append(text)
        if not self._silent:
            click.echo(text, err=True)

    async def add_role(self, member_id: str) -> bool:
        return False

    async def remove_role(self, member_id: str) -> bool:
        return False


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The bridge is created on first use so ``--help`` and ``--version``
    never touch the link table.
    """

    def __init__(self, settings: WlSettings, *, log_level: int | None = None) -> None:
        self.settings = settings
        self._bridge: Bridge | None = None

        from whitelink.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, log_json=settings.log_json, level=log_level
        )

        if settings.verbose:
            from whitelink.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def bridge(self) -> Bridge:
        """The bridge instance (created lazily on first access)."""
        if self._bridge is None:
            from whitelink.infrastructure.bridge import Bridge

            self._bridge = Bridge(self.settings)
            self._bridge.init_plugins()
        return self._bridge

    def directory(self) -> ConsoleDirectory:
        return ConsoleDirectory(silent=self.settings.json_output or self.settings.quiet)

    def run(self, coro: Coroutine[Any, Any, ServiceResult]) -> ServiceResult:
        """Drive a service coroutine to completion from synchronous Click code."""
        return asyncio.run(coro)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
