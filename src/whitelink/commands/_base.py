"""Custom Click base classes with --examples support.

Provides WlCommand, which accepts an ``examples`` parameter.
When ``--examples`` is passed, the command prints usage examples and exits.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class WlCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag.

    ``log_level`` overrides the default WARNING level for whitelink loggers
    when this command runs; long-running commands pass INFO.
    """

    def __init__(
        self,
        *args: Any,
        examples: str | None = None,
        log_level: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        self.log_level = log_level
        if examples:
            _add_examples_option(self, examples)
