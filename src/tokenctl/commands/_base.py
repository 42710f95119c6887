"""Custom Click base class and shared options.

``TokCommand`` accepts an ``examples`` parameter: ``--examples`` prints
usage examples and exits, keeping ``--help`` concise.
``resolve_option_flags`` attaches the tri-state resolution switches.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

import click

P = ParamSpec("P")
R = TypeVar("R")


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

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


class TokCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


# (option name, help) for each ResolveOptions switch, in declaration order.
RESOLVE_SWITCHES: tuple[tuple[str, str], ...] = (
    ("resolve-aliases", "Replace alias references with the aliased token."),
    ("publish-metadata", "Add _kind/_path metadata to every node."),
    ("flatten-aliases", "Replace aliased tokens with their bare value."),
    ("skip-validation", "Skip value validation; keep unresolvable aliases."),
)


def resolve_option_flags(
    *names: str,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Attach ``--X/--no-X`` flags for the named switches (all when none given).

    Each flag defaults to None so that unset flags fall back to the
    ``[resolve]`` config section.
    """
    selected = [(n, h) for n, h in RESOLVE_SWITCHES if not names or n in names]

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        for name, help_text in reversed(selected):
            func = click.option(
                f"--{name}/--no-{name}",
                name.replace("-", "_"),
                default=None,
                help=help_text,
            )(func)
        return func

    return decorator
