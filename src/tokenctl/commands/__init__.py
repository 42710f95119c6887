"""Subcommand modules for tokenctl.

Command modules are imported inside :func:`register_commands` so that the
root group can be built before any service code is loaded.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach ``resolve`` and ``check`` to the root group."""
    from tokenctl.commands.check import check
    from tokenctl.commands.resolve import resolve

    for command in (resolve, check):
        cli.add_command(command)
