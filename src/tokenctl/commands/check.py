"""Command: validate a design token file."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from tokenctl.commands._base import TokCommand, resolve_option_flags

if TYPE_CHECKING:
    from tokenctl.commands._context import AppContext


@click.command(
    cls=TokCommand,
    examples="""\
  tokenctl check tokens.json
  tokenctl --json check tokens.json
  tokenctl check tokens.json --skip-validation""",
)
@click.argument("token_file", type=click.Path(path_type=Path, dir_okay=False))
@resolve_option_flags("skip-validation")
@click.pass_obj
def check(app: AppContext, token_file: Path, skip_validation: bool | None) -> None:
    """Check TOKEN_FILE for invalid names, values, and aliases."""
    from tokenctl.services.resolve import ResolveService

    options = app.settings.resolve.to_options(skip_validation=skip_validation)
    app.emit(ResolveService(app.settings).check_file(token_file, options))
