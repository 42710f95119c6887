"""Command: resolve a design token file."""

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
  tokenctl resolve tokens.json
  tokenctl resolve tokens.json --resolve-aliases
  tokenctl resolve tokens.json --resolve-aliases --flatten-aliases
  tokenctl --json resolve tokens.yaml --resolve-aliases --publish-metadata
  tokenctl resolve draft.tokens.json --skip-validation""",
)
@click.argument("token_file", type=click.Path(path_type=Path, dir_okay=False))
@resolve_option_flags()
@click.pass_obj
def resolve(
    app: AppContext,
    token_file: Path,
    resolve_aliases: bool | None,
    publish_metadata: bool | None,
    flatten_aliases: bool | None,
    skip_validation: bool | None,
) -> None:
    """Resolve aliases and inherited types in TOKEN_FILE."""
    from tokenctl.services.resolve import ResolveService

    options = app.settings.resolve.to_options(
        resolve_aliases=resolve_aliases,
        publish_metadata=publish_metadata,
        flatten_aliases=flatten_aliases,
        skip_validation=skip_validation,
    )
    app.emit(ResolveService(app.settings).resolve_file(token_file, options))
