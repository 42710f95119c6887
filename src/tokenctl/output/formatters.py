"""Output mode dispatch.

The CLI renders ServiceResult for humans (Rich tree view), for scripts
(``--quiet``), or for machines (``--json``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tokenctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from tokenctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """How a ServiceResult should be presented."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    color: bool = False
    indent: int = 2


def format_result(
    result: ServiceResult,
    *,
    settings: OutputSettings | None = None,
    json_output: bool = False,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        settings: Output mode; when given, *json_output* is ignored.
        json_output: Shorthand for ``OutputSettings(json_output=True)``.
    """
    if settings is None:
        settings = OutputSettings(json_output=json_output)
    if settings.json_output:
        return result.model_dump_json(indent=settings.indent or None)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose, color=settings.color)
