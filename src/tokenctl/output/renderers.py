"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from rich.text import Text
from rich.tree import Tree

from tokenctl.domain.types import (
    DESCRIPTION_KEY,
    RESERVED_PREFIX,
    TYPE_KEY,
    VALUE_KEY,
)
from tokenctl.output.console import create_console, get_output, style_for_type

if TYPE_CHECKING:
    from rich.console import Console

    from tokenctl.services.result import ServiceResult

Renderer = Callable[..., None]

# Values longer than this are truncated in the tree view.
_MAX_VALUE_WIDTH = 60


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False, color: bool = False) -> str:
    """Render a ServiceResult to a string via Rich.

    Plain text unless *color* is set, in which case theme styles are
    emitted as ANSI escape codes.
    """
    console = create_console(color=color)

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="tok.ok")
    op = Text(f"  {result.op}", style="tok.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="tok.key")
    v = Text(str(value), style="tok.path" if key == "source" else "")
    console.print(k, v, end="")
    console.print()


def _compact(value: Any) -> str:
    """One-line rendering of a resolved value."""
    text = value if isinstance(value, str) else json.dumps(value, separators=(",", ":"))
    if len(text) > _MAX_VALUE_WIDTH:
        text = text[: _MAX_VALUE_WIDTH - 1] + "…"
    return text


def _is_token(node: Mapping[str, Any]) -> bool:
    return VALUE_KEY in node


def _build_tree(branch: Tree, nodes: Mapping[str, Any], *, verbose: bool) -> None:
    """Add one Rich tree entry per resolved token or group."""
    for name, node in nodes.items():
        if name.startswith(RESERVED_PREFIX) or not isinstance(node, Mapping):
            continue
        token_type = node.get(TYPE_KEY)
        if _is_token(node):
            label = Text(name, style="tok.token")
            label.append(f"  {token_type}", style=style_for_type(str(token_type)))
            label.append(f"  {_compact(node[VALUE_KEY])}", style="tok.value")
            if verbose and node.get(DESCRIPTION_KEY):
                label.append(f"  # {node[DESCRIPTION_KEY]}", style="dim")
            branch.add(label)
            continue
        label = Text(name, style="tok.group")
        if token_type:
            label.append(f"  {token_type}", style=style_for_type(str(token_type)))
        _build_tree(branch.add(label), node, verbose=verbose)


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(Text(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = Text(prefix)
    line.append(f"{duration:>8.2f}ms", style=style)
    line.append(f"  {name}")
    annotations = span_data.get("annotations") or {}
    if annotations:
        line.append("  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")")
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="tok.error")
    op = Text(f"  {result.op}", style="tok.op")
    code = Text(f"  [{err.code}]" if err else "", style="tok.key")
    console.print(label, op, code, Text(" — "), Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Operation renderers ───────────────────────────────────────────────


def _render_counts(console: Console, data: dict[str, Any]) -> None:
    for key in ("source", "token_count", "group_count", "alias_count"):
        if key in data:
            _field(console, key, data[key])


def _render_resolve(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _render_counts(console, result.data)
    tokens = result.data.get("tokens") or {}
    if tokens:
        console.print()
        tree = Tree(Text(str(result.data.get("source", "tokens")), style="tok.path"))
        _build_tree(tree, tokens, verbose=verbose)
        console.print(tree)
    if verbose:
        _render_meta(console, result)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _render_counts(console, result.data)
    if "valid" in result.data:
        _field(console, "valid", result.data["valid"])
    if verbose:
        enabled = [k for k, v in result.data.get("options", {}).items() if v]
        _field(console, "options", ", ".join(enabled) or "none")
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Renderer] = {
    "resolve": _render_resolve,
    "check": _render_check,
}
