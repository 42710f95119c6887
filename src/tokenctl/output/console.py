"""Rich Console factory and theme for tokenctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. Output is plain text unless the
caller asks for ANSI styles with ``color=True``.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

TOK_THEME = Theme(
    {
        "tok.ok": "bold green",
        "tok.error": "bold red",
        "tok.op": "bold cyan",
        "tok.key": "dim",
        "tok.path": "dim",
        "tok.group": "bold",
        "tok.token": "bold blue",
        "tok.value": "default",
        "tok.type": "magenta",
        "tok.type.color": "bright_magenta",
        "tok.type.dimension": "cyan",
        "tok.type.typography": "yellow",
    }
)

_TYPE_STYLES: dict[str, str] = {
    "color": "tok.type.color",
    "dimension": "tok.type.dimension",
    "typography": "tok.type.typography",
}


def create_console(*, color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        color: Emit ANSI styles. The buffer is never a terminal, so the
            caller decides (AppContext passes True when stdout is a TTY).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=TOK_THEME,
        force_terminal=color,
        no_color=not color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_type(token_type: str) -> str:
    """Return the Rich style name for a token type."""
    return _TYPE_STYLES.get(token_type, "tok.type")
