"""Tests for Rich Console factory and theme."""

from io import StringIO

from tokenctl.output.console import (
    TOK_THEME,
    create_console,
    get_output,
    style_for_type,
)


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        assert isinstance(create_console().file, StringIO)

    def test_plain_by_default(self) -> None:
        console = create_console()
        console.print("[bold red]hello[/bold red]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "hello" in output

    def test_color_emits_ansi(self) -> None:
        console = create_console(color=True)
        console.print("[tok.error]ERROR[/tok.error]")
        assert "\x1b[" in get_output(console)

    def test_custom_width(self) -> None:
        assert create_console(width=80).width == 80

    def test_default_width(self) -> None:
        assert create_console().width == 120


class TestTheme:
    def test_theme_styles_defined(self) -> None:
        for name in ("tok.ok", "tok.error", "tok.op", "tok.token", "tok.group", "tok.type"):
            assert name in TOK_THEME.styles

    def test_themed_markup_renders(self) -> None:
        console = create_console()
        console.print("[tok.ok]OK[/tok.ok]")
        assert "OK" in get_output(console)


class TestStyleForType:
    def test_known_types(self) -> None:
        assert style_for_type("color") == "tok.type.color"
        assert style_for_type("dimension") == "tok.type.dimension"
        assert style_for_type("typography") == "tok.type.typography"

    def test_fallback(self) -> None:
        assert style_for_type("fontFamily") == "tok.type"
        assert style_for_type("sparkle") == "tok.type"
