"""Tests for Rich Console factory and theme."""

from io import StringIO

import pytest

from shelfwise.output.console import SHELF_THEME, create_console, get_output, style_for_segment


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[bold red]hello[/bold red]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "hello" in output

    def test_custom_width(self) -> None:
        assert create_console(width=80).width == 80

    def test_default_width(self) -> None:
        assert create_console().width == 120

    def test_theme_styles_resolve(self) -> None:
        console = create_console()
        console.print("[shelf.rank]i[/shelf.rank]")
        assert get_output(console).strip() == "i"


class TestGetOutput:
    def test_extracts_printed_text(self) -> None:
        console = create_console(no_color=True)
        console.print("hello world")
        assert "hello world" in get_output(console)

    def test_empty_console(self) -> None:
        assert get_output(create_console()) == ""


class TestStyleForSegment:
    @pytest.mark.parametrize(
        "kind,style",
        [
            ("Date", "shelf.segment.date"),
            ("Numeric", "shelf.segment.numeric"),
            ("ItemId", "shelf.segment.item"),
            ("ItemAlias", "shelf.segment.alias"),
            ("range", "shelf.segment.range"),
        ],
    )
    def test_known_kinds(self, kind: str, style: str) -> None:
        assert style_for_segment(kind) == style
        assert style in SHELF_THEME.styles

    def test_unknown_kind(self) -> None:
        assert style_for_segment("Other") == ""
