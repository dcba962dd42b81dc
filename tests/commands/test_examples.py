"""Tests for --examples flag on CLI commands.

Parametrized to cover all commands that define examples text.
"""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from shelfwise.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    # -- address --
    (["path", "--examples"], ["shelfwise path /today/groceries", "--cwd"]),
    (["locate", "--examples"], ["shelfwise locate", "2024-03-01..2024-03-07"]),
    (["dir", "--examples"], ["shelfwise dir permanent/2"]),
    # -- dates --
    (["date", "--examples"], ["this-week", "--timezone Asia/Tokyo"]),
    (["when", "--examples"], ["1h30m", "--future"]),
    # -- rank --
    (["rank", "--examples"], ["shelfwise rank head", "shelfwise rank spaced 5"]),
    (["rank", "head", "--examples"], ["shelfwise rank head i k"]),
    (["rank", "tail", "--examples"], ["shelfwise rank tail"]),
    (["rank", "before", "--examples"], ["shelfwise rank before"]),
    (["rank", "after", "--examples"], ["shelfwise rank after"]),
    (["rank", "between", "--examples"], ["shelfwise rank between a b"]),
    (["rank", "compare", "--examples"], ["shelfwise rank compare"]),
    (["rank", "spaced", "--examples"], ["shelfwise rank spaced 3"]),
    # -- alias --
    (["alias", "--examples"], ["shelfwise alias resolve", "shelfwise alias key"]),
    (["alias", "resolve", "--examples"], ["-p grocery-list"]),
    (["alias", "key", "--examples"], ["Crème Brûlée"]),
    (["alias", "prefixes", "--examples"], ["books bookmarks"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    """Generate a readable test ID from args."""
    args, _ = item
    return "_".join(a for a in args if a != "--examples")


@pytest.mark.parametrize(
    "args,expected_keywords",
    EXAMPLES_COMMANDS,
    ids=[_examples_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples_flag(
    cli_runner: CliRunner, args: list[str], expected_keywords: list[str]
) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    for kw in expected_keywords:
        assert kw in result.output, f"Expected '{kw}' in examples output for {args}"


class TestExamplesInHelp:
    """Test that --examples appears in --help output for commands that have it."""

    @pytest.mark.parametrize(
        "args",
        [
            ["path", "--help"],
            ["date", "--help"],
            ["rank", "--help"],
            ["rank", "before", "--help"],
            ["alias", "resolve", "--help"],
        ],
    )
    def test_examples_in_help(self, cli_runner: CliRunner, args: list[str]) -> None:
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 0
        assert "--examples" in result.output
