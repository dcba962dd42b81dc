"""Tests for the alias command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from shelfwise.cli import cli


@pytest.mark.usefixtures("_isolated_workspace")
class TestAliasCommands:
    def test_resolve(self, cli_runner: CliRunner) -> None:
        args = ["-q", "alias", "resolve", "ga", "-a", "groceries", "-a", "garden"]
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 0
        assert result.output.strip() == "garden"

    def test_resolve_ambiguous_lists_candidates(self, cli_runner: CliRunner) -> None:
        args = ["alias", "resolve", "gro", "-a", "groceries", "-a", "grocery-list"]
        result = cli_runner.invoke(cli, args)
        assert result.exit_code == 1
        assert "groceries" in result.output
        assert "grocery-list" in result.output

    def test_resolve_priority(self, cli_runner: CliRunner) -> None:
        args = [
            "--json", "alias", "resolve", "gro",
            "-a", "groceries", "-a", "grocery-list", "-p", "grocery-list",
        ]
        result = cli_runner.invoke(cli, args)
        assert json.loads(result.output)["data"]["alias"] == "grocery-list"

    def test_key(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "alias", "key", "Crème Brûlée"])
        assert result.output.strip() == "creme brulee"

    def test_prefixes(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "alias", "prefixes", "garden", "groceries"])
        assert result.output.strip().splitlines() == ["garden\tga", "groceries\tgr"]

    def test_prefixes_table(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["alias", "prefixes", "books", "bookmarks"])
        assert result.exit_code == 0
        assert "Handle" in result.output
        assert "bookm" in result.output

    def test_prefixes_requires_aliases(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["alias", "prefixes"])
        assert result.exit_code == 2
