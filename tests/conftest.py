"""Shared pytest fixtures and test helpers for shelfwise tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from datetime import UTC, datetime
from pathlib import Path

import pytest
from click.testing import CliRunner

from shelfwise.config.settings import ShelfSettings
from shelfwise.services.telemetry import _current_span, disable_telemetry

# A Saturday. Most date expectations in the suite are relative to it.
REFERENCE = datetime(2024, 9, 21, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Drop SHELFWISE_* env vars and reset telemetry around every test."""
    for name in list(os.environ):
        if name.startswith("SHELFWISE_"):
            monkeypatch.delenv(name)
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def reference() -> datetime:
    return REFERENCE


@pytest.fixture
def settings(tmp_path: Path) -> ShelfSettings:
    """Settings pinned to UTC and the reference instant, with no config file."""
    return ShelfSettings.from_cli(workspace_root=tmp_path, now=REFERENCE, timezone="UTC")


@pytest.fixture
def _isolated_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI never picks up a stray shelfwise.toml.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)

