"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``SHELFWISE_*`` prefix
  3. TOML file    — ``shelfwise.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource`. The
file it reads is chosen by :func:`locate_config_file`: ``--config`` first,
then ``SHELFWISE_CONFIG``, then the nearest ``shelfwise.toml`` walking up
from the workspace directory (the way git finds ``.git/``).
"""

from __future__ import annotations

import os
import threading
import tomllib
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import click
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from shelfwise.config.models import RankConfig, WorkspaceConfig
from shelfwise.domain.timezones import parse_timezone_identifier

CONFIG_FILENAME = "shelfwise.toml"
CONFIG_ENV_VAR = "SHELFWISE_CONFIG"


def locate_config_file(explicit: str | None = None, start: Path | None = None) -> Path | None:
    """Choose the ``shelfwise.toml`` to load, or None to run on defaults.

    A file named by *explicit* or ``SHELFWISE_CONFIG`` is used only if it
    exists; naming a missing file never falls back to the walk-up.
    """
    named = explicit or os.environ.get(CONFIG_ENV_VAR)
    if named:
        candidate = Path(named)
        return candidate if candidate.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``shelfwise.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ShelfSettings(BaseSettings):
    """Unified settings for the entire shelfwise CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.  Stored in
    ``click.Context.obj`` at the CLI root level.

    Attributes:
        workspace_root: Directory holding ``shelfwise.toml`` (or CWD if
            no config found).
        config_path: The config file actually loaded, if any.
        timezone: ``--timezone`` override of ``[workspace] timezone``.
        now: ``--now`` override of the reference instant.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SHELFWISE_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (derived from config location, not read from TOML) ---
    workspace_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    timezone: str | None = None
    now: datetime | None = None

    # --- TOML sections ---
    workspace: WorkspaceConfig = Field(default_factory=WorkspaceConfig)
    rank: RankConfig = Field(default_factory=RankConfig)

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str | None) -> str | None:
        if value is None:
            return None
        parsed = parse_timezone_identifier(value)
        if not parsed.ok:
            raise ValueError(str(parsed.error))
        return parsed.unwrap().value

    @field_validator("now")
    @classmethod
    def _aware_now(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @property
    def effective_timezone(self) -> str:
        """``--timezone`` when given, else the workspace timezone."""
        return self.timezone or self.workspace.timezone

    def reference_instant(self) -> datetime:
        """``--now`` when given, else the current time."""
        return self.now or datetime.now(UTC)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        workspace_root: Path | None = None,
        **cli_flags: Any,
    ) -> ShelfSettings:
        """Construct settings from CLI invocation.

        Picks the config file with :func:`locate_config_file`,
        resolves *workspace_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides. Flags left at
        None are dropped so they do not mask env or TOML values.
        """
        toml_path = locate_config_file(config_path, workspace_root)

        resolved_root = workspace_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        overrides = {key: value for key, value in cli_flags.items() if value is not None}
        _tls.toml_path = toml_path
        try:
            return cls(
                workspace_root=resolved_root,
                config_path=toml_path,
                **overrides,
            )
        finally:
            _tls.toml_path = None
