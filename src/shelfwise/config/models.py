"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, shelfwise.toml only contains
overrides. A fresh workspace needs nothing at all; most set only
``[workspace] timezone``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from shelfwise.domain.ranking import DEFAULT_STEP, DEFAULT_WIDTH
from shelfwise.domain.timezones import parse_timezone_identifier

# --- shelfwise.toml sections ---


class WorkspaceConfig(BaseModel):
    """[workspace] section."""

    model_config = {"frozen": True}

    name: str = "my-shelf"
    timezone: str = "UTC"

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        parsed = parse_timezone_identifier(value)
        if not parsed.ok:
            raise ValueError(str(parsed.error))
        return parsed.unwrap().value


class RankConfig(BaseModel):
    """[rank] section."""

    model_config = {"frozen": True}

    width: int = Field(default=DEFAULT_WIDTH, ge=1, le=32)
    step: int = Field(default=DEFAULT_STEP, ge=1)
