"""Identifier primitives: item ids, alias slugs, and item ranks.

- ItemId: UUID v7, stored lowercase.
- AliasSlug: human-typed handle, lowercase ``a-z0-9`` words joined by hyphens.
- ItemRank: opaque order key; plain lexicographic order is the rank order.
"""

from __future__ import annotations

import re

from shelfwise.domain.primitives import (
    Primitive,
    PrimitiveRules,
    matches,
    max_length,
    min_length,
)
from shelfwise.domain.validation import Result

UUID_V7_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-7[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}"
)
ALIAS_SLUG_PATTERN = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")
ITEM_RANK_PATTERN = re.compile(r"[0-9a-z]+")

ALIAS_MIN_LENGTH = 3
ALIAS_MAX_LENGTH = 64


def _lower(value: str) -> str:
    return value.strip().lower()


ITEM_ID = PrimitiveRules(
    kind="ItemId",
    normalize=_lower,
    checks=(matches(UUID_V7_PATTERN.fullmatch, "value must be a UUID v7"),),
)

ALIAS_SLUG = PrimitiveRules(
    kind="AliasSlug",
    normalize=_lower,
    checks=(
        min_length(ALIAS_MIN_LENGTH, "alias is too short"),
        max_length(ALIAS_MAX_LENGTH, "alias is too long"),
        matches(
            ALIAS_SLUG_PATTERN.fullmatch,
            "alias must use lowercase letters, numbers, and hyphen",
        ),
    ),
)

ITEM_RANK = PrimitiveRules(
    kind="ItemRank",
    checks=(
        min_length(1, "rank cannot be empty"),
        matches(ITEM_RANK_PATTERN.fullmatch, "rank has invalid characters"),
    ),
)


def parse_item_id(raw: object) -> Result[Primitive]:
    return ITEM_ID.parse(raw)


def parse_alias_slug(raw: object) -> Result[Primitive]:
    return ALIAS_SLUG.parse(raw)


def parse_item_rank(raw: object) -> Result[Primitive]:
    return ITEM_RANK.parse(raw)


def item_rank(raw: str) -> Primitive:
    """Build an ItemRank from trusted text (generator output, stored records)."""
    return ITEM_RANK.create(raw)
