"""Canonical keys for diacritic- and case-insensitive alias matching.

``Ångström`` typed precomposed or with combining marks canonicalizes to
the same key ``angstrom``.
"""

from __future__ import annotations

import unicodedata

from shelfwise.domain.primitives import Primitive, PrimitiveRules


def canonicalize(text: str) -> str:
    """NFKD-decompose, drop combining marks, NFKC-recompose, then lowercase."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.category(ch).startswith("M"))
    return unicodedata.normalize("NFKC", stripped).lower()


CANONICAL_KEY = PrimitiveRules(kind="CanonicalKey", normalize=canonicalize)


def canonical_key(text: str) -> Primitive:
    return CANONICAL_KEY.create(text)
