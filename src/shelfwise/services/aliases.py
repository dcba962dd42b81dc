"""AliasService — canonical keys and short alias handles.

The candidate alias universe is always supplied by the caller; this
service never reads item storage.
"""

from __future__ import annotations

from collections.abc import Sequence

from shelfwise.domain.alias_prefix import (
    PrefixMatch,
    normalize_alias,
    resolve_prefix,
    shortest_unique_prefix,
)
from shelfwise.domain.canonical import canonical_key
from shelfwise.services.base import BaseService
from shelfwise.services.result import ServiceError, ServiceResult
from shelfwise.services.telemetry import annotate, traced


class AliasService(BaseService):
    """Resolves typed prefixes and computes display handles."""

    @traced
    def resolve(
        self,
        text: str,
        aliases: Sequence[str],
        *,
        priority: Sequence[str] = (),
    ) -> ServiceResult:
        """Resolve *text* to exactly one alias.

        Aliases in *priority* win over the rest. An ambiguous prefix fails
        with the sorted candidate list in ``detail``.
        """
        op = "resolve_alias"
        resolution = resolve_prefix(text, priority, aliases)
        annotate(match=str(resolution.kind), candidates=len(aliases))
        if resolution.kind is PrefixMatch.SINGLE:
            return ServiceResult(
                ok=True,
                op=op,
                data={"input": text, "alias": resolution.alias},
            )
        if resolution.kind is PrefixMatch.AMBIGUOUS:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="AMBIGUOUS",
                    message=f"'{text}' matches {len(resolution.candidates)} aliases",
                    detail={"candidates": list(resolution.candidates)},
                ),
            )
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code="NOT_FOUND", message=f"No alias matches '{text}'"),
        )

    @traced
    def key(self, text: str) -> ServiceResult:
        """Canonical key for *text* (diacritics stripped, lowercased)."""
        return ServiceResult(
            ok=True,
            op="canonical_key",
            data={"input": text, "key": str(canonical_key(text))},
        )

    @traced
    def prefixes(self, aliases: Sequence[str]) -> ServiceResult:
        """Shortest unique prefix for each alias, computed on normalized forms."""
        normalized = {alias: normalize_alias(alias) for alias in aliases}
        ordered = sorted(set(normalized.values()))
        handles = {
            alias: shortest_unique_prefix(form, ordered) for alias, form in normalized.items()
        }
        warnings = [
            f"'{alias}' normalizes to the same form as another alias"
            for alias, form in normalized.items()
            if list(normalized.values()).count(form) > 1
        ]
        return ServiceResult(
            ok=True,
            op="alias_prefixes",
            data={"prefixes": handles},
            warnings=warnings,
        )
