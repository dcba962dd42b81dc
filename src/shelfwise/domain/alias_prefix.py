"""Short alias handles.

Users type the shortest prefix that picks out one alias. Matching is on
the normalized form (hyphens removed, canonical key) so ``Ång-str`` finds
``angstrom-notes``. Aliases in the priority set (for example those on the
current date shelf) are tried first; the full set is only consulted when
nothing in the priority set matches.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from shelfwise.domain.canonical import canonicalize


class PrefixMatch(StrEnum):
    SINGLE = "single"
    AMBIGUOUS = "ambiguous"
    NONE = "none"


@dataclass(frozen=True)
class PrefixResolution:
    kind: PrefixMatch
    alias: str | None = None
    candidates: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        return {"kind": str(self.kind), "alias": self.alias, "candidates": list(self.candidates)}


NO_MATCH = PrefixResolution(PrefixMatch.NONE)


def normalize_alias(alias: str) -> str:
    return canonicalize(alias.replace("-", ""))


def _common_prefix_length(first: str, second: str) -> int:
    length = 0
    while length < min(len(first), len(second)) and first[length] == second[length]:
        length += 1
    return length


def shortest_unique_prefix(target: str, sorted_aliases: Sequence[str]) -> str:
    """Shortest prefix of *target* that no sorted neighbour shares.

    Only the immediate neighbours matter: in sorted order they share the
    longest prefixes with *target*.
    """
    if target not in sorted_aliases or len(sorted_aliases) <= 1:
        return target[:1]
    index = sorted_aliases.index(target)
    neighbours = sorted_aliases[max(index - 1, 0) : index] + sorted_aliases[index + 1 : index + 2]
    longest = max(_common_prefix_length(target, other) for other in neighbours)
    return target[: longest + 1]


def _resolve_in(prefix: str, aliases: Iterable[str]) -> PrefixResolution:
    matches: list[str] = []
    for alias in aliases:
        normalized = normalize_alias(alias)
        if normalized == prefix:
            return PrefixResolution(PrefixMatch.SINGLE, alias=alias)
        if normalized.startswith(prefix):
            matches.append(alias)
    if len(matches) == 1:
        return PrefixResolution(PrefixMatch.SINGLE, alias=matches[0])
    if matches:
        return PrefixResolution(PrefixMatch.AMBIGUOUS, candidates=tuple(sorted(matches)))
    return NO_MATCH


def resolve_prefix(
    text: str,
    priority: Iterable[str],
    all_aliases: Iterable[str],
) -> PrefixResolution:
    """Resolve typed *text* to one alias, an ambiguous candidate list, or nothing."""
    prefix = normalize_alias(text)
    if not prefix:
        return NO_MATCH
    preferred = _resolve_in(prefix, priority)
    if preferred.kind is not PrefixMatch.NONE:
        return preferred
    return _resolve_in(prefix, all_aliases)
