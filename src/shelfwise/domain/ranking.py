"""Sibling ordering with dense lexicographic rank keys.

Ranks are strings over ``0-9a-z`` compared byte-wise. Between any two
distinct canonical keys another key always exists, so an item can be
placed anywhere among its siblings without renumbering them.

INVARIANT: Canonical keys never end in ``0``. ``"a"`` and ``"a0"`` would
denote the same fraction with no key between them.

:class:`RankService` holds the placement rules (head, tail, before,
after) and delegates key arithmetic to a pluggable :class:`RankGenerator`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from shelfwise.domain.identifiers import item_rank
from shelfwise.domain.primitives import Primitive
from shelfwise.domain.validation import Result, validation_error

DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"
BASE = len(DIGITS)

DEFAULT_WIDTH = 6
DEFAULT_STEP = 8

RANK_BOUNDARY = "RankBoundary"


class RankGeneratorError(ValueError):
    """A key operation that has no valid answer."""

    def __init__(self, message: str, code: str = "no_headroom") -> None:
        super().__init__(message)
        self.code = code


class RankGenerator(Protocol):
    """Key arithmetic behind :class:`RankService`."""

    def min(self) -> str: ...

    def max(self) -> str: ...

    def middle(self) -> str: ...

    def between(self, lower: str, upper: str) -> str: ...

    def next(self, key: str) -> str: ...

    def prev(self, key: str) -> str: ...

    def compare(self, first: str, second: str) -> int: ...


def midpoint(lower: str, upper: str | None) -> str:
    """Shortest-ish key strictly between *lower* and *upper*.

    ``lower`` may be empty (the bottom of the keyspace) and ``upper`` may be
    None (the top). Both must be canonical and ``lower < upper``.
    """
    if upper is not None:
        shared = 0
        while (lower[shared] if shared < len(lower) else DIGITS[0]) == upper[shared]:
            shared += 1
        if shared:
            return upper[:shared] + midpoint(lower[shared:], upper[shared:])

    low = DIGITS.index(lower[0]) if lower else 0
    high = DIGITS.index(upper[0]) if upper is not None else BASE
    if high - low > 1:
        return DIGITS[(low + high + 1) // 2]
    if upper is not None and len(upper) > 1:
        return upper[:1]
    return DIGITS[low] + midpoint(lower[1:], None)


class LexicalRankGenerator:
    """Base-36 fractional keys.

    ``next``/``prev`` move by *step* units at *width* digits of precision,
    leaving room for later ``between`` insertions. Past ``max()`` or below
    ``min()`` they bisect towards the open end of the keyspace instead, so
    neither ever runs out of keys.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, step: int = DEFAULT_STEP) -> None:
        if width < 1:
            raise ValueError("width must be at least 1")
        if step < 1:
            raise ValueError("step must be at least 1")
        self.width = width
        self.step = step

    # --- Encoding ---

    def _encode(self, value: int) -> str:
        chars = []
        for _ in range(self.width):
            value, digit = divmod(value, BASE)
            chars.append(DIGITS[digit])
        return "".join(reversed(chars)).rstrip(DIGITS[0])

    def _floor(self, key: str) -> int:
        """Value of *key* truncated to *width* digits."""
        return int(key[: self.width].ljust(self.width, DIGITS[0]), BASE)

    def _check(self, key: str) -> None:
        if not key or any(char not in DIGITS for char in key):
            raise RankGeneratorError(f"invalid rank key: {key!r}", "invalid_rank")
        if key.endswith(DIGITS[0]):
            raise RankGeneratorError(f"rank key must not end with '0': {key!r}", "invalid_rank")

    # --- RankGenerator ---

    def min(self) -> str:
        return self._encode(1)

    def max(self) -> str:
        return DIGITS[-1] * self.width

    def middle(self) -> str:
        return self._encode(BASE**self.width // 2)

    def between(self, lower: str, upper: str) -> str:
        self._check(lower)
        self._check(upper)
        if lower >= upper:
            raise RankGeneratorError(f"no key between {lower!r} and {upper!r}")
        return midpoint(lower, upper)

    def next(self, key: str) -> str:
        self._check(key)
        candidate = self._floor(key) + self.step
        if candidate <= int(self.max(), BASE):
            return self._encode(candidate)
        return midpoint(key, None)

    def prev(self, key: str) -> str:
        self._check(key)
        candidate = self._floor(key) - self.step
        if candidate >= 1:
            return self._encode(candidate)
        return midpoint("", key)

    def compare(self, first: str, second: str) -> int:
        if first == second:
            return 0
        return -1 if first < second else 1


def _boundary(message: str, code: str) -> Result[Primitive]:
    return Result.failure(validation_error(RANK_BOUNDARY, message, code=code, path=("target",)))


def _duplicate(target: Primitive) -> Result[Primitive]:
    return _boundary(f"rank {target} appears more than once in siblings", "duplicate_ranks")


class RankService:
    """Placement rules for sibling ranks.

    Every method takes the current sibling ranks in any order; they are
    sorted before use. Failures are ``RankBoundary`` errors, which callers
    should treat as recoverable (reload the siblings and retry).
    """

    def __init__(self, generator: RankGenerator | None = None) -> None:
        self.generator = generator or LexicalRankGenerator()

    def _ordered(self, existing: Sequence[Primitive]) -> list[Primitive]:
        return sorted(existing)

    def _run(self, operation: str, *keys: str) -> Result[Primitive]:
        try:
            key = getattr(self.generator, operation)(*keys)
        except RankGeneratorError as exc:
            return _boundary(str(exc), exc.code)
        return Result.success(item_rank(key))

    def head_rank(self, existing: Sequence[Primitive]) -> Result[Primitive]:
        """Rank that sorts before every sibling."""
        ordered = self._ordered(existing)
        if not ordered:
            return Result.success(item_rank(self.generator.middle()))
        return self._run("prev", ordered[0].value)

    def tail_rank(self, existing: Sequence[Primitive]) -> Result[Primitive]:
        """Rank that sorts after every sibling."""
        ordered = self._ordered(existing)
        if not ordered:
            return Result.success(item_rank(self.generator.middle()))
        return self._run("next", ordered[-1].value)

    def before_rank(self, target: Primitive, existing: Sequence[Primitive]) -> Result[Primitive]:
        """Rank immediately before *target*; fails if *target* is not a sibling."""
        ordered = self._ordered(existing)
        if target not in ordered:
            return _boundary(f"target rank {target} not found in siblings", "target_not_found")
        if ordered.count(target) > 1:
            return _duplicate(target)
        index = ordered.index(target)
        if index == 0:
            return self._run("prev", target.value)
        return self._run("between", ordered[index - 1].value, target.value)

    def after_rank(self, target: Primitive, existing: Sequence[Primitive]) -> Result[Primitive]:
        """Rank immediately after *target*; fails if *target* is not a sibling."""
        ordered = self._ordered(existing)
        if target not in ordered:
            return _boundary(f"target rank {target} not found in siblings", "target_not_found")
        if ordered.count(target) > 1:
            return _duplicate(target)
        index = ordered.index(target)
        if index == len(ordered) - 1:
            return self._run("next", target.value)
        successor = ordered[index + 1]
        return self._run("between", target.value, successor.value)

    def compare_ranks(self, first: Primitive, second: Primitive) -> int:
        return self.generator.compare(first.value, second.value)

    def generate_equally_spaced_ranks(self, count: int) -> list[Primitive]:
        """Initial ranks for *count* new siblings.

        Sequential ``next`` steps from ``min()``; meant for small batches,
        not for rebalancing a crowded list.
        """
        if count <= 0:
            return []
        if count == 1:
            return [item_rank(self.generator.middle())]
        keys = [self.generator.min()]
        while len(keys) < count:
            keys.append(self.generator.next(keys[-1]))
        return [item_rank(key) for key in keys]
