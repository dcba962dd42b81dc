"""OrderService — sibling rank generation.

Wraps :class:`RankService` with the generator tuned by the ``[rank]``
config section. Sibling ranks arrive as raw strings; each is validated
before use and failures point at the offending position
(``existing.<index>``).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from shelfwise.domain.identifiers import parse_item_rank
from shelfwise.domain.primitives import Primitive
from shelfwise.domain.ranking import LexicalRankGenerator, RankGeneratorError, RankService
from shelfwise.domain.validation import Result, ValidationError
from shelfwise.services.base import BaseService
from shelfwise.services.result import ServiceError, ServiceResult
from shelfwise.services.telemetry import annotate, traced

logger = logging.getLogger(__name__)

MAX_SPACED_RANKS = 10_000


def boundary_hint(error: ValidationError | None) -> str | None:
    """Recovery hint for a RankBoundary failure, if any."""
    if error is None or error.kind != "RankBoundary":
        return None
    if error.code == "target_not_found":
        return "Sibling list may be stale; reload it and retry."
    if error.code == "duplicate_ranks":
        return "Siblings share a rank; respace them before inserting."
    return None


class OrderService(BaseService):
    """Computes ranks for inserting or reordering siblings."""

    @property
    def ranks(self) -> RankService:
        config = self._settings.rank
        return RankService(LexicalRankGenerator(width=config.width, step=config.step))

    def _parse_all(self, raw: Sequence[str], field: str) -> Result[list[Primitive]]:
        parsed: list[Primitive] = []
        for index, text in enumerate(raw):
            rank = parse_item_rank(text)
            if not rank.ok:
                return Result.failure(rank.error.prefixed(field, index))  # type: ignore[union-attr]
            parsed.append(rank.unwrap())
        return Result.success(parsed)

    def _rank_result(self, op: str, result: Result[Primitive], **extra: Any) -> ServiceResult:
        if not result.ok:
            hint = boundary_hint(result.error)
            return self._failure(op, result.error, warnings=[hint] if hint else None)
        rank = result.unwrap()
        annotate(rank=str(rank))
        logger.debug("%s produced rank %s", op, rank)
        return ServiceResult(ok=True, op=op, data={"rank": str(rank), **extra})

    def _placement(
        self,
        op: str,
        existing: Sequence[str],
        target: str | None = None,
    ) -> ServiceResult:
        siblings = self._parse_all(existing, "existing")
        if not siblings.ok:
            return self._failure(op, siblings.error)
        ranks = self.ranks
        if target is None:
            place = ranks.head_rank if op == "head_rank" else ranks.tail_rank
            return self._rank_result(op, place(siblings.unwrap()))

        parsed_target = parse_item_rank(target)
        if not parsed_target.ok:
            return self._failure(op, parsed_target.error.prefixed("target"))  # type: ignore[union-attr]
        place_near = ranks.before_rank if op == "before_rank" else ranks.after_rank
        return self._rank_result(
            op, place_near(parsed_target.unwrap(), siblings.unwrap()), target=target
        )

    # ------------------------------------------------------------------
    # head / tail
    # ------------------------------------------------------------------

    @traced
    def head(self, existing: Sequence[str]) -> ServiceResult:
        """Rank sorting before every sibling (``middle()`` when there are none)."""
        return self._placement("head_rank", existing)

    @traced
    def tail(self, existing: Sequence[str]) -> ServiceResult:
        """Rank sorting after every sibling (``middle()`` when there are none)."""
        return self._placement("tail_rank", existing)

    # ------------------------------------------------------------------
    # before / after
    # ------------------------------------------------------------------

    @traced
    def before(self, target: str, existing: Sequence[str]) -> ServiceResult:
        """Rank immediately before *target*; a missing target is a recoverable error."""
        return self._placement("before_rank", existing, target)

    @traced
    def after(self, target: str, existing: Sequence[str]) -> ServiceResult:
        """Rank immediately after *target*."""
        return self._placement("after_rank", existing, target)

    # ------------------------------------------------------------------
    # between / compare / spaced
    # ------------------------------------------------------------------

    @traced
    def between(self, lower: str, upper: str) -> ServiceResult:
        op = "between"
        bounds = self._parse_all([lower, upper], "bounds")
        if not bounds.ok:
            return self._failure(op, bounds.error)
        left, right = bounds.unwrap()
        try:
            key = self.ranks.generator.between(left.value, right.value)
        except RankGeneratorError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code=exc.code.upper(), message=str(exc)),
            )
        return ServiceResult(ok=True, op=op, data={"rank": key, "lower": lower, "upper": upper})

    @traced
    def compare(self, first: str, second: str) -> ServiceResult:
        op = "compare"
        parsed = self._parse_all([first, second], "ranks")
        if not parsed.ok:
            return self._failure(op, parsed.error)
        left, right = parsed.unwrap()
        return ServiceResult(
            ok=True,
            op=op,
            data={"first": first, "second": second, "order": self.ranks.compare_ranks(left, right)},
        )

    @traced
    def spaced(self, count: int) -> ServiceResult:
        """Initial ranks for *count* new siblings."""
        op = "spaced"
        if count < 0 or count > MAX_SPACED_RANKS:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_COUNT",
                    message=f"count must be between 0 and {MAX_SPACED_RANKS}",
                    detail={"count": count},
                ),
            )
        ranks = [str(rank) for rank in self.ranks.generate_equally_spaced_ranks(count)]
        annotate(count=len(ranks))
        return ServiceResult(ok=True, op=op, data={"ranks": ranks, "count": len(ranks)})

