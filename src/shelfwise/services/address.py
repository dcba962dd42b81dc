"""AddressService — paths, locators, directories, and dates.

Read-only surfaces over the pure domain parsers:
- parse_path: resolve a location expression against a current path
- locate: validate a locator and derive its directory range
- directory: parse a stored ``<head>[/<section>]*`` key
- dates: expand a date argument into calendar days
- instant: parse a point in time in the workspace timezone

Relative tokens resolve against the settings' reference instant
(``--now`` or the wall clock) in the effective timezone.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from shelfwise.domain.date_resolver import parse_date_argument, parse_future_date_time
from shelfwise.domain.directory import Directory, parse_directory
from shelfwise.domain.directory_range import resolve_directory_range
from shelfwise.domain.instants import DateTime, parse_date_time, parse_duration
from shelfwise.domain.locator import Locator, parse_locator
from shelfwise.domain.paths import Path, parse_path
from shelfwise.domain.primitives import Primitive
from shelfwise.domain.segments import PathRangeSegment, PathSegment, SegmentKind
from shelfwise.domain.validation import Result, validation_error
from shelfwise.services.base import BaseService
from shelfwise.services.result import ServiceResult
from shelfwise.services.telemetry import annotate, trace_span, traced


def _segment_dict(segment: PathSegment | PathRangeSegment) -> dict[str, Any]:
    if isinstance(segment, PathRangeSegment):
        return {
            "kind": segment.kind,
            "raw": segment.raw,
            "start": _segment_dict(segment.start),
            "end": _segment_dict(segment.end),
        }
    return {"kind": str(segment.kind), "raw": segment.raw, "value": str(segment.value)}


def _directory_dict(directory: Directory) -> dict[str, Any]:
    parent = directory.parent()
    return {
        "directory": str(directory),
        "head": {"kind": directory.head.kind, "value": str(directory.head)},
        "section": list(directory.section),
        "parent": str(parent) if parent else None,
    }


def _resolve_item_id(segment: PathSegment) -> Result[Primitive]:
    """Item-id segments resolve to themselves; aliases need storage."""
    if segment.kind is SegmentKind.ITEM_ID:
        return Result.success(segment.value)  # type: ignore[arg-type]
    return Result.failure(
        validation_error(
            "ItemLookup",
            f"alias '{segment.value}' cannot be resolved without item storage",
            code="alias_unresolved",
            path=("value",),
        )
    )


class AddressService(BaseService):
    """Parses user-typed addresses into canonical values."""

    def _cwd(self, cwd: str | None) -> Result[Path | None]:
        if cwd is None:
            return Result.success(None)
        parsed = parse_path(
            cwd if cwd.startswith("/") else f"/{cwd}",
            today=self._reference,
            timezone=self._timezone,
        )
        if not parsed.ok:
            return Result.failure(parsed.error.prefixed("cwd"))  # type: ignore[union-attr]
        return Result.success(parsed.unwrap())

    # ------------------------------------------------------------------
    # parse_path
    # ------------------------------------------------------------------

    @traced
    def parse_path(self, text: str, *, cwd: str | None = None) -> ServiceResult:
        """Resolve *text* into a canonical path.

        Args:
            text: Absolute or relative location expression.
            cwd: Current path for relative input (absolute text, with or
                without the leading slash).
        """
        op = "parse_path"
        base = self._cwd(cwd)
        if not base.ok:
            return self._failure(op, base.error)

        parsed = parse_path(
            text, cwd=base.value, today=self._reference, timezone=self._timezone
        )
        if not parsed.ok:
            return self._failure(op, parsed.error)
        path = parsed.unwrap()
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "segments": [_segment_dict(segment) for segment in path.segments],
                "is_range": path.is_range(),
            },
            meta=self._meta(),
        )

    # ------------------------------------------------------------------
    # locate
    # ------------------------------------------------------------------

    @traced
    def locate(self, text: str, *, cwd: str | None = None) -> ServiceResult:
        """Validate *text* as a locator and describe what it addresses.

        Locators whose head is a date, an item id, or ``permanent`` also
        yield a directory range. Alias heads need item storage, so they
        produce a warning instead.
        """
        op = "locate"
        base = self._cwd(cwd)
        if not base.ok:
            return self._failure(op, base.error)

        parsed = parse_locator(
            text, cwd=base.value, today=self._reference, timezone=self._timezone
        )
        if not parsed.ok:
            return self._failure(op, parsed.error)
        locator = parsed.unwrap()

        data: dict[str, Any] = {
            "locator": str(locator),
            "raw": locator.raw,
            "segments": [_segment_dict(segment) for segment in locator.segments],
            "range": self._range_dict(locator),
            "directory_range": None,
        }
        warnings: list[str] = []
        if locator.segments:
            with trace_span("resolve_directory_range"):
                resolved = resolve_directory_range(locator, _resolve_item_id)
            annotate(segments=len(locator.segments), range=locator.is_range())
            if resolved.ok:
                data["directory_range"] = resolved.unwrap().to_dict()
            elif resolved.error is not None:
                warnings.append(str(resolved.error.issues[0].message))

        return ServiceResult(ok=True, op=op, data=data, warnings=warnings, meta=self._meta())

    @staticmethod
    def _range_dict(locator: Locator) -> dict[str, Any] | None:
        if locator.range is None:
            return None
        return {
            "kind": str(locator.range.kind),
            "start": str(locator.range.start.value),
            "end": str(locator.range.end.value),
        }

    # ------------------------------------------------------------------
    # directory
    # ------------------------------------------------------------------

    @traced
    def directory(self, text: str) -> ServiceResult:
        """Parse a stored directory key and report its parts."""
        op = "directory"
        parsed = parse_directory(text)
        if not parsed.ok:
            return self._failure(op, parsed.error)
        return ServiceResult(ok=True, op=op, data=_directory_dict(parsed.unwrap()))

    # ------------------------------------------------------------------
    # dates
    # ------------------------------------------------------------------

    @traced
    def dates(self, text: str | None = None) -> ServiceResult:
        """Expand a date argument (token, ``a..b`` range, or period keyword)."""
        op = "dates"
        parsed = parse_date_argument(text, self._timezone, self._reference)
        if not parsed.ok:
            return self._failure(op, parsed.error)
        days = [str(day) for day in parsed.unwrap()]
        return ServiceResult(
            ok=True,
            op=op,
            data={"days": days, "count": len(days)},
            meta=self._meta(),
        )

    # ------------------------------------------------------------------
    # instant
    # ------------------------------------------------------------------

    @traced
    def instant(self, text: str, *, future: bool = False) -> ServiceResult:
        """Parse a point in time.

        Args:
            text: ISO datetime, local ISO, ``HH:MM``, duration from now
                (``1h30m``), or a date expression.
            future: Require the result to lie strictly after the reference
                instant; bare times roll over to tomorrow when already past.
        """
        op = "instant"
        reference = self._reference
        if future:
            parsed = parse_future_date_time(text, self._timezone, reference)
        else:
            parsed = self._any_instant(text, reference)
        if not parsed.ok:
            return self._failure(op, parsed.error)
        moment = parsed.unwrap()
        return ServiceResult(
            ok=True,
            op=op,
            data={"iso": moment.iso, "epoch_ms": moment.epoch_ms},
            meta=self._meta(),
        )

    def _any_instant(self, text: str, reference: datetime) -> Result[DateTime]:
        duration = parse_duration(text)
        if duration.ok:
            return Result.success(DateTime.from_datetime(reference) + duration.unwrap())
        parsed = parse_date_time(text, reference=reference, timezone=self._timezone)
        if parsed.ok:
            return parsed
        days = parse_date_argument(text, self._timezone, reference)
        if days.ok and len(days.unwrap()) == 1:
            return parse_date_time(f"{days.unwrap()[0]}T00:00", timezone=self._timezone)
        return parsed
