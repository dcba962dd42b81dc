"""Path expressions: slash-delimited, possibly relative locations.

``parse_path`` turns user text such as ``today/1``, ``../book/2`` or
``2024-09-21/1..5`` into a :class:`Path` of typed segments. A resolved
Path never contains ``.`` or ``..``; those are consumed against the
caller-supplied current path while parsing.

Relative-date tokens (``today``, ``+2w``, ``~mon`` ...) are resolved only
until the first real segment is pushed. Only the last token may be a
``start..end`` range, and a range path cannot be extended.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from shelfwise.domain.date_resolver import resolve_relative_token
from shelfwise.domain.primitives import Primitive
from shelfwise.domain.segments import PathRangeSegment, PathSegment, parse_path_segment
from shelfwise.domain.timezones import checked_timezone
from shelfwise.domain.validation import Result, ValidationError, validation_error

_KIND = "Path"
DEFAULT_TIMEZONE = "UTC"

Segment = PathSegment | PathRangeSegment


@dataclass(frozen=True)
class Path:
    """An ordered, immutable sequence of resolved segments."""

    segments: tuple[Segment, ...] = ()

    def __str__(self) -> str:
        return "/" + "/".join(str(segment) for segment in self.segments)

    def to_json(self) -> str:
        return str(self)

    def is_range(self) -> bool:
        return bool(self.segments) and isinstance(self.segments[-1], PathRangeSegment)

    def parent(self) -> Path | None:
        """The path without its last segment; None for the root."""
        if not self.segments:
            return None
        return Path(self.segments[:-1])

    def append_segment(self, segment: PathSegment) -> Path:
        if self.is_range():
            raise ValueError("cannot append segment to a range path")
        return Path((*self.segments, segment))

    def equals(self, other: Path) -> bool:
        """Equality by canonical text."""
        return str(self) == str(other)


ROOT = Path()


def _error(message: str, code: str, path: tuple[str | int, ...] = ("value",)) -> Result[Path]:
    return Result.failure(validation_error(_KIND, message, code=code, path=path))


def _resolve(
    token: str,
    today: datetime | None,
    timezone: Primitive | str,
) -> Result[str]:
    """Replace a relative-date token with its ISO day; other text passes through."""
    resolved = resolve_relative_token(token, timezone, today)
    if resolved is None:
        return Result.success(token)
    if not resolved.ok:
        return Result.failure(resolved.error)  # type: ignore[arg-type]
    return Result.success(str(resolved.unwrap()))


def _from_inner(inner: ValidationError, *prefix: str | int) -> ValidationError:
    return inner.rekind(_KIND).prefixed(*prefix)


def parse_range_segment(
    token: str,
    *,
    today: datetime | None = None,
    timezone: Primitive | str = DEFAULT_TIMEZONE,
) -> Result[PathRangeSegment]:
    """Parse ``start..end``; each half may be a relative-date token."""
    parts = token.split("..")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return Result.failure(
            validation_error(
                _KIND,
                "range segment must be formatted as '<from>..<to>'",
                code="format",
                path=("value",),
            )
        )

    endpoints: list[PathSegment] = []
    for label, half in zip(("start", "end"), parts, strict=True):
        resolved = _resolve(half, today, timezone)
        if not resolved.ok:
            return Result.failure(
                _from_inner(resolved.error.prefixed("range", label))  # type: ignore[union-attr]
            )
        segment = parse_path_segment(resolved.unwrap())
        if not segment.ok:
            return Result.failure(_from_inner(segment.error, "range", label))  # type: ignore[arg-type]
        endpoints.append(segment.unwrap())

    start, end = endpoints
    if start.kind != end.kind:
        return Result.failure(
            validation_error(
                _KIND,
                "range endpoints must share the same kind",
                code="range_mismatched_kind",
                path=("range",),
            )
        )
    return Result.success(PathRangeSegment(token, start, end))


def _base_segments(cwd: Path | None) -> list[Segment]:
    base: list[Segment] = []
    for segment in cwd.segments if cwd else ():
        if isinstance(segment, PathRangeSegment):
            break
        base.append(segment)
    return base


def parse_path(
    text: object,
    *,
    cwd: Path | None = None,
    today: datetime | None = None,
    timezone: Primitive | str = DEFAULT_TIMEZONE,
) -> Result[Path]:
    """Parse *text* into a resolved :class:`Path`.

    Args:
        text: Absolute (``/a/b``) or relative (``a/b``, ``../c``) expression.
        cwd: Current path; required for relative input.
        today: Reference instant for relative-date tokens.
        timezone: Zone whose local calendar defines "today".
    """
    if isinstance(text, Path):
        return Result.success(text)
    if not isinstance(text, str):
        return _error("path must be a string", "type")

    trimmed = text.strip()
    if not trimmed:
        return _error("path cannot be empty", "empty")
    zone = checked_timezone(timezone)
    if not zone.ok:
        return Result.failure(_from_inner(zone.error))  # type: ignore[arg-type]

    absolute = trimmed.startswith("/")
    if not absolute and cwd is None:
        return _error("relative path requires a current working path", "relative_without_cwd")

    tokens = [token for token in trimmed.split("/") if token]
    stack = [] if absolute else _base_segments(cwd)
    resolved_head = False

    for index, token in enumerate(tokens):
        if token == ".":
            continue
        if token == "..":
            if stack:
                stack.pop()
            continue

        segment_input = token
        if not resolved_head:
            resolved = _resolve(token, today, timezone)
            if not resolved.ok:
                return Result.failure(
                    _from_inner(resolved.error.prefixed(index))  # type: ignore[union-attr]
                )
            segment_input = resolved.unwrap()

        if index == len(tokens) - 1 and ".." in token:
            range_segment = parse_range_segment(token, today=today, timezone=timezone)
            if not range_segment.ok:
                return Result.failure(range_segment.error.prefixed(index))  # type: ignore[union-attr]
            stack.append(range_segment.unwrap())
            resolved_head = True
            continue

        segment = parse_path_segment(segment_input)
        if not segment.ok:
            return Result.failure(_from_inner(segment.error, index))  # type: ignore[arg-type]
        stack.append(segment.unwrap())
        resolved_head = True

    return Result.success(Path(tuple(stack)))
