"""Timing spans for service calls.

Collection is off unless ``--verbose`` turned it on; while off, every
entry point costs one ContextVar lookup. While on, each ``@traced``
service method opens a root :class:`Span`, ``trace_span`` blocks inside
it (directory-range resolution, for one) nest under it, ``annotate``
records facts about the current step, and the finished tree lands in
``ServiceResult.meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Generator, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from shelfwise.services.result import ServiceResult

log = structlog.get_logger("shelfwise.telemetry")

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)

_P = ParamSpec("_P")
_R = TypeVar("_R")


@dataclass
class Span:
    """One timed step; ``children`` are the steps it ran."""

    name: str
    parent: Span | None = None
    children: list[Span] = field(default_factory=list)
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        """Elapsed milliseconds, 0.0 while still open."""
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def walk(self) -> Iterator[Span]:
        """This span, then every descendant depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict[str, Any]:
        node: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            node["annotations"] = dict(self.annotations)
        if self.children:
            node["children"] = [child.to_dict() for child in self.children]
        return node


def enable_telemetry() -> None:
    """Turn span collection on for the current context (``--verbose``)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)


def get_current_span() -> Span | None:
    """Innermost open span, or None when collection is off."""
    return _current_span.get() if _verbose_enabled.get() else None


def annotate(**values: Any) -> None:
    """Record *values* on the innermost open span; ignored when collection is off."""
    span = get_current_span()
    if span is not None:
        span.annotations.update(values)


@contextmanager
def _opened(span: Span) -> Generator[Span]:
    """Make *span* current for the block and close it on the way out."""
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)


@contextmanager
def trace_span(name: str) -> Generator[Span | None]:
    """Time a block as a child of the current span.

    Yields None, and records nothing, when collection is off or no
    ``@traced`` call is in progress.
    """
    parent = get_current_span()
    if parent is None:
        yield None
        return
    child = Span(name=name, parent=parent)
    parent.children.append(child)
    with _opened(child):
        yield child


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time each call of a service method as a root span.

    A ServiceResult return value comes back as a copy whose ``meta`` also
    holds the span tree under ``"telemetry"``; anything else passes
    through untouched.
    """

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        ok = False
        try:
            with _opened(root):
                result = func(*args, **kwargs)
            ok = True
        finally:
            log.debug(
                "span.complete",
                span_name=root.name,
                duration_ms=round(root.duration_ms, 2),
                ok=ok,
                spans=sum(1 for _ in root.walk()),
            )

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": root.to_dict()}
            return result.model_copy(update={"meta": meta})  # type: ignore[return-value]
        return result

    return wrapper
