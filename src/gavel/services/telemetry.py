"""Service telemetry: timing spans for service calls.

Disabled by default; ``--verbose`` (CLI) or ``GAVEL_VERBOSE=1`` (server)
turns it on. When enabled, every ``@traced`` service method is timed,
logged as a ``span.complete`` event, and its ServiceResult gets a
``meta["telemetry"]`` entry. When disabled the cost is one ContextVar read.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from gavel.services.result import ServiceResult

log = structlog.get_logger(__name__)

_enabled: ContextVar[bool] = ContextVar("_telemetry_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)


@dataclass
class Span:
    """Timing record for one traced call, with optional child spans."""

    name: str
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)
    children: list[Span] = field(default_factory=list)

    @property
    def duration_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return (self.finished - self.started) * 1000

    def finish(self) -> None:
        self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            out["annotations"] = dict(self.annotations)
        if self.children:
            out["children"] = [child.to_dict() for child in self.children]
        return out


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method and attach the span to its ServiceResult.meta."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _enabled.get():
            return func(*args, **kwargs)

        span = Span(name=func.__qualname__)
        parent = _current_span.get()
        if parent is not None:
            parent.children.append(span)
        token = _current_span.set(span)
        ok = False
        try:
            result = func(*args, **kwargs)
            ok = not isinstance(result, ServiceResult) or result.ok
        finally:
            span.finish()
            _current_span.reset(token)
            log.debug(
                "span.complete",
                span_name=span.name,
                duration_ms=round(span.duration_ms, 2),
                ok=ok,
            )

        if parent is None and isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper


def annotate(key: str, value: Any) -> None:
    """Attach *value* to the active span, if telemetry is on."""
    span = _current_span.get() if _enabled.get() else None
    if span is not None:
        span.annotate(key, value)


def enable_telemetry() -> None:
    _enabled.set(True)


def disable_telemetry() -> None:
    _enabled.set(False)


def telemetry_enabled() -> bool:
    return _enabled.get()
