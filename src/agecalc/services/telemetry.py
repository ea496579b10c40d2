"""Per-call telemetry for AgeService operations.

With ``--verbose`` every ``@traced`` service call records one span: its
duration plus the calendar inputs the call resolved (instants, zone,
whether the borrow cascade produced normalized components).  The span is
copied into ``ServiceResult.meta["telemetry"]`` and logged.  Disabled,
``@traced`` and :func:`annotate` cost one ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from agecalc.services.result import ServiceResult

log = structlog.get_logger("agecalc.telemetry")

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)
_active_span: ContextVar[CallSpan | None] = ContextVar("_active_span", default=None)


@dataclass
class CallSpan:
    """Timing and resolved inputs of one service call."""

    name: str
    start_time: float = field(default_factory=time.perf_counter)
    end_time: float | None = None
    annotations: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time) * 1000

    def end(self) -> None:
        self.end_time = time.perf_counter()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        return data


def annotate(**values: Any) -> None:
    """Record *values* on the span of the running service call, if any."""
    if not _verbose_enabled.get():
        return
    span = _active_span.get()
    if span is not None:
        span.annotations.update(values)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method; attach its span to the returned ServiceResult."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        span = CallSpan(name=func.__qualname__)
        token = _active_span.set(span)
        ok = False
        try:
            result = func(*args, **kwargs)
            ok = not isinstance(result, ServiceResult) or result.ok
        finally:
            span.end()
            _active_span.reset(token)
            log.debug(
                "span.complete",
                span_name=span.name,
                duration_ms=round(span.duration_ms, 2),
                ok=ok,
                **span.annotations,
            )

        if isinstance(result, ServiceResult):
            meta = {**(result.meta or {}), "telemetry": span.to_dict()}
            result = result.model_copy(update={"meta": meta})  # type: ignore[assignment]
        return result

    return wrapper


def enable_telemetry() -> None:
    """Turn on span recording (``--verbose``)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)
