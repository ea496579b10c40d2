"""AgeService — elapsed calendar time and instant adjustment.

Wraps the pure domain functions in the ServiceResult contract.  The
service owns the two ambient inputs the domain refuses to read itself:
the current time (via an injected clock) and the zone used to resolve
wall-clock instants to absolute time.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, tzinfo
from typing import Any

import structlog

from agecalc.domain.adjust import adjust_instant
from agecalc.domain.delta import parse_delta
from agecalc.domain.difference import CalendarDifference, compute_difference
from agecalc.domain.instant import Clock, format_instant, parse_instant, system_clock
from agecalc.services.result import ErrorCode, ServiceResult
from agecalc.services.telemetry import annotate, traced

log = structlog.get_logger(__name__)

NOW_KEYWORD = "now"

DEFAULT_REFERENCE_FORMAT = "%Y-%m-%d %H:%M:%S"

_NOT_NORMALIZED_WARNING = (
    "Day component is negative: the start day-of-month is past the end of "
    "the month preceding the end date"
)


def _is_now(value: str | datetime | None) -> bool:
    return value is None or (isinstance(value, str) and value.strip().lower() in ("", NOW_KEYWORD))


def _iso(dt: datetime) -> str:
    return dt.isoformat(timespec="seconds")


def _difference_data(start: datetime, end: datetime, diff: CalendarDifference) -> dict[str, Any]:
    return {
        "start": _iso(start),
        "end": _iso(end),
        **diff.model_dump(),
        "ymd": diff.ymd_text(),
        "hms": diff.hms_text(),
        "totals": diff.totals_text(),
    }


class AgeService:
    """Calendar difference and adjustment operations.

    Args:
        clock: Source of the current wall-clock instant.
        tz: Zone for resolving wall-clock instants to absolute time;
            None means the host's local zone.
        reference_format: ``strftime`` pattern for the references line.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        *,
        tz: tzinfo | None = None,
        reference_format: str = DEFAULT_REFERENCE_FORMAT,
    ) -> None:
        self._tz = tz
        self._clock = clock or system_clock(tz)
        self._reference_format = reference_format

    @property
    def zone_name(self) -> str:
        return "local" if self._tz is None else str(self._tz)

    # ── difference ───────────────────────────────────────────────────

    @traced
    def difference(
        self,
        start: str | datetime | None,
        end: str | datetime | None = None,
    ) -> ServiceResult:
        """Elapsed calendar time from *start* to *end* (default: now)."""
        op = "difference"
        s = parse_instant(start)
        if s is None:
            return _invalid(op, "start", start, f"Invalid start instant: {start!r}")

        if _is_now(end):
            e = self._clock()
        else:
            e = parse_instant(end)
            if e is None:
                return _invalid(op, "end", end, f"Invalid end instant: {end!r}")

        annotate(start=_iso(s), end=_iso(e), zone=self.zone_name)
        diff = compute_difference(s, e, tz=self._tz)
        if diff is None:
            return _inverted(op, s, e, "End must be on or after start")

        annotate(normalized=diff.is_normalized)
        warnings: list[str] = []
        if not diff.is_normalized:
            warnings.append(_NOT_NORMALIZED_WARNING)
        log.debug("difference.computed", start=_iso(s), end=_iso(e), days=diff.total_days)
        return ServiceResult(
            ok=True,
            op=op,
            data=_difference_data(s, e, diff),
            warnings=warnings,
        )

    # ── age ──────────────────────────────────────────────────────────

    @traced
    def age(
        self,
        birth: str | datetime | None,
        at: str | datetime | None = None,
    ) -> ServiceResult:
        """Age of someone born at *birth*, as of *at* (default: now).

        An unparsable *at* falls back to the current time with a warning.
        """
        op = "age"
        dob = parse_instant(birth)
        if dob is None:
            return _invalid(op, "birth", birth, "Enter a valid Date of Birth")

        warnings: list[str] = []
        current = None if _is_now(at) else parse_instant(at)
        if current is None:
            if not _is_now(at):
                warnings.append(f"Invalid reference instant {at!r}; using current time")
            current = self._clock()

        annotate(start=_iso(dob), end=_iso(current), zone=self.zone_name)
        diff = compute_difference(dob, current, tz=self._tz)
        if diff is None:
            return _inverted(op, dob, current, "Current date must be on/after DOB")

        annotate(normalized=diff.is_normalized)
        if not diff.is_normalized:
            warnings.append(_NOT_NORMALIZED_WARNING)

        data = _difference_data(dob, current, diff)
        data["references"] = (
            f"DOB: {dob.strftime(self._reference_format)} • "
            f"Current: {current.strftime(self._reference_format)}"
        )
        data["birthday"] = f"{dob.month:02d}/{dob.day:02d}"
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    # ── adjust ───────────────────────────────────────────────────────

    @traced
    def adjust(
        self,
        value: str | datetime | None,
        deltas: Sequence[str],
    ) -> ServiceResult:
        """Apply *deltas* in order, each to the previous result.

        Never fails: an absent or unparsable *value* starts from now.
        """
        warnings: list[str] = []
        current: str | datetime | None = value
        if _is_now(value):
            current = None
        elif parse_instant(value) is None:
            warnings.append(f"Invalid instant {value!r}; adjusted from current time")
            current = None

        annotate(from_now=current is None, zone=self.zone_name)
        steps: list[dict[str, Any]] = []
        for token in deltas:
            delta = parse_delta(token)
            if not delta.units:
                warnings.append(f"Delta {token!r} names no unit; value unchanged")
            current = adjust_instant(current, delta, clock=self._clock)
            steps.append(
                {
                    "delta": token,
                    "amount": delta.amount,
                    "units": [u.name.lower() for u in delta.units],
                    "value": current,
                }
            )

        if steps:
            result = steps[-1]["value"]
        else:
            result = format_instant(parse_instant(current) or self._clock())

        return ServiceResult(
            ok=True,
            op="adjust",
            data={
                "input": _iso(value) if isinstance(value, datetime) else value,
                "deltas": list(deltas),
                "value": result,
                "steps": steps,
            },
            warnings=warnings,
        )


def _invalid(op: str, field: str, value: Any, message: str) -> ServiceResult:
    shown = None if value is None else str(value)
    return ServiceResult.failure(op, ErrorCode.INVALID_INSTANT, message, field=field, value=shown)


def _inverted(op: str, start: datetime, end: datetime, message: str) -> ServiceResult:
    return ServiceResult.failure(
        op, ErrorCode.INVERTED_INTERVAL, message, start=_iso(start), end=_iso(end)
    )
