"""Move an instant by signed day/month/year deltas.

Month and year steps keep the day-of-month and let overflow roll forward
(``2025-01-31 +1m`` lands on ``2025-03-03``), the way browser ``Date``
setters do.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from agecalc.domain.delta import Delta, DeltaUnit, parse_delta
from agecalc.domain.instant import Clock, format_instant, parse_instant, system_clock

logger = logging.getLogger(__name__)


def _with_year_month(dt: datetime, year: int, month: int) -> datetime:
    """Rebuild *dt* in (*year*, *month*) keeping its day, rolling overflow forward."""
    first = dt.replace(year=year, month=month, day=1)
    return first + timedelta(days=dt.day - 1)


def add_days(dt: datetime, amount: int) -> datetime:
    return dt + timedelta(days=amount)


def add_months(dt: datetime, amount: int) -> datetime:
    year, month0 = divmod(dt.month - 1 + amount, 12)
    return _with_year_month(dt, dt.year + year, month0 + 1)


def add_years(dt: datetime, amount: int) -> datetime:
    return _with_year_month(dt, dt.year + amount, dt.month)


_STEPS = {
    DeltaUnit.DAY: add_days,
    DeltaUnit.MONTH: add_months,
    DeltaUnit.YEAR: add_years,
}


def apply_delta(dt: datetime, delta: Delta) -> datetime:
    """Apply every unit of *delta* to *dt*, cumulatively, day then month then year.

    A step that would leave the representable year range is skipped.
    """
    for unit in delta.units:
        try:
            dt = _STEPS[unit](dt, delta.amount)
        except (OverflowError, ValueError):
            logger.warning("Skipped %s step of %s: out of range for %s", unit.name, delta, dt)
    return dt


def adjust_instant(
    value: str | datetime | None,
    delta: str | Delta,
    *,
    clock: Clock | None = None,
) -> str:
    """Adjust *value* by *delta* and serialize the result.

    Absent or unparsable *value* falls back to ``clock()`` (the host's
    current time by default).  Never fails.
    """
    base = parse_instant(value)
    if base is None:
        base = (clock or system_clock())()
        logger.debug("Adjusting current time; input %r was not an instant", value)
    if isinstance(delta, str):
        delta = parse_delta(delta)
    return format_instant(apply_delta(base, delta))
