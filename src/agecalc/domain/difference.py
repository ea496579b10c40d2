"""Calendar difference between two local wall-clock instants.

Two independent views of the same interval:

- Component breakdown (years … seconds) from per-field subtraction plus a
  single-pass borrow cascade over wall-clock fields.
- Total counts (seconds … days) from absolute elapsed time.

DST transitions are not special-cased, so across a transition the totals
can disagree by an hour with a naive sum of the components.
"""

from __future__ import annotations

import calendar
import logging
from datetime import UTC, datetime, timedelta, tzinfo

from pydantic import BaseModel

from agecalc.domain.instant import parse_instant

logger = logging.getLogger(__name__)

_ONE_SECOND = timedelta(seconds=1)


class CalendarDifference(BaseModel):
    """Result of subtracting a start instant from a later end instant."""

    model_config = {"frozen": True}

    years: int
    months: int
    days: int
    hours: int
    minutes: int
    seconds: int

    total_seconds: int
    total_minutes: int
    total_hours: int
    total_days: int

    @property
    def is_normalized(self) -> bool:
        """True when no component is negative or past its unit.

        The single-pass cascade leaves ``days`` negative when the start
        day-of-month exceeds the length of the month before the end month
        (e.g. Jan 31 to Mar 1).

        ``days`` is capped at 31, not at the length of the month before the
        end month: without a borrow, Mar 1 to Mar 31 is 30 days, which is
        longer than February.
        """
        return (
            0 <= self.seconds < 60
            and 0 <= self.minutes < 60
            and 0 <= self.hours < 24
            and 0 <= self.days < 31
            and 0 <= self.months < 12
            and self.years >= 0
        )

    def ymd_text(self) -> str:
        return f"{self.years} years, {self.months} months, {self.days} days"

    def hms_text(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"

    def totals_text(self) -> str:
        return (
            f"{self.total_days} days • {self.total_hours} hours • "
            f"{self.total_minutes} minutes • {self.total_seconds} seconds"
        )


def days_in_previous_month(year: int, month: int) -> int:
    """Day count of the month before *month* in *year*, wrapping January."""
    if month == 1:
        year, month = year - 1, 12
    else:
        month -= 1
    if year < 1:
        # No month precedes January of year 1; December has 31 days.
        return 31
    return calendar.monthrange(year, month)[1]


def _absolute(dt: datetime, tz: tzinfo | None) -> datetime:
    """Resolve a wall-clock instant to UTC in *tz* (host zone if None)."""
    if tz is None:
        return dt.astimezone(UTC)
    return dt.replace(tzinfo=tz).astimezone(UTC)


def _resolve(dt: datetime, tz: tzinfo | None) -> tuple[datetime, datetime]:
    """Return *dt* as an existing wall-clock time plus its UTC instant.

    A time inside a spring-forward gap moves forward by the gap (02:30
    becomes 03:30 in New York).  Instants too close to the edge of the
    datetime range to shift are read as UTC.
    """
    try:
        absolute = _absolute(dt, tz)
        local = absolute.astimezone() if tz is None else absolute.astimezone(tz)
    except (OverflowError, ValueError):
        return dt, dt.replace(tzinfo=UTC)
    return local.replace(tzinfo=None, fold=0), absolute


def compute_difference(
    start: str | datetime | None,
    end: str | datetime | None,
    *,
    tz: tzinfo | None = None,
) -> CalendarDifference | None:
    """Compute the calendar difference from *start* to *end*.

    Returns None when either instant is unparsable or *end* precedes
    *start*.  *tz* selects the zone used to turn wall-clock values into
    absolute time for the totals; None means the host's local zone.
    """
    parsed_start = parse_instant(start)
    parsed_end = parse_instant(end)
    if parsed_start is None or parsed_end is None:
        logger.debug("No difference: unparsable instant (start=%r, end=%r)", start, end)
        return None

    s, s_abs = _resolve(parsed_start, tz)
    e, e_abs = _resolve(parsed_end, tz)
    if e_abs < s_abs:
        logger.debug("No difference: end %s precedes start %s", e, s)
        return None

    years = e.year - s.year
    months = e.month - s.month
    days = e.day - s.day
    hours = e.hour - s.hour
    minutes = e.minute - s.minute
    seconds = e.second - s.second

    if seconds < 0:
        seconds += 60
        minutes -= 1
    if minutes < 0:
        minutes += 60
        hours -= 1
    if hours < 0:
        hours += 24
        days -= 1
    if days < 0:
        days += days_in_previous_month(e.year, e.month)
        months -= 1
    if months < 0:
        months += 12
        years -= 1

    total_seconds = (e_abs - s_abs) // _ONE_SECOND
    total_minutes = total_seconds // 60
    total_hours = total_minutes // 60
    total_days = total_hours // 24

    result = CalendarDifference(
        years=years,
        months=months,
        days=days,
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        total_seconds=total_seconds,
        total_minutes=total_minutes,
        total_hours=total_hours,
        total_days=total_days,
    )
    if not result.is_normalized:
        logger.debug("Borrow cascade left a component out of range: %s", result)
    return result
