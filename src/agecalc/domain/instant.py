"""Local wall-clock instants: parsing, serialization, and clocks.

An Instant is a naive :class:`datetime.datetime` whose fields are read as
local wall-clock values. No offset is stored, so the same serialized value
means different absolute times in different zones.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import datetime, tzinfo

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

INSTANT_PATTERN = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"(?:[T ](?P<hour>\d{2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?)?$"
)


def parse_instant(value: str | datetime | None) -> datetime | None:
    """Parse *value* into a naive local Instant, or None.

    Accepts ``YYYY-MM-DD``, ``YYYY-MM-DDThh:mm`` and ``YYYY-MM-DDThh:mm:ss``
    (a space may replace ``T``).  Input that does not resolve to a real
    calendar date-time is rejected wholesale.

    Examples:
        >>> parse_instant("2024-02-29T08:30")
        datetime.datetime(2024, 2, 29, 8, 30)
        >>> parse_instant("2023-02-29") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    match = INSTANT_PATTERN.match(value.strip())
    if match is None:
        logger.debug("Rejected instant %r: unrecognized shape", value)
        return None

    fields = {k: int(v) for k, v in match.groupdict(default="0").items()}
    try:
        return datetime(**fields)
    except ValueError:
        logger.debug("Rejected instant %r: not a calendar date-time", value)
        return None


def format_instant(dt: datetime) -> str:
    """Serialize to ``YYYY-MM-DDThh:mm`` (seconds dropped)."""
    return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}T{dt.hour:02d}:{dt.minute:02d}"


def system_clock(tz: tzinfo | None = None) -> Clock:
    """Return a clock reading the current wall-clock time.

    With *tz* None the host's local zone is used; otherwise the wall clock
    of *tz*.  Either way the returned instants are naive.
    """

    def now() -> datetime:
        if tz is None:
            return datetime.now()
        return datetime.now(tz).replace(tzinfo=None)

    return now


def fixed_clock(moment: datetime) -> Clock:
    """Return a clock frozen at *moment*."""
    return lambda: moment
