"""Signed day/month/year deltas used by the adjustment controls.

Tokens look like ``+1d``, ``-3m`` or ``+1y``.  They are parsed once into a
:class:`Delta` at the boundary; the arithmetic never inspects strings.
"""

from __future__ import annotations

import re
from enum import StrEnum

from pydantic import BaseModel, Field


class DeltaUnit(StrEnum):
    """Calendar unit a delta moves by."""

    DAY = "d"
    MONTH = "m"
    YEAR = "y"


# Application order for tokens carrying several unit letters.
UNIT_ORDER: tuple[DeltaUnit, ...] = (DeltaUnit.DAY, DeltaUnit.MONTH, DeltaUnit.YEAR)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class Delta(BaseModel):
    """Parsed delta token."""

    model_config = {"frozen": True}

    sign: int = Field(default=1)
    magnitude: int = Field(default=1)
    units: tuple[DeltaUnit, ...] = ()

    @property
    def amount(self) -> int:
        """Signed step applied to each unit."""
        return self.sign * self.magnitude

    def __str__(self) -> str:
        prefix = "-" if self.sign < 0 else "+"
        return f"{prefix}{self.magnitude}{''.join(u.value for u in self.units)}"


def _leading_int(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def parse_delta(token: str) -> Delta:
    """Parse a delta token.  Never raises.

    The first character is always the sign slot (``-`` means negative,
    anything else positive).  The magnitude is the leading integer after
    it, ignoring the final character; zero or missing means 1.  ``mo``
    anywhere in the token disables the month unit.

    Examples:
        >>> parse_delta("-3m").amount
        -3
        >>> parse_delta("+1mo").units
        ()
    """
    sign = -1 if token[:1] == "-" else 1
    magnitude = _leading_int(token[1:-1] or token[1:]) or 1

    present = {
        DeltaUnit.DAY: "d" in token,
        DeltaUnit.MONTH: "m" in token and "mo" not in token,
        DeltaUnit.YEAR: "y" in token,
    }
    units = tuple(u for u in UNIT_ORDER if present[u])
    return Delta(sign=sign, magnitude=magnitude, units=units)
