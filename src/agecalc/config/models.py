"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, agecalc.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel


class CalendarConfig(BaseModel):
    """[calendar] section.

    ``timezone`` is an IANA zone name used for "now" and for resolving
    wall-clock instants to absolute time.  Empty means the host zone.
    """

    model_config = {"frozen": True}

    timezone: str = ""


class DisplayConfig(BaseModel):
    """[display] section."""

    model_config = {"frozen": True}

    show_totals: bool = True
    show_references: bool = True
    reference_format: str = "%Y-%m-%d %H:%M:%S"

