"""agecalc — calendar-aware age and date-difference calculator."""

__version__ = "0.1.0"
