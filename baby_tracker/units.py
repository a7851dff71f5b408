"""Unit conversion between display units and canonical seconds."""

from __future__ import annotations

from typing import Optional


class Unit:
    """Semantic unit tags carried by built-in field descriptors."""

    HOURS = "hours"
    MINUTES = "minutes"
    MILLILITERS = "milliliters"


_SECONDS_PER_UNIT = {
    Unit.HOURS: 3600,
    Unit.MINUTES: 60,
}


def to_canonical_seconds(quantity: float, unit: Optional[str]) -> float:
    """Convert a quantity in ``unit`` to seconds. Unknown units pass through."""

    return quantity * _SECONDS_PER_UNIT.get(unit, 1)


def from_canonical_seconds(seconds: float, unit: Optional[str]) -> float:
    """Convert seconds back to ``unit``. Unknown units pass through."""

    factor = _SECONDS_PER_UNIT.get(unit)
    if factor is None:
        return seconds
    return seconds / factor


def seconds_to_minutes(seconds: float) -> int:
    return round(from_canonical_seconds(seconds, Unit.MINUTES))


def seconds_to_hours(seconds: float) -> float:
    return round(from_canonical_seconds(seconds, Unit.HOURS), 1)
