"""Granularity units, their millisecond lengths, and the package defaults.

Points are kept at millisecond resolution, so every unit length below is an
integer count of milliseconds.
"""

from typing import Literal, TypeAlias

MILLISECOND = 1
SECOND = 1000
MINUTE = 60_000
HOUR = 3_600_000
DAY = 86_400_000
WEEK = 604_800_000
# Fixed-length approximations, used only when building durations from unit fields
MONTH = 30 * DAY
YEAR = 365 * DAY

Unit: TypeAlias = Literal[
    "millisecond", "second", "minute", "hour", "day", "week", "month", "year"
]

UNIT_MS: dict[Unit, int] = {
    "millisecond": MILLISECOND,
    "second": SECOND,
    "minute": MINUTE,
    "hour": HOUR,
    "day": DAY,
    "week": WEEK,
    "month": MONTH,
    "year": YEAR,
}

_SHORT_ALIASES: dict[str, Unit] = {
    "ms": "millisecond",
    "s": "second",
    "m": "minute",
    "h": "hour",
    "d": "day",
    "w": "week",
    "M": "month",
    "y": "year",
}

DEFAULT_TZ = "UTC"
DEFAULT_DURATION_UNIT: Unit = "millisecond"


def unit_alias(name: str) -> Unit | None:
    """Resolve a unit name, its plural, or its short form; None if unknown."""
    if name in _SHORT_ALIASES:
        return _SHORT_ALIASES[name]
    lowered = name.lower()
    if lowered.endswith("s") and lowered[:-1] in UNIT_MS:
        lowered = lowered[:-1]
    if lowered in UNIT_MS:
        return lowered  # pyright: ignore[reportReturnType]
    return None
