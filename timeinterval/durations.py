"""Durations: signed spans of time built from numbers, unit fields or ISO-8601 text.

Durations are plain ``timedelta`` values. Months and years given as unit fields
are fixed-length (30 and 365 days); no calendar arithmetic is attempted.
"""

import re
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, TypeAlias

from timeinterval.errors import InvalidConfiguration
from timeinterval.util import (
    DAY,
    DEFAULT_DURATION_UNIT,
    HOUR,
    MINUTE,
    SECOND,
    UNIT_MS,
    Unit,
    unit_alias,
)

DurationLike: TypeAlias = timedelta | int | float | Mapping[str, float] | str

_MS = timedelta(milliseconds=1)

_NUM = r"(\d+(?:[.,]\d+)?)"
_ISO_DURATION = re.compile(
    rf"^(?P<sign>[-+])?P"
    rf"(?:{_NUM}Y)?(?:{_NUM}M)?(?:{_NUM}W)?(?:{_NUM}D)?"
    rf"(?:T(?:{_NUM}H)?(?:{_NUM}M)?(?:{_NUM}S)?)?$"
)
_ISO_UNITS: tuple[Unit, ...] = (
    "year",
    "month",
    "week",
    "day",
    "hour",
    "minute",
    "second",
)


def is_iso_duration(text: str) -> bool:
    """True if ``text`` looks like ISO-8601 duration notation (P...)."""
    return text.strip().lstrip("+-").upper().startswith("P")


def _from_fields(fields: Mapping[str, Any]) -> timedelta:
    total = timedelta(0)
    for name, amount in fields.items():
        unit = unit_alias(name)
        if unit is None:
            valid = ", ".join(f"{u}s" for u in UNIT_MS)
            raise InvalidConfiguration(
                f"Invalid duration field '{name}'. Valid fields: {valid}"
            )
        if isinstance(amount, bool) or not isinstance(amount, (int, float)):
            raise InvalidConfiguration(
                f"Duration field '{name}' must be a number, got {amount!r}"
            )
        total += timedelta(milliseconds=amount * UNIT_MS[unit])
    return total


def _from_iso(text: str) -> timedelta:
    normalized = text.strip().upper()
    match = _ISO_DURATION.match(normalized)
    # "P" and "PT" alone carry no components
    if match is None or not any(match.groups()[1:]) or normalized.endswith("T"):
        raise InvalidConfiguration(
            f"Cannot parse {text!r} as an ISO-8601 duration.\n"
            f"Examples: 'PT30M', 'P1DT2H', '-PT1.5S', 'P2W'"
        )
    fields = {
        unit: float(raw.replace(",", "."))
        for unit, raw in zip(_ISO_UNITS, match.groups()[1:])
        if raw is not None
    }
    delta = _from_fields(fields)
    return -delta if match.group("sign") == "-" else delta


def to_duration(value: DurationLike, unit: str = DEFAULT_DURATION_UNIT) -> timedelta:
    """Coerce a value into a duration.

    Accepts:
    - timedelta: returned unchanged
    - int/float: an amount of ``unit`` (milliseconds by default)
    - mapping: unit fields such as ``{"hours": 1, "minutes": 30}``
    - str: ISO-8601 duration text such as ``"PT1H30M"``

    Raises:
        InvalidConfiguration: If the value cannot be read as a duration
    """
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return _from_fields({unit: value})
    if isinstance(value, Mapping):
        return _from_fields(value)
    if isinstance(value, str):
        return _from_iso(value)
    raise InvalidConfiguration(
        f"Duration must be timedelta, number, mapping of unit fields, or ISO text.\n"
        f"Got {type(value).__name__!r}: {value!r}\n"
        f"Examples:\n"
        f"  timedelta(hours=1)\n"
        f"  3_600_000  # milliseconds\n"
        f"  {{'hours': 1}}\n"
        f"  'PT1H'"
    )


def to_iso_duration(delta: timedelta) -> str:
    """Render a duration as ISO-8601 text, e.g. ``P1DT2H30M`` or ``-PT0.5S``."""
    sign = "-" if delta < timedelta(0) else ""
    ms = abs(delta) // _MS

    days, ms = divmod(ms, DAY)
    hours, ms = divmod(ms, HOUR)
    minutes, ms = divmod(ms, MINUTE)
    seconds, millis = divmod(ms, SECOND)

    date_part = f"{days}D" if days else ""
    time_part = ""
    if hours:
        time_part += f"{hours}H"
    if minutes:
        time_part += f"{minutes}M"
    if millis:
        time_part += f"{seconds}.{millis:03d}".rstrip("0") + "S"
    elif seconds:
        time_part += f"{seconds}S"

    if not date_part and not time_part:
        return "PT0S"
    return f"{sign}P{date_part}" + (f"T{time_part}" if time_part else "")
