"""Temporal points: coercion, unit granularity, comparison and formatting.

A temporal point is a timezone-aware ``datetime`` truncated to millisecond
resolution. Every boundary of a ``TimeInterval`` passes through ``to_point``.
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import TypeAlias
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from timeinterval.errors import InvalidConfiguration
from timeinterval.util import DEFAULT_TZ, Unit, unit_alias

PointLike: TypeAlias = datetime | date | str | int | float | None

_MS = timedelta(milliseconds=1)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_STEP: dict[Unit, timedelta | relativedelta] = {
    "millisecond": _MS,
    "second": timedelta(seconds=1),
    "minute": timedelta(minutes=1),
    "hour": timedelta(hours=1),
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
    "month": relativedelta(months=1),
    "year": relativedelta(years=1),
}


def resolve_zone(tz: str | tzinfo | None) -> tzinfo:
    """Return a tzinfo for an IANA zone name (or pass a tzinfo through)."""
    if isinstance(tz, tzinfo):
        return tz
    if tz is None:
        tz = DEFAULT_TZ
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError, TypeError) as exc:
        raise InvalidConfiguration(
            f"Unknown time zone {tz!r}.\n"
            f"Hint: Use an IANA name such as 'UTC', 'US/Pacific' or 'Europe/London'"
        ) from exc


def _truncate(dt: datetime) -> datetime:
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def to_point(
    value: PointLike = None, tz: str | tzinfo | None = DEFAULT_TZ
) -> datetime:
    """Coerce a value into a temporal point.

    Accepts:
    - None: the current time in ``tz``
    - datetime: aware values keep their zone, naive values are placed in ``tz``
    - date: midnight of that day in ``tz``
    - int/float: Unix epoch milliseconds
    - str: ISO-8601 text; text without an offset is placed in ``tz``

    Raises:
        InvalidConfiguration: If the value is of an unsupported type or unparseable
    """
    zone = resolve_zone(tz)

    if value is None:
        return _truncate(datetime.now(tz=zone))
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=zone)
        return _truncate(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=zone)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            moved = (_EPOCH + timedelta(milliseconds=value)).astimezone(zone)
        except (OverflowError, ValueError) as exc:
            raise InvalidConfiguration(
                f"Epoch milliseconds {value!r} are outside the supported date range"
            ) from exc
        return _truncate(moved)
    if isinstance(value, str):
        try:
            parsed = isoparse(value.strip())
        except ValueError as exc:
            raise InvalidConfiguration(
                f"Cannot parse {value!r} as an ISO-8601 date-time.\n"
                f"Examples:\n"
                f"  '2024-01-01'\n"
                f"  '2024-01-01T09:30:00Z'\n"
                f"  '2024-01-01T09:30:00.250+02:00'"
            ) from exc
        return to_point(parsed, zone)
    raise InvalidConfiguration(
        f"Temporal point must be datetime, date, str, int, float, or None.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )


def normalize_unit(unit: str) -> Unit:
    """Resolve a granularity unit name such as 'day', 'days' or 'd'."""
    resolved = unit_alias(unit)
    if resolved is None:
        valid = ", ".join(_STEP.keys())
        raise InvalidConfiguration(f"Invalid unit '{unit}'. Valid units: {valid}")
    return resolved


def start_of(point: datetime, unit: str) -> datetime:
    """Return the first millisecond of the unit containing ``point``.

    Truncation happens in the point's own zone; weeks start on Monday.
    """
    unit = normalize_unit(unit)
    point = _truncate(point)
    if unit == "millisecond":
        return point
    point = point.replace(microsecond=0)
    if unit == "second":
        return point
    point = point.replace(second=0)
    if unit == "minute":
        return point
    point = point.replace(minute=0)
    if unit == "hour":
        return point
    point = point.replace(hour=0)
    if unit == "day":
        return point
    if unit == "week":
        return point - timedelta(days=point.weekday())
    point = point.replace(day=1)
    if unit == "month":
        return point
    return point.replace(month=1)


def end_of(point: datetime, unit: str) -> datetime:
    """Return the last millisecond of the unit containing ``point``."""
    unit = normalize_unit(unit)
    return start_of(point, unit) + _STEP[unit] - _MS


def _utc(point: datetime) -> datetime:
    return point.astimezone(timezone.utc)


# Same-zone datetime comparison ignores fold, so all comparisons happen in UTC
def is_before(point: datetime, other: datetime, unit: str | None = None) -> bool:
    if unit is None:
        return _utc(point) < _utc(other)
    return _utc(end_of(point, unit)) < _utc(other)


def is_after(point: datetime, other: datetime, unit: str | None = None) -> bool:
    if unit is None:
        return _utc(point) > _utc(other)
    return _utc(other) < _utc(start_of(point, unit))


def is_same(point: datetime, other: datetime, unit: str | None = None) -> bool:
    if unit is None:
        return _utc(point) == _utc(other)
    return _utc(start_of(point, unit)) <= _utc(other) <= _utc(end_of(point, unit))


def shift(point: datetime, delta: timedelta) -> datetime:
    """Move a point by an absolute amount of time, keeping its zone."""
    moved = point.astimezone(timezone.utc) + delta
    return _truncate(moved.astimezone(point.tzinfo))


def elapsed(start: datetime, end: datetime) -> timedelta:
    """Absolute time from ``start`` to ``end``, independent of wall-clock offsets."""
    return end.astimezone(timezone.utc) - start.astimezone(timezone.utc)


def to_iso_string(point: datetime) -> str:
    """Render a point in UTC with millisecond precision and a 'Z' suffix."""
    utc = point.astimezone(timezone.utc).replace(tzinfo=None)
    return f"{utc.isoformat(timespec='milliseconds')}Z"


def format_point(point: datetime, pattern: str | None = None) -> str:
    """Format a point with a strftime pattern, or as ISO-8601 seconds by default."""
    if pattern is None:
        return point.isoformat(timespec="seconds")
    return point.strftime(pattern)
