import logging
from collections.abc import Mapping
from datetime import tzinfo
from typing import Any

from timeinterval import points
from timeinterval.durations import is_iso_duration, to_duration
from timeinterval.errors import InvalidConfiguration
from timeinterval.interval import TimeInterval
from timeinterval.util import DEFAULT_TZ

logger = logging.getLogger(__name__)

_SHAPES = (
    frozenset({"start", "end"}),
    frozenset({"start", "duration"}),
    frozenset({"end", "duration"}),
)


def is_time_interval(value: Any) -> bool:
    """Return True if ``value`` is a TimeInterval.

    Checks the ``__time_interval__`` marker rather than class identity, so
    instances from a duplicated copy of this module are still recognised.
    """
    return getattr(type(value), "__time_interval__", False) is True


def time_interval(
    config: "Mapping[str, Any] | str | TimeInterval | None" = None,
    /,
    *,
    tz: str | tzinfo = DEFAULT_TZ,
    **fields: Any,
) -> TimeInterval:
    """Build a TimeInterval from two of ``start``, ``end`` and ``duration``.

    Fields can be given as keywords or as a single mapping:

        >>> time_interval(start="2024-01-01T00:00:00Z", end="2024-01-02T00:00:00Z")
        >>> time_interval({"start": "2024-01-01T00:00:00Z", "duration": {"hours": 24}})
        >>> time_interval(end=datetime.now(timezone.utc), duration=timedelta(hours=1))

    A string is parsed as ISO-8601 interval notation (see ``parse``), and an
    existing interval is cloned. ``tz`` is the zone used for naive inputs and
    for ``None`` ("now").

    Raises:
        InvalidConfiguration: If the fields do not match exactly one of the
            shapes {start, end}, {start, duration} or {end, duration}
    """
    if config is not None:
        if fields:
            raise InvalidConfiguration(
                f"Pass interval fields either as a mapping or as keywords, not both.\n"
                f"Got positional {type(config).__name__} and keywords {sorted(fields)}"
            )
        if isinstance(config, str):
            return parse(config, tz=tz)
        if is_time_interval(config):
            return config.clone()
        if not isinstance(config, Mapping):
            raise InvalidConfiguration(
                f"time_interval() expects a mapping, an ISO-8601 string, or keywords.\n"
                f"Got {type(config).__name__!r}: {config!r}"
            )
        fields = dict(config)

    keys = frozenset(fields)
    if keys not in _SHAPES:
        raise InvalidConfiguration(
            f"time_interval() needs exactly two of 'start', 'end' and 'duration'.\n"
            f"Got: {sorted(keys)}\n"
            f"Examples:\n"
            f"  time_interval(start=..., end=...)\n"
            f"  time_interval(start=..., duration={{'hours': 1}})\n"
            f"  time_interval(end=..., duration=timedelta(minutes=30))"
        )
    logger.debug("Building interval from %s", "+".join(sorted(keys)))

    if "duration" not in keys:
        return TimeInterval(
            start=points.to_point(fields["start"], tz),
            end=points.to_point(fields["end"], tz),
        )

    duration = to_duration(fields["duration"])
    if "start" in keys:
        start = points.to_point(fields["start"], tz)
        return TimeInterval(start=start, end=points.shift(start, duration))

    end = points.to_point(fields["end"], tz)
    return TimeInterval(start=points.shift(end, -duration), end=end)


def parse(text: str, tz: str | tzinfo = DEFAULT_TZ) -> TimeInterval:
    """Parse ISO-8601 interval notation.

    Supports ``<start>/<end>``, ``<start>/<duration>`` and ``<duration>/<end>``;
    the text is split on its first ``/``.

    Example:
        >>> parse("2024-01-01T00:00:00.000Z/2024-01-02T00:00:00.000Z")
        >>> parse("2024-01-01T09:00:00Z/PT30M")
    """
    if not isinstance(text, str):
        raise InvalidConfiguration(
            f"Interval text must be a str, got {type(text).__name__!r}: {text!r}"
        )
    head, sep, tail = text.strip().partition("/")
    if not sep:
        raise InvalidConfiguration(
            f"Interval text must contain '/' between its two parts.\n"
            f"Got: {text!r}\n"
            f"Example: '2024-01-01T00:00:00.000Z/2024-01-02T00:00:00.000Z'"
        )

    head_is_duration = is_iso_duration(head)
    tail_is_duration = is_iso_duration(tail)
    if head_is_duration and tail_is_duration:
        raise InvalidConfiguration(
            f"Interval text cannot have a duration on both sides of '/'.\n"
            f"Got: {text!r}"
        )

    if tail_is_duration:
        logger.debug("Parsing %r as start/duration", text)
        return time_interval(start=head, duration=tail, tz=tz)
    if head_is_duration:
        logger.debug("Parsing %r as duration/end", text)
        return time_interval(end=tail, duration=head, tz=tz)
    logger.debug("Parsing %r as start/end", text)
    return time_interval(start=head, end=tail, tz=tz)
