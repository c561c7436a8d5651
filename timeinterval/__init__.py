from .core import is_time_interval, parse, time_interval
from .durations import to_duration, to_iso_duration
from .errors import InvalidConfiguration
from .interval import TimeInterval
from .points import end_of, start_of, to_point
from .util import DAY, HOUR, MILLISECOND, MINUTE, SECOND, WEEK

__all__ = [
    "TimeInterval",
    "time_interval",
    "parse",
    "is_time_interval",
    "InvalidConfiguration",
    "to_point",
    "start_of",
    "end_of",
    "to_duration",
    "to_iso_duration",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
]
