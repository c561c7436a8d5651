from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import ClassVar

from timeinterval import points
from timeinterval.points import PointLike


@dataclass(frozen=True, kw_only=True)
class TimeInterval:
    """Half-open span of time ``[start, end)``.

    Ordering is not enforced: an interval whose start is not before its end can
    be built and reports ``is_valid() == False``.
    """

    start: datetime
    end: datetime

    __time_interval__: ClassVar[bool] = True

    @property
    def duration(self) -> timedelta:
        return points.elapsed(self.start, self.end)

    def clone(self) -> "TimeInterval":
        return TimeInterval(start=self.start, end=self.end)

    def is_valid(self, unit: str | None = None) -> bool:
        return points.is_before(self.start, self.end, unit)

    def is_same(self, other: "TimeInterval", unit: str | None = None) -> bool:
        return points.is_same(self.start, other.start, unit) and points.is_same(
            self.end, other.end, unit
        )

    def overlaps(self, other: "TimeInterval", unit: str | None = None) -> bool:
        """True if both intervals share time; back-to-back intervals do not."""
        return points.is_before(self.start, other.end, unit) and points.is_before(
            other.start, self.end, unit
        )

    def includes(self, point: PointLike, unit: str | None = None) -> bool:
        """True if ``start <= point < end``."""
        point = points.to_point(point, self.start.tzinfo)
        return points.is_after(self.end, point, unit) and (
            points.is_before(self.start, point, unit)
            or points.is_same(self.start, point, unit)
        )

    def __contains__(self, point: PointLike) -> bool:
        return self.includes(point)

    def with_start(
        self, start: PointLike | Callable[[datetime], PointLike]
    ) -> "TimeInterval":
        """Return a copy with ``start`` replaced.

        ``start`` is a point-like value or a function of the current start.
        """
        new_start = start(self.start) if callable(start) else start
        return TimeInterval(
            start=points.to_point(new_start, self.start.tzinfo), end=self.end
        )

    def with_end(
        self, end: PointLike | Callable[[datetime], PointLike]
    ) -> "TimeInterval":
        """Return a copy with ``end`` replaced (see ``with_start``)."""
        new_end = end(self.end) if callable(end) else end
        return TimeInterval(
            start=self.start, end=points.to_point(new_end, self.end.tzinfo)
        )

    def to_iso_string(self) -> str:
        return f"{points.to_iso_string(self.start)}/{points.to_iso_string(self.end)}"

    def to_json(self) -> str:
        return self.to_iso_string()

    def format(self, pattern: str | None = None) -> dict[str, str]:
        return {
            "start": points.format_point(self.start, pattern),
            "end": points.format_point(self.end, pattern),
        }

    def __str__(self) -> str:
        return self.to_iso_string()
