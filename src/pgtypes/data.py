"""
Python value classes for PostgreSQL types without a builtin equivalent.

These only carry values. Reading and writing their wire representation is
left to the codec.
"""
import datetime
from dataclasses import dataclass, field

__all__ = [
    'Point',
    'Line',
    'LineSegment',
    'Box',
    'Path',
    'Polygon',
    'Circle',
    'Interval',
]


@dataclass(frozen=True)
class Point:
    """Point on a plane (``point``).

    >>> Point(1.5, -2)
    Point(x=1.5, y=-2)
    """
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Line:
    """Infinite line ``{a, b, c}`` satisfying ``ax + by + c = 0`` (``line``).
    """
    a: float = 0.0
    b: float = 0.0
    c: float = 0.0


@dataclass(frozen=True)
class LineSegment:
    """Finite line segment (``lseg``).
    """
    p1: Point = field(default_factory=Point)
    p2: Point = field(default_factory=Point)


@dataclass(frozen=True)
class Box:
    """Rectangular box given by opposite corners (``box``).
    """
    upper_right: Point = field(default_factory=Point)
    lower_left: Point = field(default_factory=Point)


@dataclass(frozen=True)
class Path:
    """Open or closed path (``path``).

    >>> Path((Point(0, 0), Point(1, 1))).is_open
    False
    """
    points: tuple[Point, ...] = ()
    is_open: bool = False


@dataclass(frozen=True)
class Polygon:
    """Closed polygon (``polygon``).
    """
    points: tuple[Point, ...] = ()


@dataclass(frozen=True)
class Circle:
    """Circle (``circle``).
    """
    center: Point = field(default_factory=Point)
    radius: float = 0.0


@dataclass(frozen=True)
class Interval:
    """Time span with calendar components (``interval``).

    PostgreSQL keeps months separately from days, which
    ``datetime.timedelta`` cannot express, so both are kept here.

    >>> Interval.from_timedelta(datetime.timedelta(days=1, seconds=3661, microseconds=5))
    Interval(years=0, months=0, days=1, hours=1, minutes=1, seconds=1, microseconds=5)
    >>> Interval(days=2, hours=3).to_timedelta()
    datetime.timedelta(days=2, seconds=10800)
    >>> Interval(months=1).to_timedelta()
    Traceback (most recent call last):
    ...
    ValueError: Interval with years or months has no fixed length
    """
    years: int = 0
    months: int = 0
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    microseconds: int = 0

    @classmethod
    def from_timedelta(cls, delta: datetime.timedelta) -> 'Interval':
        """Split a timedelta into day, clock and microsecond components.
        """
        hours, remainder = divmod(delta.seconds, 3600)
        minutes, seconds = divmod(remainder, 60)
        return cls(days=delta.days, hours=hours, minutes=minutes,
                   seconds=seconds, microseconds=delta.microseconds)

    def to_timedelta(self) -> datetime.timedelta:
        """Convert to a timedelta when the interval has a fixed length.
        """
        if self.years or self.months:
            raise ValueError('Interval with years or months has no fixed length')
        return datetime.timedelta(days=self.days, hours=self.hours,
                                  minutes=self.minutes, seconds=self.seconds,
                                  microseconds=self.microseconds)


if __name__ == '__main__':
    __import__('doctest').testmod(optionflags=4 | 8 | 32)
