"""
Date Math Module.

Pure helpers for day-granularity calendar arithmetic and for mapping dates
onto horizontal pixel offsets. Shared by the lane engine, the interaction
controller and the rendering shell.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Tuple, Union

DateLike = Union[date, datetime, str]

ISO_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True)
class DateRange:
    """An inclusive start/end pair of calendar days."""

    start: date
    end: date

    def as_changes(self) -> dict:
        """Returns the range as a partial-update mapping."""
        return {"start": self.start, "end": self.end}


def parse_iso_date(value: DateLike) -> date:
    """
    Parses a calendar date from a date, datetime or ISO string.

    Any time-of-day component is discarded.

    Args:
        value: A date, datetime or 'YYYY-MM-DD' string (a trailing time
            part such as 'T10:00' is ignored).

    Returns:
        date: The calendar day.

    Raises:
        ValueError: If the value is missing or cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Invalid date value: {value!r}")

    text = value.strip()[:10]
    try:
        return datetime.strptime(text, ISO_FORMAT).date()
    except ValueError as e:
        raise ValueError(f"Invalid ISO date: {value!r}") from e


def to_iso(value: date) -> str:
    """Formats a date as 'YYYY-MM-DD'."""
    return value.strftime(ISO_FORMAT)


def days_between(a: DateLike, b: DateLike) -> int:
    """
    Calendar-day difference from a to b (midnight to midnight).

    Same-day pairs yield 0; b before a yields a negative number.
    """
    return (parse_iso_date(b) - parse_iso_date(a)).days


def add_days(value: DateLike, days: int) -> date:
    """Returns the day shifted by a whole number of days."""
    return parse_iso_date(value) + timedelta(days=days)


def normalize_range(start: DateLike, end: DateLike) -> DateRange:
    """
    Builds a range, swapping endpoints when end precedes start.

    Dragging a resize handle past the opposite endpoint flips the range
    instead of clamping it.
    """
    s = parse_iso_date(start)
    e = parse_iso_date(end)
    if e < s:
        return DateRange(start=e, end=s)
    return DateRange(start=s, end=e)


def round_half_away(value: float) -> int:
    """Rounds to the nearest integer, halves away from zero."""
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def x_to_day_delta(pixel_delta: float, pixels_per_day: float) -> int:
    """Converts a horizontal pixel displacement into whole days."""
    if pixels_per_day <= 0:
        raise ValueError("pixels_per_day must be positive")
    return round_half_away(pixel_delta / pixels_per_day)


def date_to_x(value: DateLike, origin: DateLike, pixels_per_day: float) -> float:
    """Pixel offset of a day relative to the timeline origin."""
    return days_between(origin, value) * pixels_per_day


def bar_width(start_x: float, end_x: float, pixels_per_day: float) -> float:
    """
    Width of an item bar with an inclusive end day.

    A single-day item still occupies one full day-width.
    """
    return max(pixels_per_day, end_x + pixels_per_day - start_x)


def timeline_bounds(
    items: Iterable, padding_days: int = 7, today: Optional[date] = None
) -> Tuple[date, date]:
    """
    Computes the padded (origin, last) days covering all items.

    Args:
        items: Objects with start/end attributes.
        padding_days: Days of margin added on both sides.
        today: Anchor used when there are no items. Defaults to date.today().

    Returns:
        Tuple[date, date]: The first and last rendered day.
    """
    starts = []
    ends = []
    for item in items:
        starts.append(parse_iso_date(item.start))
        ends.append(parse_iso_date(item.end))

    if not starts:
        anchor = today or date.today()
        low, high = anchor, anchor
    else:
        low, high = min(starts), max(ends)

    return add_days(low, -padding_days), add_days(high, padding_days)


def total_days(origin: DateLike, last: DateLike) -> int:
    """Number of rendered day columns between two inclusive bounds."""
    return max(1, days_between(origin, last) + 1)
