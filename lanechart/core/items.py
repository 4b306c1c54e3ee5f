"""Core Items Module.

Defines the TimelineItem dataclass, a named span of calendar days.

Items are immutable values: the authoritative collection lives in the
ItemStore and every change produces a new instance.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict

from lanechart.core.date_math import normalize_range, parse_iso_date, to_iso

UPDATABLE_FIELDS = ("start", "end", "name")


@dataclass(frozen=True)
class TimelineItem:
    """
    A scheduled entity spanning an inclusive range of days.
    Core unit of the Timeline.
    """

    start: date
    end: date
    name: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        """
        Converts the item to a JSON-friendly dictionary.

        Returns:
            Dict[str, Any]: id, name and ISO-formatted start/end.
        """
        return {
            "id": self.id,
            "name": self.name,
            "start": to_iso(self.start),
            "end": to_iso(self.end),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TimelineItem":
        """
        Creates a TimelineItem from a dictionary.

        Dates may be ISO strings or date objects. An inverted pair is
        normalized so that start <= end.

        Args:
            data (Dict[str, Any]): A dictionary containing item data.

        Returns:
            TimelineItem: A new item populated with the data.

        Raises:
            ValueError: If start or end is missing or unparseable.
        """
        if "start" not in data or "end" not in data:
            raise ValueError("Item requires both 'start' and 'end'")

        rng = normalize_range(data["start"], data["end"])
        kwargs = {
            "start": rng.start,
            "end": rng.end,
            "name": str(data.get("name") or ""),
        }
        if data.get("id") is not None:
            kwargs["id"] = str(data["id"])
        return cls(**kwargs)

    def with_changes(self, **changes: Any) -> "TimelineItem":
        """
        Returns a copy with the given fields replaced.

        Dates are parsed and the range normalized.

        Raises:
            ValueError: On unknown fields or unparseable dates.
        """
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unknown item fields: {sorted(unknown)}")

        start = parse_iso_date(changes.get("start", self.start))
        end = parse_iso_date(changes.get("end", self.end))
        rng = normalize_range(start, end)
        name = changes.get("name", self.name)
        return replace(self, start=rng.start, end=rng.end, name=str(name))

    @property
    def duration_days(self) -> int:
        """Number of days covered, counting both endpoints."""
        return (self.end - self.start).days + 1
