"""
Timeline Ruler Module.

Computes the day ticks drawn along the top of the timeline. The tick step
adapts to the zoom so labels stay roughly a fixed distance apart.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import List

from lanechart.core.date_math import add_days, round_half_away

logger = logging.getLogger(__name__)


@dataclass
class RulerTick:
    """A single labelled tick on the ruler."""

    position: float  # Pixel offset from the timeline origin
    day: date
    label: str


def format_tick_label(day: date) -> str:
    """Formats a day as e.g. 'Jan 5, 2024'."""
    return f"{day.strftime('%b')} {day.day}, {day.year}"


class TimelineRuler:
    """
    Tick calculator for the date ruler.
    """

    def __init__(self, tick_spacing_px: int = 100):
        """
        Initializes the TimelineRuler.

        Args:
            tick_spacing_px: Approximate pixel distance between labels.
        """
        self.tick_spacing_px = tick_spacing_px

    def tick_step_days(self, pixels_per_day: float) -> int:
        """Days between consecutive ticks at the given scale."""
        if pixels_per_day <= 0:
            return 1
        return max(1, round_half_away(self.tick_spacing_px / pixels_per_day))

    def calculate_ticks(
        self, origin: date, total_days: int, pixels_per_day: float
    ) -> List[RulerTick]:
        """
        Calculates ticks for every step-th day starting at the origin.

        Args:
            origin: First rendered day (x = 0).
            total_days: Number of rendered day columns.
            pixels_per_day: Horizontal scale.

        Returns:
            List[RulerTick]: Ticks in ascending position.
        """
        step = self.tick_step_days(pixels_per_day)
        ticks = []
        for offset in range(0, max(0, total_days), step):
            day = add_days(origin, offset)
            ticks.append(
                RulerTick(
                    position=offset * pixels_per_day,
                    day=day,
                    label=format_tick_label(day),
                )
            )
        logger.debug(f"Ruler: {len(ticks)} ticks every {step} days")
        return ticks
