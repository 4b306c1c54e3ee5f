"""
Lane Assignment Module.

Provides the lane packing algorithm for organizing timeline items without
overlaps using a greedy "First Fit" approach.
"""

import logging
import math
from typing import Dict, List, Sequence

from lanechart.core.date_math import days_between, parse_iso_date

logger = logging.getLogger(__name__)


def _can_place_after(lane_item, new_item, min_gap_days: int) -> bool:
    """True when new_item may follow lane_item in the same lane."""
    return days_between(lane_item.end, new_item.start) >= min_gap_days


def assign_lanes(items: Sequence, min_gap_days: int = 0) -> List[List]:
    """
    Packs items into lanes using the First Fit algorithm.

    Items are stable-sorted by start date, so equal starts keep their input
    order. Each item goes into the first lane (in creation order) whose last
    item ends at least ``min_gap_days`` days before it starts; otherwise a
    new lane is opened after all existing ones.

    Args:
        items: Objects with ``start``/``end`` dates (or ISO strings).
        min_gap_days: Minimum day difference between a lane's last end and
            the next start. 0 lets an item start on the day another ends.

    Returns:
        List[List]: Lanes in creation order, each in ascending start order.
            The input sequence is left untouched.

    Raises:
        ValueError: If min_gap_days is negative.
    """
    if min_gap_days < 0:
        raise ValueError(f"min_gap_days must be >= 0, got {min_gap_days}")

    sorted_items = sorted(items, key=lambda item: parse_iso_date(item.start))

    lanes: List[List] = []
    for item in sorted_items:
        for lane in lanes:
            if _can_place_after(lane[-1], item, min_gap_days):
                lane.append(item)
                break
        else:
            lanes.append([item])

    logger.debug(
        f"Packed {len(sorted_items)} items into {len(lanes)} lanes "
        f"(min_gap_days={min_gap_days})"
    )
    return lanes


def lane_index_map(lanes: Sequence[Sequence]) -> Dict[str, int]:
    """
    Maps each item id to the index of the lane holding it.

    Args:
        lanes: Output of assign_lanes.

    Returns:
        Dict[str, int]: item id -> lane index.
    """
    return {item.id: index for index, lane in enumerate(lanes) for item in lane}


def min_gap_for_scale(pixels_per_day: float, label_px: int = 40) -> int:
    """
    Gap heuristic that leaves room for labels when zoomed out.

    Args:
        pixels_per_day: Current horizontal scale.
        label_px: Pixel room wanted between neighbouring bars.

    Returns:
        int: Whole days of gap, never negative.
    """
    if pixels_per_day <= 0:
        return 0
    return max(0, math.floor(label_px / pixels_per_day))
