"""
Item Loader Module.

Reads and writes timeline items as JSON. Dates are serialized as ISO
calendar dates ('YYYY-MM-DD').
"""

import json
import logging
import os
from typing import Any, List, Sequence, Union

from lanechart.core.items import TimelineItem
from lanechart.core.paths import get_resource_path

logger = logging.getLogger(__name__)

SAMPLE_ITEMS_PATH = os.path.join("lanechart", "resources", "sample_items.json")

PathLike = Union[str, "os.PathLike[str]"]


def parse_items(data: Any) -> List[TimelineItem]:
    """
    Builds items from decoded JSON.

    Args:
        data: Either a list of item dicts or ``{"items": [...]}``.

    Returns:
        List[TimelineItem]: Items in file order.

    Raises:
        ValueError: If the structure or any record is invalid.
    """
    if isinstance(data, dict):
        data = data.get("items")
    if not isinstance(data, list):
        raise ValueError("Expected a list of items or an object with 'items'")

    items = []
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise ValueError(f"Item #{index} is not an object")
        try:
            items.append(TimelineItem.from_dict(record))
        except ValueError as e:
            raise ValueError(f"Item #{index}: {e}") from e
    return items


def load_items(path: PathLike) -> List[TimelineItem]:
    """
    Loads items from a JSON file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not valid item JSON.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    items = parse_items(data)
    logger.info(f"Loaded {len(items)} items from {path}")
    return items


def save_items(path: PathLike, items: Sequence[TimelineItem]) -> None:
    """Writes items to a JSON file."""
    payload = [item.to_dict() for item in items]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
        f.write("\n")
    logger.info(f"Saved {len(payload)} items to {path}")


def sample_items() -> List[TimelineItem]:
    """The bundled demo data set."""
    return load_items(get_resource_path(SAMPLE_ITEMS_PATH))
