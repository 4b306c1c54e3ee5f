"""
Item Store Module.

Owns the authoritative list of timeline items and merges partial updates
into it by id. Observers are notified after each successful change so the
rendering shell can recompute lanes.

Classes:
    UpdateResult: Standardized result object for store mutations.
    ItemStore: The authoritative item collection.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from lanechart.core.items import UPDATABLE_FIELDS, TimelineItem
from lanechart.core.lane_assignment import assign_lanes

logger = logging.getLogger(__name__)


@dataclass
class UpdateResult:
    """
    Standardized result object for store mutations.

    Attributes:
        success (bool): True if the store changed.
        message (str): A human-readable message describing the result.
        item (Optional[TimelineItem]): The item after the update, if any.
    """

    success: bool
    message: str = ""
    item: Optional[TimelineItem] = None


class ItemStore:
    """
    The authoritative, ordered collection of timeline items.

    Invalid updates fail closed: the store is left untouched, a warning is
    logged and an unsuccessful UpdateResult is returned.
    """

    def __init__(self, items: Iterable[TimelineItem] = ()):
        self._items: List[TimelineItem] = []
        self._listeners: List[Callable[[List[TimelineItem]], None]] = []
        self.replace_all(items, notify=False)

    @property
    def items(self) -> List[TimelineItem]:
        """A copy of the current items in insertion order."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def get(self, item_id: str) -> Optional[TimelineItem]:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def subscribe(self, listener: Callable[[List[TimelineItem]], None]) -> None:
        """Registers a callback invoked with the new item list after changes."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[List[TimelineItem]], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def replace_all(self, items: Iterable[TimelineItem], notify: bool = True) -> None:
        """
        Replaces the whole collection.

        Raises:
            ValueError: If two items share an id.
        """
        new_items = list(items)
        seen = set()
        for item in new_items:
            if item.id in seen:
                raise ValueError(f"Duplicate item id: {item.id}")
            seen.add(item.id)

        self._items = new_items
        logger.info(f"Item store loaded with {len(new_items)} items")
        if notify:
            self._notify()

    def apply_update(self, partial: Mapping[str, Any]) -> UpdateResult:
        """
        Merges a partial update ``{"id": ..., **fields}`` into the store.

        Args:
            partial: Must contain "id"; other keys among start, end, name.

        Returns:
            UpdateResult: success flag, message and the merged item.
        """
        item_id = partial.get("id") if partial else None
        if item_id is None:
            return self._reject("Update has no id")

        changes: Dict[str, Any] = {k: v for k, v in partial.items() if k != "id"}
        unknown = set(changes) - set(UPDATABLE_FIELDS)
        if unknown:
            return self._reject(f"Unknown fields {sorted(unknown)} for {item_id}")

        for index, current in enumerate(self._items):
            if current.id != item_id:
                continue
            try:
                updated = current.with_changes(**changes)
            except ValueError as e:
                return self._reject(f"Invalid update for {item_id}: {e}")

            if updated == current:
                return UpdateResult(True, "No change", current)

            self._items[index] = updated
            logger.info(f"Updated item {item_id}: {sorted(changes)}")
            self._notify()
            return UpdateResult(True, "Updated", updated)

        return self._reject(f"Unknown item id: {item_id}")

    def lanes(self, min_gap_days: int = 0) -> List[List[TimelineItem]]:
        """Lane assignment for the current items."""
        return assign_lanes(self._items, min_gap_days=min_gap_days)

    def _reject(self, message: str) -> UpdateResult:
        logger.warning(f"Rejected item update: {message}")
        return UpdateResult(False, message)

    def _notify(self) -> None:
        snapshot = self.items
        for listener in list(self._listeners):
            listener(snapshot)
