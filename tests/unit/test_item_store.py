"""
Unit tests for ItemStore.
"""

from datetime import date

import pytest

from lanechart.core.item_store import ItemStore
from lanechart.core.items import TimelineItem


@pytest.fixture
def store():
    return ItemStore(
        [
            TimelineItem.from_dict(
                {"id": "a", "name": "A", "start": "2024-01-01", "end": "2024-01-05"}
            ),
            TimelineItem.from_dict(
                {"id": "b", "name": "B", "start": "2024-01-03", "end": "2024-01-08"}
            ),
        ]
    )


class TestItemStore:
    def test_items_is_a_copy(self, store):
        items = store.items
        items.clear()
        assert len(store) == 2

    def test_get(self, store):
        assert store.get("b").name == "B"
        assert store.get("zzz") is None

    def test_duplicate_ids_rejected(self):
        item = TimelineItem(start=date(2024, 1, 1), end=date(2024, 1, 1), id="x")
        with pytest.raises(ValueError):
            ItemStore([item, item])

    def test_partial_update_merges_by_id(self, store):
        result = store.apply_update({"id": "a", "start": date(2024, 1, 2)})
        assert result.success
        assert result.item.start == date(2024, 1, 2)
        assert result.item.end == date(2024, 1, 5)
        assert result.item.name == "A"
        assert store.get("b").start == date(2024, 1, 3)

    def test_update_keeps_order(self, store):
        store.apply_update({"id": "a", "name": "Renamed"})
        assert [item.id for item in store.items] == ["a", "b"]

    def test_update_accepts_iso_strings(self, store):
        result = store.apply_update({"id": "b", "end": "2024-01-20"})
        assert result.item.end == date(2024, 1, 20)

    def test_listeners_notified_on_change(self, store):
        seen = []
        store.subscribe(seen.append)
        store.apply_update({"id": "a", "name": "New"})
        assert len(seen) == 1
        assert seen[0][0].name == "New"

    def test_no_change_does_not_notify(self, store):
        seen = []
        store.subscribe(seen.append)
        result = store.apply_update({"id": "a", "name": "A"})
        assert result.success
        assert result.message == "No change"
        assert seen == []

    def test_unsubscribe(self, store):
        seen = []
        store.subscribe(seen.append)
        store.unsubscribe(seen.append)
        store.apply_update({"id": "a", "name": "New"})
        assert seen == []

    @pytest.mark.parametrize(
        "partial",
        [
            {},
            {"name": "no id"},
            {"id": "missing", "name": "X"},
            {"id": "a", "colour": "red"},
            {"id": "a", "start": "not a date"},
        ],
    )
    def test_invalid_updates_fail_closed(self, store, partial, caplog):
        seen = []
        store.subscribe(seen.append)
        before = store.items
        result = store.apply_update(partial)
        assert not result.success
        assert result.message
        assert store.items == before
        assert seen == []
        assert "Rejected item update" in caplog.text

    def test_lanes_follow_updates(self, store):
        assert [[i.id for i in lane] for lane in store.lanes()] == [["a"], ["b"]]
        store.apply_update({"id": "b", "start": "2024-01-06", "end": "2024-01-09"})
        assert [[i.id for i in lane] for lane in store.lanes()] == [["a", "b"]]

    def test_replace_all_notifies(self, store):
        seen = []
        store.subscribe(seen.append)
        store.replace_all([])
        assert seen == [[]]
        assert len(store) == 0
