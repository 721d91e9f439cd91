"""
Tests for layout composition
"""

from datetime import datetime, timedelta

import pytest

from zenwidget.config.models import CalendarEvent, DisplayGroup, Item
from zenwidget.engine.layout import (
    DEFAULT_CAPACITY,
    DEFAULT_PLACEHOLDER,
    Entry,
    compose_columns,
    compose_list,
    compose_simultaneous,
    entry_for_event,
    entry_for_item,
    grid,
    partition,
)
from zenwidget.engine.scaling import rank_decay_size


def make_entries(count, group=None):
    return [Entry(key=f"e{i}", text=f"Entry {i}", target=f"t{i}://", group=group) for i in range(count)]


def cell_keys(plan):
    return [[cell.key if cell else None for cell in row.cells] for row in plan.rows]


class TestComposeList:
    def test_never_exceeds_capacity(self):
        entries = make_entries(30)
        for capacity in (0, 10, 50, 139, 200, 1000):
            for size in (5, 12.5, 20, 40):
                sizes = {entry.key: size for entry in entries}
                plan = compose_list(entries, sizes, capacity=capacity)
                assert plan.total_height <= capacity
                assert len(plan.placements) <= 10

    def test_count_bound(self):
        entries = make_entries(30)
        sizes = {entry.key: 1 for entry in entries}
        plan = compose_list(entries, sizes, capacity=10_000, max_items=10)
        assert len(plan.placements) == 10

    def test_rank_decay_calendar_fit(self):
        # Default calendar: sizes 20 * e^(-0.5 * i) floored at 10, 8px spacing, 139px budget
        entries = make_entries(10)
        sizes = {entry.key: rank_decay_size(i, 10, 20) for i, entry in enumerate(entries)}
        plan = compose_list(entries, sizes, capacity=DEFAULT_CAPACITY)
        # Rows are 28, 20.13, then 18 each: seven rows take 138.13, an eighth would overflow
        assert plan.keys == ["e0", "e1", "e2", "e3", "e4", "e5", "e6"]
        assert plan.total_height <= DEFAULT_CAPACITY

    def test_stops_at_first_item_that_does_not_fit(self):
        entries = make_entries(3)
        sizes = {"e0": 10, "e1": 50, "e2": 1}
        plan = compose_list(entries, sizes, capacity=40, padding=8)
        assert plan.keys == ["e0"]

    def test_exact_fit(self):
        entries = make_entries(2)
        sizes = {"e0": 12, "e1": 12}
        plan = compose_list(entries, sizes, capacity=40, padding=8)
        assert plan.keys == ["e0", "e1"]
        assert plan.total_height == 40

    def test_rows_numbered(self):
        entries = make_entries(3)
        plan = compose_list(entries, {e.key: 10 for e in entries})
        assert [p.row for p in plan.placements] == [0, 1, 2]
        assert plan.columns == 1

    def test_empty_gives_placeholder(self):
        plan = compose_list([], {})
        assert plan.is_empty
        assert plan.placeholder == DEFAULT_PLACEHOLDER
        assert plan.rows == ()

    def test_nothing_fits_gives_placeholder(self):
        entries = make_entries(1)
        plan = compose_list(entries, {"e0": 100}, capacity=50, placeholder="Too big")
        assert plan.placeholder == "Too big"

    def test_detail_is_smaller(self):
        entries = [Entry("k", "Dentist", "calshow://", detail="2d")]
        plan = compose_list(entries, {"k": 16})
        placement = plan.placements[0]
        assert placement.detail == "2d"
        assert placement.detail_size == 14

    def test_missing_size(self):
        with pytest.raises(KeyError):
            compose_list(make_entries(1), {})


class TestPartition:
    def test_first_appearance_order(self):
        entries = [
            Entry("a", "a", "a://", group="right"),
            Entry("b", "b", "b://", group="left"),
            Entry("c", "c", "c://", group="right"),
        ]
        parts = partition(entries, lambda e: e.group)
        assert [[e.key for e in part] for part in parts] == [["a", "c"], ["b"]]

    def test_explicit_order_keeps_empty_columns(self):
        entries = [Entry("a", "a", "a://", group="right")]
        parts = partition(entries, lambda e: e.group, order=["left", "center", "right"])
        assert [[e.key for e in part] for part in parts] == [[], [], ["a"]]

    def test_grid_pads_short_partitions(self):
        a, b, c = make_entries(3)
        assert grid([[a, b], [], [c]]) == [[a, None, c], [b, None, None]]


class TestComposeColumns:
    @pytest.fixture
    def entries(self):
        items = [
            Item("L1", "l1://", DisplayGroup.LEFT),
            Item("R1", "r1://", DisplayGroup.RIGHT),
            Item("L2", "l2://", DisplayGroup.LEFT),
            Item("L3", "l3://", DisplayGroup.LEFT),
            Item("C1", "c1://", DisplayGroup.CENTER),
        ]
        return [entry_for_item(item) for item in items]

    def test_rows_aligned_with_spacers(self, entries):
        sizes = {e.key: 10 for e in entries}
        plan = compose_columns(entries, sizes, order=["left", "center", "right"])
        assert cell_keys(plan) == [
            ["L1", "C1", "R1"],
            ["L2", None, None],
            ["L3", None, None],
        ]
        assert plan.columns == 3

    def test_row_count_is_longest_column(self, entries):
        plan = compose_columns(entries, {e.key: 10 for e in entries}, order=["left", "center", "right"])
        assert len(plan.rows) == 3

    def test_column_and_row_indices(self, entries):
        plan = compose_columns(entries, {e.key: 10 for e in entries}, order=["left", "center", "right"])
        r1 = next(p for p in plan.placements if p.key == "R1")
        assert (r1.row, r1.column) == (0, 2)

    def test_padding_aligns_to_largest(self, entries):
        sizes = {"L1": 30, "R1": 20, "L2": 10, "L3": 10, "C1": 30}
        plan = compose_columns(entries, sizes, order=["left", "center", "right"], pad_to=30)
        r1 = next(p for p in plan.placements if p.key == "R1")
        assert r1.padding == 5
        assert r1.height == 30
        assert plan.rows[0].height == 32

    def test_capacity_truncates_rows(self, entries):
        sizes = {e.key: 20 for e in entries}
        plan = compose_columns(entries, sizes, order=["left", "center", "right"], capacity=50)
        assert len(plan.rows) == 2
        assert plan.total_height <= 50

    def test_empty(self):
        plan = compose_columns([], {}, order=["left", "center", "right"])
        assert plan.is_empty

    def test_custom_discriminant(self):
        entries = make_entries(4)
        plan = compose_columns(entries, {e.key: 10 for e in entries}, discriminant=lambda e: int(e.key[1:]) % 2)
        assert cell_keys(plan) == [["e0", "e1"], ["e2", "e3"]]


class TestComposeSimultaneous:
    def test_same_start_shares_row(self):
        base = datetime(2024, 1, 15, 9, 0)
        entries = [
            Entry("a", "A", "calshow://", start=base),
            Entry("b", "B", "calshow://", start=base),
            Entry("c", "C", "calshow://", start=base + timedelta(hours=1)),
        ]
        sizes = {"a": 20, "b": 20, "c": 14}
        plan = compose_simultaneous(entries, sizes)
        assert cell_keys(plan) == [["a", "b"], ["c", None]]
        assert plan.rows[0].height == 28
        assert plan.rows[1].height == 22

    def test_respects_capacity_and_count(self):
        base = datetime(2024, 1, 15, 9, 0)
        entries = [Entry(f"e{i}", f"E{i}", "calshow://", start=base + timedelta(hours=i)) for i in range(20)]
        sizes = {e.key: 10 for e in entries}
        plan = compose_simultaneous(entries, sizes, capacity=139, max_items=5)
        assert len(plan.placements) == 5
        assert plan.total_height <= 139

    def test_group_that_would_exceed_count_is_dropped(self):
        base = datetime(2024, 1, 15, 9, 0)
        entries = [
            Entry("a", "A", "x://", start=base),
            Entry("b", "B", "x://", start=base + timedelta(hours=1)),
            Entry("c", "C", "x://", start=base + timedelta(hours=1)),
        ]
        plan = compose_simultaneous(entries, {"a": 10, "b": 10, "c": 10}, max_items=2)
        assert plan.keys == ["a"]

    def test_empty(self):
        assert compose_simultaneous([], {}).is_empty


def test_entry_for_event():
    start = datetime(2024, 1, 15, 9, 0)
    entry = entry_for_event(CalendarEvent("Dentist", start), "0:Dentist", detail="2d")
    assert (entry.key, entry.text, entry.target, entry.detail, entry.start) == (
        "0:Dentist",
        "Dentist",
        "calshow://",
        "2d",
        start,
    )
    assert entry.group is None
