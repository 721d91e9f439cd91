"""
Layout composition: turns ordered, weighted entries into a placement plan.

Three disciplines are supported:

- ``compose_list``: one entry per row, greedily filled until the next
  row would overflow the height budget or the count bound is reached.
- ``compose_columns``: entries partitioned by a discriminant into
  side-by-side columns; shorter columns are padded with blank spacers so
  rows stay aligned.
- ``compose_simultaneous``: entries with exactly equal start times share
  a row, rows stacked in time order under the same budget as the list.

Every composer returns a placeholder plan when nothing is left to show.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from ..config.models import CalendarEvent, Item
from .scaling import vertical_padding

logger = logging.getLogger(__name__)

# Widget height (155) minus top and bottom padding
DEFAULT_CAPACITY = 139
DEFAULT_PADDING = 8
DEFAULT_MAX_ITEMS = 10
DEFAULT_ROW_SPACING = 2
DEFAULT_PLACEHOLDER = "No items to show"

# Secondary text is drawn slightly smaller than the entry text
DETAIL_SIZE_OFFSET = 2


@dataclass(frozen=True)
class Entry:
    """One thing to place: an item or an event, already ordered."""

    key: str
    text: str
    target: str
    detail: Optional[str] = None
    group: Optional[str] = None
    start: Optional[datetime] = None


@dataclass(frozen=True)
class Placement:
    key: str
    text: str
    size: float
    target: str
    row: int
    column: int = 0
    padding: float = 0.0
    detail: Optional[str] = None
    detail_size: Optional[float] = None

    @property
    def height(self) -> float:
        return self.size + 2 * self.padding


@dataclass(frozen=True)
class PlacementRow:
    cells: Tuple[Optional[Placement], ...]
    height: float


@dataclass(frozen=True)
class PlacementPlan:
    """
    Final layout handed to the renderer.

    Attributes:
        rows: Rows top to bottom; ``None`` cells are blank spacers
        capacity: Height budget the plan was composed for (None if unbounded)
        placeholder: Message to show instead of rows when nothing is visible
    """

    rows: Tuple[PlacementRow, ...] = ()
    capacity: Optional[float] = None
    placeholder: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.placeholder is not None

    @property
    def columns(self) -> int:
        return max((len(row.cells) for row in self.rows), default=0)

    @property
    def total_height(self) -> float:
        return sum(row.height for row in self.rows)

    @property
    def placements(self) -> List[Placement]:
        return [cell for row in self.rows for cell in row.cells if cell is not None]

    @property
    def keys(self) -> List[str]:
        return [placement.key for placement in self.placements]


def empty_plan(capacity: Optional[float] = None, placeholder: str = DEFAULT_PLACEHOLDER) -> PlacementPlan:
    return PlacementPlan(rows=(), capacity=capacity, placeholder=placeholder)


def entry_for_item(item: Item) -> Entry:
    return Entry(key=item.name, text=item.name, target=item.target, group=item.group.value)


def entry_for_event(event: CalendarEvent, key: str, detail: Optional[str] = None) -> Entry:
    return Entry(key=key, text=event.title, target=event.target, detail=detail, start=event.start)


def _place(entry: Entry, size: float, row: int, column: int = 0, padding: float = 0.0) -> Placement:
    return Placement(
        key=entry.key,
        text=entry.text,
        size=size,
        target=entry.target,
        row=row,
        column=column,
        padding=padding,
        detail=entry.detail,
        detail_size=max(1.0, size - DETAIL_SIZE_OFFSET) if entry.detail else None,
    )


def _size_of(entry: Entry, sizes: Mapping[str, float]) -> float:
    try:
        return sizes[entry.key]
    except KeyError:
        raise KeyError(f"No size computed for entry '{entry.key}'")


def compose_list(
    entries: Sequence[Entry],
    sizes: Mapping[str, float],
    capacity: float = DEFAULT_CAPACITY,
    padding: float = DEFAULT_PADDING,
    max_items: int = DEFAULT_MAX_ITEMS,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> PlacementPlan:
    """
    Capacity-bounded single-column list.

    Each row is ``size + padding`` tall. Entries are taken in order while
    the running height stays within ``capacity``; composition stops at the
    first entry that does not fit or once ``max_items`` rows are placed.
    """
    rows: List[PlacementRow] = []
    running = 0.0

    for entry in entries:
        if len(rows) >= max_items:
            break
        size = _size_of(entry, sizes)
        row_height = size + padding
        if running + row_height > capacity:
            break
        rows.append(PlacementRow(cells=(_place(entry, size, len(rows)),), height=row_height))
        running += row_height

    if not rows:
        return empty_plan(capacity, placeholder)

    logger.debug(f"List layout placed {len(rows)} of {len(entries)} entries ({running}/{capacity})")
    return PlacementPlan(rows=tuple(rows), capacity=capacity)


def partition(
    entries: Sequence[Entry],
    discriminant: Callable[[Entry], Any],
    order: Optional[Sequence[Any]] = None,
) -> List[List[Entry]]:
    """
    Split entries into partitions keyed by ``discriminant``.

    With ``order`` the partitions follow it (and keys not listed are
    dropped); otherwise they follow first appearance. Entry order within
    each partition is preserved.
    """
    groups: Dict[Any, List[Entry]] = {}
    for entry in entries:
        groups.setdefault(discriminant(entry), []).append(entry)

    if order is None:
        return list(groups.values())

    dropped = [key for key in groups if key not in order]
    if dropped:
        logger.debug(f"Dropping entries in unlisted partitions: {dropped}")
    return [groups.get(key, []) for key in order]


def grid(partitions: Sequence[Sequence[Entry]]) -> List[List[Optional[Entry]]]:
    """Interleave partitions side by side, padding short ones with None."""
    depth = max((len(part) for part in partitions), default=0)
    return [
        [part[index] if index < len(part) else None for part in partitions]
        for index in range(depth)
    ]


def compose_columns(
    entries: Sequence[Entry],
    sizes: Mapping[str, float],
    discriminant: Callable[[Entry], Any] = lambda entry: entry.group,
    order: Optional[Sequence[Any]] = None,
    capacity: Optional[float] = None,
    row_spacing: float = DEFAULT_ROW_SPACING,
    pad_to: Optional[float] = None,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> PlacementPlan:
    """
    Multi-column pack.

    Args:
        entries: Ordered entries
        sizes: Font size per entry key
        discriminant: Column key of an entry (its display group by default)
        order: Column keys left to right; empty columns are kept so
            positions stay fixed
        capacity: Optional height budget; rows past it are dropped
        row_spacing: Vertical gap added to every row
        pad_to: When set, each cell gets vertical padding so that text
            smaller than this size stays aligned with the largest text
        placeholder: Message for an empty result
    """
    columns = partition(entries, discriminant, order)
    rows: List[PlacementRow] = []
    running = 0.0

    for row_index, row_entries in enumerate(grid(columns)):
        cells: List[Optional[Placement]] = []
        for column_index, entry in enumerate(row_entries):
            if entry is None:
                cells.append(None)
                continue
            size = _size_of(entry, sizes)
            padding = vertical_padding(size, pad_to) if pad_to is not None else 0.0
            cells.append(_place(entry, size, row_index, column_index, padding))

        height = max(cell.height for cell in cells if cell is not None) + row_spacing
        if capacity is not None and running + height > capacity:
            logger.debug(f"Column layout truncated at row {row_index} ({running}/{capacity})")
            break
        rows.append(PlacementRow(cells=tuple(cells), height=height))
        running += height

    if not rows:
        return empty_plan(capacity, placeholder)
    return PlacementPlan(rows=tuple(rows), capacity=capacity)


def compose_simultaneous(
    entries: Sequence[Entry],
    sizes: Mapping[str, float],
    capacity: float = DEFAULT_CAPACITY,
    padding: float = DEFAULT_PADDING,
    max_items: int = DEFAULT_MAX_ITEMS,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> PlacementPlan:
    """
    Time-grouped stacks: entries with the same ``start`` share a row.

    Rows are as wide as the largest group; shorter rows are padded with
    blank spacers. Each row is as tall as its largest entry plus
    ``padding``, and rows are added while they fit ``capacity`` and the
    total entry count stays within ``max_items``.
    """
    groups = partition(entries, lambda entry: entry.start)
    width = max((len(group) for group in groups), default=0)

    rows: List[PlacementRow] = []
    running = 0.0
    placed = 0

    for group in groups:
        if placed + len(group) > max_items:
            break
        row_sizes = [_size_of(entry, sizes) for entry in group]
        height = max(row_sizes) + padding
        if running + height > capacity:
            break
        row_index = len(rows)
        cells: List[Optional[Placement]] = [
            _place(entry, size, row_index, column) for column, (entry, size) in enumerate(zip(group, row_sizes))
        ]
        cells.extend([None] * (width - len(cells)))
        rows.append(PlacementRow(cells=tuple(cells), height=height))
        running += height
        placed += len(group)

    if not rows:
        return empty_plan(capacity, placeholder)
    return PlacementPlan(rows=tuple(rows), capacity=capacity)
