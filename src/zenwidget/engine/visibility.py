"""
Time-window eligibility for items and events.
"""

from datetime import datetime, timedelta
from typing import Iterable, List

from ..config.models import CalendarEvent, Item, TimeOfDay

# Events further out than this are not shown
DEFAULT_HORIZON = timedelta(days=365)


def weekday_index(now: datetime) -> int:
    """Day of week with Sunday as 0, the convention item day bounds use."""
    return (now.weekday() + 1) % 7


def is_visible(item: Item, now: datetime) -> bool:
    """
    Check whether ``now`` falls inside the item's display window.

    Time bounds are compared at minute resolution and are inclusive. The
    day window applies only when both ``start_day`` and ``end_day`` are
    set; wrap-around windows are rejected when the item is parsed.
    """
    clock = TimeOfDay.of(now)

    if item.start_time is not None and clock < item.start_time:
        return False

    if item.end_time is not None and clock > item.end_time:
        return False

    if item.start_day is not None and item.end_day is not None:
        day = weekday_index(now)
        if day < item.start_day or day > item.end_day:
            return False

    return True


def filter_visible(items: Iterable[Item], now: datetime) -> List[Item]:
    """Return the visible items in their original order."""
    return [item for item in items if is_visible(item, now)]


def is_upcoming(event: CalendarEvent, now: datetime, horizon: timedelta = DEFAULT_HORIZON) -> bool:
    """True for events starting within the horizon and events in progress."""
    if event.end is not None and event.start <= now <= event.end:
        return True
    return now <= event.start <= now + horizon


def filter_upcoming(
    events: Iterable[CalendarEvent], now: datetime, horizon: timedelta = DEFAULT_HORIZON
) -> List[CalendarEvent]:
    """Upcoming events, soonest first."""
    upcoming = [event for event in events if is_upcoming(event, now, horizon)]
    return sorted(upcoming, key=lambda event: event.start)
