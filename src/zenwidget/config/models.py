"""
Typed records for widget configuration, themes and calendar events.

Every record is immutable and is only built through the ``parse_*``
functions below, which either return a valid instance or raise
:class:`~zenwidget.utils.errors.ValidationError`. The ``to_dict`` methods
produce the canonical JSON form that the parse functions accept back.
"""

import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..utils.errors import ValidationError

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")
_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


class DisplayGroup(str, Enum):
    """Column tag (launcher) or list tag (editor) an item belongs to."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    APP = "app"
    SHORTCUT = "shortcut"


class SortPolicy(str, Enum):
    """Ordering applied to visible items."""

    MANUAL = "manual"
    ALPHABETICAL = "alphabetical"
    USAGE = "usage"


COLUMN_ORDER = (DisplayGroup.LEFT, DisplayGroup.CENTER, DisplayGroup.RIGHT)
LIST_ORDER = (DisplayGroup.APP, DisplayGroup.SHORTCUT)


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Wall-clock time at minute resolution."""

    hour: int
    minute: int = 0

    @classmethod
    def parse(cls, value: Any) -> "TimeOfDay":
        if not isinstance(value, str):
            raise ValidationError(f"Time must be an 'HH:MM' string, got {value!r}")
        match = _TIME_RE.match(value.strip())
        if not match:
            raise ValidationError(f"Malformed time {value!r} (expected 'HH:MM')")
        hour, minute = int(match.group(1)), int(match.group(2))
        if hour > 23 or minute > 59:
            raise ValidationError(f"Time out of range: {value!r}")
        return cls(hour, minute)

    @classmethod
    def of(cls, moment: datetime) -> "TimeOfDay":
        return cls(moment.hour, moment.minute)

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class Item:
    """
    A launchable entry shown on the widget.

    Attributes:
        name: Display text, also the identity key for usage counts
        target: Opaque external reference (URL scheme or application id)
        group: Column or list the item is placed in
        start_time: Item is hidden before this time of day
        end_time: Item is hidden after this time of day
        start_day: First visible weekday (0 = Sunday)
        end_day: Last visible weekday, inclusive
    """

    name: str
    target: str
    group: DisplayGroup = DisplayGroup.LEFT
    start_time: Optional[TimeOfDay] = None
    end_time: Optional[TimeOfDay] = None
    start_day: Optional[int] = None
    end_day: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "target": self.target,
            "displayGroup": self.group.value,
        }
        if self.start_time is not None:
            data["startTime"] = str(self.start_time)
        if self.end_time is not None:
            data["endTime"] = str(self.end_time)
        if self.start_day is not None:
            data["startDay"] = self.start_day
        if self.end_day is not None:
            data["endDay"] = self.end_day
        return data


@dataclass(frozen=True)
class WidgetConfig:
    """Ordered item list plus the sort policy applied at render time."""

    items: Tuple[Item, ...] = ()
    sort_policy: SortPolicy = SortPolicy.MANUAL

    def find(self, name: str) -> Optional[Item]:
        for item in self.items:
            if item.name == name:
                return item
        return None

    def with_policy(self, policy: SortPolicy) -> "WidgetConfig":
        return replace(self, sort_policy=policy)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [item.to_dict() for item in self.items],
            "sortPolicy": self.sort_policy.value,
        }


@dataclass(frozen=True)
class Theme:
    """Presentation settings shared by every widget."""

    background_color: str = "000000"
    text_color: str = "FFFFFF"
    font_family: str = "system"
    font_weight: str = "bold"
    italic: bool = False
    min_font_size: int = 10
    max_font_size: int = 30

    def to_dict(self) -> Dict[str, Any]:
        return {
            "backgroundColor": self.background_color,
            "textColor": self.text_color,
            "fontFamily": self.font_family,
            "fontWeight": self.font_weight,
            "italic": self.italic,
            "minFontSize": self.min_font_size,
            "maxFontSize": self.max_font_size,
        }


DEFAULT_THEME = Theme()


@dataclass(frozen=True)
class CalendarEvent:
    """An upcoming calendar entry."""

    title: str
    start: datetime
    end: Optional[datetime] = None
    all_day: bool = False
    target: str = "calshow://"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "title": self.title,
            "start": self.start.isoformat(),
            "allDay": self.all_day,
            "target": self.target,
        }
        if self.end is not None:
            data["end"] = self.end.isoformat()
        return data


@dataclass
class ParseReport:
    """Valid records plus the rejection messages for the invalid ones."""

    accepted: List[Any] = field(default_factory=list)
    rejected: List[str] = field(default_factory=list)


def _first(raw: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _parse_day(value: Any, label: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{label} must be an integer 0-6, got {value!r}")
    if not 0 <= value <= 6:
        raise ValidationError(f"{label} must be between 0 and 6, got {value}")
    return value


def _required_text(raw: Dict[str, Any], label: str, *keys: str) -> str:
    value = _first(raw, *keys)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Item is missing a non-empty '{label}'")
    return value


def parse_item(raw: Any) -> Item:
    """
    Build an :class:`Item` from its JSON form.

    Accepts the legacy keys ``scheme`` (target) and ``column``/``type``
    (display group).

    Raises:
        ValidationError: If any field is missing or malformed, or if the
            time or day window wraps around (past midnight or the end of
            the week)
    """
    if not isinstance(raw, dict):
        raise ValidationError(f"Item must be an object, got {type(raw).__name__}")

    name = _required_text(raw, "name", "name")
    target = _required_text(raw, "target", "target", "scheme")

    group_value = _first(raw, "displayGroup", "column", "type")
    if group_value is None:
        group = DisplayGroup.LEFT
    else:
        try:
            group = DisplayGroup(str(group_value).lower())
        except ValueError:
            raise ValidationError(f"Unknown display group {group_value!r} for item '{name}'")

    start_raw = _first(raw, "startTime")
    end_raw = _first(raw, "endTime")
    start_time = TimeOfDay.parse(start_raw) if start_raw is not None else None
    end_time = TimeOfDay.parse(end_raw) if end_raw is not None else None

    if start_time is not None and end_time is not None and start_time > end_time:
        raise ValidationError(
            f"Time window {start_time}-{end_time} for item '{name}' wraps past midnight, "
            f"which is not supported"
        )

    start_day = _parse_day(raw.get("startDay"), "startDay")
    end_day = _parse_day(raw.get("endDay"), "endDay")
    if start_day is not None and end_day is not None and start_day > end_day:
        raise ValidationError(
            f"Day window {start_day}-{end_day} for item '{name}' wraps around the week, "
            f"which is not supported"
        )

    return Item(
        name=name,
        target=target,
        group=group,
        start_time=start_time,
        end_time=end_time,
        start_day=start_day,
        end_day=end_day,
    )


def parse_sort_policy(value: Any) -> SortPolicy:
    if value is None:
        return SortPolicy.MANUAL
    try:
        return SortPolicy(str(value).lower())
    except ValueError:
        raise ValidationError(f"Unknown sort policy {value!r}")


def parse_items(raw_items: Any) -> ParseReport:
    """Parse a list of items, collecting rejections instead of raising."""
    report = ParseReport()
    if not isinstance(raw_items, list):
        report.rejected.append("'items' must be a list")
        return report

    seen = set()
    for index, raw in enumerate(raw_items):
        try:
            item = parse_item(raw)
        except ValidationError as e:
            report.rejected.append(f"item {index}: {e}")
            continue
        if item.name in seen:
            report.rejected.append(f"item {index}: duplicate name '{item.name}'")
            continue
        seen.add(item.name)
        report.accepted.append(item)
    return report


def parse_config(raw: Any, strict: bool = True) -> WidgetConfig:
    """
    Build a :class:`WidgetConfig` from its JSON form.

    Args:
        raw: Decoded JSON document
        strict: Raise on the first invalid record instead of dropping it

    Raises:
        ValidationError: In strict mode, if anything is invalid
    """
    if not isinstance(raw, dict):
        raise ValidationError("Configuration must be an object")

    report = parse_items(raw.get("items", []))
    if strict and report.rejected:
        raise ValidationError("; ".join(report.rejected))

    policy_raw = _first(raw, "sortPolicy", "sortMethod")
    try:
        policy = parse_sort_policy(policy_raw)
    except ValidationError:
        if strict:
            raise
        policy = SortPolicy.MANUAL

    return WidgetConfig(items=tuple(report.accepted), sort_policy=policy)


def _parse_color(value: Any, label: str) -> str:
    if not isinstance(value, str) or not _HEX_RE.match(value.strip()):
        raise ValidationError(f"{label} must be a hex color, got {value!r}")
    return value.strip()


def _parse_size(value: Any, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ValidationError(f"{label} must be a positive number, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{label} must be a whole number of points, got {value!r}")
    return int(value)


def parse_theme(raw: Any) -> Theme:
    """
    Build a :class:`Theme`, filling unset fields from :data:`DEFAULT_THEME`.

    Accepts the legacy keys ``bgColor``, ``fontName`` and ``fontItalic``.
    """
    if not isinstance(raw, dict):
        raise ValidationError("Theme must be an object")

    d = DEFAULT_THEME
    background = _first(raw, "backgroundColor", "bgColor")
    text = _first(raw, "textColor")
    family = _first(raw, "fontFamily", "fontName")
    weight = _first(raw, "fontWeight")
    italic = _first(raw, "italic", "fontItalic")
    min_size = _first(raw, "minFontSize")
    max_size = _first(raw, "maxFontSize")

    theme = Theme(
        background_color=_parse_color(background, "backgroundColor")
        if background is not None
        else d.background_color,
        text_color=_parse_color(text, "textColor") if text is not None else d.text_color,
        font_family=str(family) if family else d.font_family,
        font_weight=str(weight).lower() if weight else d.font_weight,
        italic=bool(italic) if italic is not None else d.italic,
        min_font_size=_parse_size(min_size, "minFontSize")
        if min_size is not None
        else d.min_font_size,
        max_font_size=_parse_size(max_size, "maxFontSize")
        if max_size is not None
        else d.max_font_size,
    )

    if theme.min_font_size > theme.max_font_size:
        raise ValidationError(
            f"minFontSize ({theme.min_font_size}) exceeds maxFontSize ({theme.max_font_size})"
        )
    return theme


def _parse_datetime(value: Any, label: str) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            raise ValidationError(f"Malformed {label} {value!r}")
    else:
        raise ValidationError(f"{label} must be an ISO-8601 string, got {value!r}")
    # Render times are naive local time
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_event(raw: Any) -> CalendarEvent:
    """Build a :class:`CalendarEvent` from its JSON form."""
    if not isinstance(raw, dict):
        raise ValidationError("Event must be an object")

    title = raw.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Event is missing a non-empty 'title'")

    start = _parse_datetime(raw.get("start"), "start")
    end = _parse_datetime(raw["end"], "end") if raw.get("end") is not None else None
    if end is not None and end < start:
        raise ValidationError(f"Event '{title}' ends before it starts")

    target = raw.get("target") or "calshow://"
    return CalendarEvent(
        title=title,
        start=start,
        end=end,
        all_day=bool(raw.get("allDay", False)),
        target=str(target),
    )
