"""
Configuration stores for zenwidget

Each store owns one file under the zenwidget home directory. ``.json``
files are decoded with the json module, ``.yaml``/``.yml`` files with
PyYAML. Everything is written back as JSON.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml

from ..utils.errors import StorageError, ValidationError
from .models import (
    DEFAULT_THEME,
    CalendarEvent,
    DisplayGroup,
    Item,
    SortPolicy,
    Theme,
    WidgetConfig,
    parse_config,
    parse_event,
    parse_theme,
)

logger = logging.getLogger(__name__)

# Maximum stored file size (1MB is far more than any widget needs)
MAX_FILE_SIZE = 1024 * 1024

CONFIG_FILENAME = "config.json"
USAGE_FILENAME = "stats.json"
THEME_FILENAME = "theme.json"
EVENTS_FILENAME = "events.json"

# Anything else is decoded as JSON
YAML_SUFFIXES = (".yaml", ".yml")

EXAMPLE_CONFIG = WidgetConfig(
    items=(
        Item("Settings", "App-prefs://", DisplayGroup.LEFT),
        Item("Weather", "weather://", DisplayGroup.LEFT),
        Item("Messages", "messages://", DisplayGroup.LEFT),
        Item("Calendar", "calshow://", DisplayGroup.LEFT),
        Item("Phone", "tel://", DisplayGroup.LEFT),
        Item("Maps", "maps://", DisplayGroup.LEFT),
        Item("Create Reminder", "shortcuts://run-shortcut?name=Create%20Reminder", DisplayGroup.RIGHT),
        Item("Take Photo", "shortcuts://run-shortcut?name=Take%20Photo", DisplayGroup.RIGHT),
        Item("QR Scanner", "shortcuts://run-shortcut?name=QR%20Scanner", DisplayGroup.RIGHT),
        Item("Shazam", "shortcuts://run-shortcut?name=Shazam", DisplayGroup.RIGHT),
    ),
    sort_policy=SortPolicy.MANUAL,
)


def default_home() -> Path:
    """Directory holding all zenwidget files (``$ZENWIDGET_HOME`` or ``~/.zenwidget``)."""
    override = os.environ.get("ZENWIDGET_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".zenwidget"


def read_document(path: Path) -> Optional[Any]:
    """
    Read and decode a stored document.

    Returns:
        Decoded document, or None if the file does not exist yet

    Raises:
        StorageError: If the file is too large, unreadable or not valid JSON/YAML
    """
    if not path.exists():
        logger.debug(f"No file at {path}, using defaults")
        return None

    if path.is_dir():
        raise StorageError(f"Path is a directory, not a file: {path}")

    file_size = path.stat().st_size
    if file_size > MAX_FILE_SIZE:
        raise StorageError(f"File too large: {file_size} bytes (maximum {MAX_FILE_SIZE} bytes)")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                return yaml.safe_load(f)
            return json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise StorageError(f"Invalid document in {path}: {e}")
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"Cannot read {path}: {e}")


def write_document(path: Path, data: Any, indent: Optional[int] = 2) -> None:
    """
    Write a document as JSON, creating parent directories as needed.

    Raises:
        StorageError: If the directory or file cannot be written
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=indent, ensure_ascii=False)
            f.write("\n")
    except OSError as e:
        raise StorageError(f"Cannot write {path}: {e}")


class ConfigStore:
    """Loads and saves the item list and sort policy"""

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path).expanduser() if path else default_home() / CONFIG_FILENAME

    def exists(self) -> bool:
        return self.path.exists()

    def load(self, strict: bool = False) -> WidgetConfig:
        """
        Load the widget configuration.

        A missing file yields an empty configuration. In lenient mode
        (the render path) invalid items are dropped and logged and a corrupt
        file degrades to the empty configuration.

        Args:
            strict: Raise instead of dropping invalid records

        Raises:
            ValidationError: In strict mode, if any record is invalid
            StorageError: In strict mode, if the file cannot be parsed
        """
        try:
            raw = read_document(self.path)
        except StorageError as e:
            if strict:
                raise
            logger.error(f"Ignoring unreadable configuration: {e}")
            return WidgetConfig()

        if raw is None:
            return WidgetConfig()

        if strict:
            config = parse_config(raw, strict=True)
        else:
            config = self._load_lenient(raw)

        logger.info(f"Loaded {len(config.items)} items from {self.path}")
        return config

    def _load_lenient(self, raw: Any) -> WidgetConfig:
        try:
            parse_config(raw, strict=True)
        except ValidationError as e:
            logger.warning(f"Skipping invalid configuration entries in {self.path}: {e}")
        try:
            return parse_config(raw, strict=False)
        except ValidationError as e:
            logger.error(f"Ignoring malformed configuration: {e}")
            return WidgetConfig()

    def save(self, config: WidgetConfig) -> None:
        write_document(self.path, config.to_dict())
        logger.info(f"Saved {len(config.items)} items to {self.path}")

    def set_sort_policy(self, policy: SortPolicy) -> None:
        """
        Change the stored sort policy in place.

        The rest of the document, including items that fail validation,
        is written back untouched.

        Raises:
            StorageError: If the file cannot be read or written
            ValidationError: If the stored document is not an object
        """
        raw = read_document(self.path)
        if raw is None:
            raw = {"items": []}
        if not isinstance(raw, dict):
            raise ValidationError(f"Configuration in {self.path} must be an object")

        raw.pop("sortMethod", None)
        raw["sortPolicy"] = SortPolicy(policy).value
        write_document(self.path, raw)
        logger.info(f"Sort policy in {self.path} set to '{raw['sortPolicy']}'")

    def ensure_example(self) -> WidgetConfig:
        """Write the example configuration if no configuration exists yet."""
        if self.exists():
            return self.load()
        self.save(EXAMPLE_CONFIG)
        return EXAMPLE_CONFIG


class ThemeStore:
    """Loads and saves the shared theme"""

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path).expanduser() if path else default_home() / THEME_FILENAME

    def load(self, strict: bool = False) -> Theme:
        """Load the theme, falling back to :data:`DEFAULT_THEME` when absent or invalid."""
        try:
            raw = read_document(self.path)
            if raw is None:
                return DEFAULT_THEME
            return parse_theme(raw)
        except (StorageError, ValidationError) as e:
            if strict:
                raise
            logger.warning(f"Using default theme: {e}")
            return DEFAULT_THEME

    def save(self, theme: Theme) -> None:
        write_document(self.path, theme.to_dict())
        logger.info(f"Saved theme to {self.path}")


class EventStore:
    """Loads the calendar events exported by the host calendar"""

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path).expanduser() if path else default_home() / EVENTS_FILENAME

    def load(self) -> List[CalendarEvent]:
        try:
            raw = read_document(self.path)
        except StorageError as e:
            logger.error(f"Ignoring unreadable events file: {e}")
            return []

        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.error(f"Events file {self.path} must contain a list")
            return []

        events = []
        for index, entry in enumerate(raw):
            try:
                events.append(parse_event(entry))
            except ValidationError as e:
                logger.warning(f"Skipping event {index}: {e}")
        return events

    def save(self, events: List[CalendarEvent]) -> None:
        write_document(self.path, [event.to_dict() for event in events])
