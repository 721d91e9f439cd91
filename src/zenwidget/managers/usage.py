"""
Persisted activation counts.

Counts are keyed by item name. Every increment is a full
read-modify-write of the stats file so that each activation survives a
crash right after it. Concurrent writers are not coordinated: the last
write wins.
"""

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from ..config.loader import USAGE_FILENAME, default_home, read_document, write_document
from ..utils.errors import StorageError

logger = logging.getLogger(__name__)


class UsageStore:
    """Loads, saves and increments the name -> count map"""

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path).expanduser() if path else default_home() / USAGE_FILENAME

    def load(self) -> Dict[str, int]:
        """
        Load usage counts.

        Returns:
            Mapping of item name to a non-negative count. Missing or
            unreadable files give an empty mapping; malformed entries are
            dropped.
        """
        try:
            raw = read_document(self.path)
        except StorageError as e:
            logger.error(f"Ignoring unreadable usage stats: {e}")
            return {}

        if raw is None:
            return {}
        if not isinstance(raw, dict):
            logger.error(f"Usage stats in {self.path} must be an object")
            return {}

        counts: Dict[str, int] = {}
        for name, count in raw.items():
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                logger.warning(f"Dropping invalid usage count for '{name}': {count!r}")
                continue
            counts[str(name)] = count
        return counts

    def save(self, counts: Dict[str, int]) -> None:
        write_document(self.path, counts, indent=None)

    def increment(self, name: str) -> int:
        """
        Add one activation for ``name`` and persist immediately.

        Returns:
            The new count
        """
        counts = self.load()
        counts[name] = counts.get(name, 0) + 1
        self.save(counts)
        logger.debug(f"Usage for '{name}' is now {counts[name]}")
        return counts[name]

    def reset(self, name: Optional[str] = None) -> None:
        """Clear one item's count, or every count when no name is given."""
        if name is None:
            self.save({})
            return
        counts = self.load()
        if counts.pop(name, None) is not None:
            self.save(counts)
