"""
Ordering policies for visible items.

Every policy returns a new list; the stored configuration order is never
modified, so switching back to ``manual`` always restores it.
"""

import logging
from typing import Iterable, List, Mapping, Optional

from ..config.models import Item, SortPolicy

logger = logging.getLogger(__name__)


def _alphabetical_key(item: Item):
    # Case-insensitive first, then lowercase before uppercase
    return (item.name.casefold(), item.name.swapcase())


def sort_items(
    items: Iterable[Item],
    policy: SortPolicy,
    usage: Optional[Mapping[str, int]] = None,
) -> List[Item]:
    """
    Order items under the given policy.

    Args:
        items: Items in stored order
        policy: Sort policy to apply
        usage: Activation counts by item name (only used by ``usage``)

    Returns:
        New list. Ties keep stored order under every policy.
    """
    ordered = list(items)
    usage = usage or {}

    if policy == SortPolicy.MANUAL:
        return ordered
    if policy == SortPolicy.ALPHABETICAL:
        return sorted(ordered, key=_alphabetical_key)
    if policy == SortPolicy.USAGE:
        return sorted(ordered, key=lambda item: -usage.get(item.name, 0))

    logger.warning(f"Unknown sort policy {policy!r}, keeping stored order")
    return ordered
