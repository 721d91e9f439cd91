"""
Activation handling.

Each placed item carries a callback URL of the form
``zenwidget://activate?item=<name>&target=<target>``. Opening it records
the activation in the usage store and then dispatches the target.
"""

import logging
from typing import Optional, Tuple
from urllib.parse import parse_qs, urlencode, urlsplit

from ..actions.registry import ActionRegistry, default_registry
from ..config.loader import ConfigStore
from ..utils.errors import StorageError, ValidationError
from .usage import UsageStore

logger = logging.getLogger(__name__)

CALLBACK_SCHEME = "zenwidget"
CALLBACK_HOST = "activate"


def activation_url(name: str, target: str) -> str:
    """Build the callback URL a rendered item opens when tapped."""
    query = urlencode({"item": name, "target": target})
    return f"{CALLBACK_SCHEME}://{CALLBACK_HOST}?{query}"


def parse_activation_url(url: str) -> Tuple[str, Optional[str]]:
    """
    Decode a callback URL.

    Returns:
        (item name, target); target is None when the callback omits it

    Raises:
        ValidationError: If the URL is not an activation callback or has no item name
    """
    parts = urlsplit(url)
    if parts.scheme != CALLBACK_SCHEME or parts.netloc != CALLBACK_HOST:
        raise ValidationError(f"Not an activation callback: {url!r}")

    query = parse_qs(parts.query)
    names = query.get("item")
    if not names or not names[0]:
        raise ValidationError(f"Activation callback has no item name: {url!r}")

    targets = query.get("target")
    return names[0], targets[0] if targets else None


class InteractionBridge:
    """
    Records an activation, then opens the item's target.

    The count is persisted before dispatch so it survives a failed
    dispatch or the process exiting right after. Increments go through a
    single read-modify-write on the usage store; concurrent processes are
    not coordinated.

    Attributes:
        usage_store: Where activation counts are persisted
        registry: Resolves targets to dispatch actions
        config_store: Used to look up a target when the callback omits it
    """

    def __init__(
        self,
        usage_store: UsageStore,
        registry: Optional[ActionRegistry] = None,
        config_store: Optional[ConfigStore] = None,
    ):
        self.usage_store = usage_store
        self.registry = registry or default_registry()
        self.config_store = config_store

    def on_activate(self, name: str, target: Optional[str] = None) -> bool:
        """
        Handle an item activation.

        Args:
            name: Item name (usage key)
            target: Target to open; looked up in the configuration if omitted

        Returns:
            True if the target was dispatched. The usage count is
            incremented either way; a count that cannot be written is
            logged and the target is still opened.
        """
        try:
            count = self.usage_store.increment(name)
            logger.info(f"Activated '{name}' (count {count})")
        except StorageError as e:
            logger.error(f"Could not record activation of '{name}': {e}")

        if not target:
            target = self._lookup_target(name)
        if not target:
            logger.error(f"No target known for item '{name}'")
            return False

        try:
            return self.registry.dispatch(target)
        except Exception as e:
            logger.error(f"Dispatch of '{name}' to {target!r} failed: {e}", exc_info=True)
            return False

    def handle_callback(self, url: str) -> bool:
        """Decode a callback URL and activate the item it names."""
        name, target = parse_activation_url(url)
        return self.on_activate(name, target)

    def _lookup_target(self, name: str) -> Optional[str]:
        if self.config_store is None:
            return None
        item = self.config_store.load().find(name)
        return item.target if item else None
