"""
Action registry for resolving a target to the action that opens it
"""

import logging
from typing import Dict, Optional, Type

from .application import ApplicationAction
from .base import BaseAction
from .url import URLAction

logger = logging.getLogger(__name__)


class ActionRegistry:
    """Registry for all available action types"""

    def __init__(self):
        self._actions: Dict[str, Type[BaseAction]] = {}
        self._instances: Dict[str, BaseAction] = {}

    def register(self, action_class: Type[BaseAction]) -> None:
        """Register an action class"""
        if not issubclass(action_class, BaseAction):
            raise TypeError(f"{action_class} must inherit from BaseAction")

        action = action_class()
        if action.action_type in self._actions:
            logger.warning(f"Overwriting existing action type: {action.action_type}")

        self._actions[action.action_type] = action_class
        self._instances[action.action_type] = action
        logger.debug(f"Registered action type: {action.action_type}")

    def get_action(self, action_type: str) -> Optional[BaseAction]:
        """Get an action instance by type"""
        return self._instances.get(action_type)

    def list_actions(self) -> list:
        """List all registered action types"""
        return list(self._actions.keys())

    def resolve(self, target: str) -> Optional[BaseAction]:
        """Return the first registered action that accepts the target"""
        for action in self._instances.values():
            if action.accepts(target):
                return action
        return None

    def dispatch(self, target: str) -> bool:
        """Open a target with the matching action"""
        action = self.resolve(target)
        if not action:
            logger.error(f"No action can open target: {target!r}")
            return False
        return action.execute(target)


def default_registry() -> ActionRegistry:
    """Registry with the built-in URL and application actions"""
    registry = ActionRegistry()
    registry.register(URLAction)
    registry.register(ApplicationAction)
    return registry
