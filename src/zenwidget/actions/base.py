"""
Base action class for dispatching an activated item's target
"""

import logging
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class BaseAction(ABC):
    """
    Base class for all dispatch actions.

    An action opens an item's target outside the widget (a URL scheme in
    the default handler, a desktop application, ...). Dispatch is
    fire-and-forget: an action starts the external process and returns.

    Class Attributes:
        action_type: Unique identifier for this action (e.g., "url")

    Example:
        >>> class EchoAction(BaseAction):
        ...     action_type = "echo"
        ...
        ...     def execute(self, target):
        ...         print(target)
        ...         return True
    """

    # Action type identifier (must be unique)
    action_type: str = None

    def __init__(self):
        """
        Initialize the action.

        Raises:
            ValueError: If action_type is not defined
        """
        if not self.action_type:
            raise ValueError(f"{self.__class__.__name__} must define action_type")

    @abstractmethod
    def execute(self, target: str) -> bool:
        """
        Open the target

        Args:
            target: Opaque target reference from the item

        Returns:
            True if the external handler was started, False otherwise
        """
        pass

    def accepts(self, target: str) -> bool:
        """
        Whether this action can open the target

        Override this to claim targets during registry resolution
        """
        return False
