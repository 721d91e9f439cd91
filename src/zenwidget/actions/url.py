"""
URL opening action
"""

import subprocess
import logging
from .base import BaseAction

logger = logging.getLogger(__name__)


class URLAction(BaseAction):
    """Open URL-scheme targets with the desktop's default handler"""

    action_type = "url"

    def execute(self, target: str) -> bool:
        """Open a URL"""
        if not target:
            logger.error("URL action requires a target")
            return False

        logger.info(f"Opening URL: {target}")
        try:
            # Use xdg-open for cross-desktop compatibility
            subprocess.Popen(["xdg-open", target])
            return True
        except Exception as e:
            logger.error(f"Failed to open URL: {e}")
            return False

    def accepts(self, target: str) -> bool:
        return "://" in target
