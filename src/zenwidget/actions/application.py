"""
Application launcher action
"""

import subprocess
import logging
from .base import BaseAction

logger = logging.getLogger(__name__)


class ApplicationAction(BaseAction):
    """Launch desktop applications by id"""

    action_type = "application"

    def execute(self, target: str) -> bool:
        """Launch an application"""
        if not target:
            logger.error("Application action requires a target")
            return False

        logger.info(f"Launching application: {target}")

        # gtk-launch resolves desktop application ids
        try:
            subprocess.Popen(
                ["gtk-launch", target],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL
            )
            return True
        except Exception as e:
            logger.debug(f"gtk-launch failed for {target}: {e}")

        # Fallback to direct execution
        try:
            subprocess.Popen([target])
            return True
        except Exception as e:
            logger.error(f"Failed to launch application: {e}")
            return False

    def accepts(self, target: str) -> bool:
        return bool(target) and "://" not in target
