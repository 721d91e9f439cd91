"""
Managers for zenwidget state that outlives a single render
"""

from .interaction import InteractionBridge, activation_url, parse_activation_url
from .usage import UsageStore

__all__ = [
    "UsageStore",
    "InteractionBridge",
    "activation_url",
    "parse_activation_url",
]
