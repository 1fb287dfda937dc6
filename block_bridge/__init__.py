"""Block Bridge reusable application."""

from .apps import BlockBridgeConfig
from .conf import settings

__all__ = ["settings", "BlockBridgeConfig"]
