"""Runtime access to Block Bridge configuration defaults."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from django.conf import settings as django_settings

__all__ = ["settings", "BlockBridgeSettings"]


@dataclass
class BlockBridgeSettings:
    """Proxy object exposing Django settings with sensible fallbacks."""

    defaults: dict[str, Any]

    def __getattr__(self, attr: str) -> Any:
        if attr in self.defaults:
            return getattr(django_settings, attr, self.defaults[attr])
        return getattr(django_settings, attr)


settings = BlockBridgeSettings(
    defaults={
        "BLOCKS": [],
        "BLOCK_BRIDGE_EDIT_PARAM": "context",
        "BLOCK_BRIDGE_EDIT_VALUE": "edit",
        "BLOCK_BRIDGE_PREVIEW_PATH": "/block-renderer/",
        "BLOCK_BRIDGE_INTERACTIVE_ATTRIBUTE": "data-wp-interactive",
        "BLOCK_BRIDGE_DIRECTIVE_PROCESSOR": "block_bridge.directives.passthrough",
        "BLOCK_BRIDGE_PREVIEW_FILTER": {},
        "BLOCK_BRIDGE_PREVIEW_ORDERING": ("-pk",),
    }
)
