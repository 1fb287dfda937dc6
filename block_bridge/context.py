"""Immutable render context for a single block render cycle."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .handles import NativeHandle
from .modes import RenderMode, detect_render_mode
from .registry import BlockTypeRegistry, block_registry
from .specs import BlockType
from .validation import apply_defaults_and_cast, filter_context

__all__ = ["RenderContext"]


@dataclass(frozen=True)
class RenderContext:
    """Everything a block template may see during one render cycle.

    Built either from a native host handle (:meth:`from_native`) or from a
    page-assembly request (:meth:`from_bridge`). ``context`` and
    ``attributes`` are read-only views.
    """

    block_name: str
    mode: RenderMode
    context: Mapping[str, Any]
    attributes: Mapping[str, Any]
    block_type: Optional[BlockType] = None
    native_handle: Optional[NativeHandle] = None

    def __post_init__(self) -> None:
        if not self.block_name:
            raise ValueError("RenderContext.block_name is required")
        object.__setattr__(self, "context", MappingProxyType(dict(self.context or {})))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes or {})))

    @classmethod
    def from_native(
        cls,
        handle: NativeHandle,
        attributes: Optional[Mapping[str, Any]] = None,
        request=None,
    ) -> "RenderContext":
        # The host already filtered context and validated attributes.
        if attributes is None:
            attributes = handle.attributes
        return cls(
            block_name=handle.name,
            mode=detect_render_mode(False, request),
            context=handle.context or {},
            attributes=attributes or {},
            block_type=handle.block_type,
            native_handle=handle,
        )

    @classmethod
    def from_bridge(
        cls,
        block_name: str,
        context: Optional[Mapping[str, Any]] = None,
        attributes: Optional[Mapping[str, Any]] = None,
        registry: Optional[BlockTypeRegistry] = None,
    ) -> Optional["RenderContext"]:
        """Return a bridge context, or ``None`` when ``block_name`` is unregistered."""
        registry = registry if registry is not None else block_registry
        block_type = registry.get_registered(block_name) if block_name else None
        if block_type is None:
            return None
        return cls(
            block_name=block_name,
            mode=RenderMode.BRIDGE,
            context=filter_context(block_type.uses_context, context),
            attributes=apply_defaults_and_cast(block_type.attributes, attributes),
            block_type=block_type,
        )

    def supports_interactivity(self) -> bool:
        if self.block_type is None:
            return False
        return self.block_type.supports_interactivity

    def is_bridge(self) -> bool:
        return self.mode is RenderMode.BRIDGE

    def is_native(self) -> bool:
        return self.native_handle is not None

    def requires_directive_processing(self) -> bool:
        return self.supports_interactivity() and self.mode.requires_directive_processing()

    def requires_manual_asset_enqueue(self) -> bool:
        return self.mode.requires_manual_asset_enqueue()
