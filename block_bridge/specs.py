from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Tuple

__all__ = ["BlockType"]


def _handles(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value if v)


@dataclass(frozen=True)
class BlockType:
    name: str
    title: str = ""
    category: Optional[str] = None
    description: str = ""
    # Context keys this block consumes from its ancestors (allow-list)
    uses_context: Sequence[str] = ()
    # Attribute schema: {name: {"type": ..., "default"?: ...}}
    attributes: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    supports: Mapping[str, Any] = field(default_factory=dict)
    # Editor + frontend scripts
    script_handles: Sequence[str] = ()
    # Frontend-only scripts
    view_script_handles: Sequence[str] = ()
    # Frontend-only ES modules
    view_script_module_ids: Sequence[str] = ()
    # Editor + frontend styles
    style_handles: Sequence[str] = ()
    # Frontend-only styles
    view_style_handles: Sequence[str] = ()
    # Django template used when a render does not name one
    render_template: Optional[str] = None

    @property
    def supports_interactivity(self) -> bool:
        """True for ``interactivity: True`` or a non-empty interactivity structure."""
        supports = self.supports
        if not isinstance(supports, Mapping):
            return False
        interactivity = supports.get("interactivity", False)
        if isinstance(interactivity, bool):
            return interactivity
        if isinstance(interactivity, (Mapping, list, tuple)):
            return bool(interactivity)
        return False

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, Any]) -> "BlockType":
        """Build a block type from ``block.json`` style metadata."""
        name = metadata.get("name")
        if not name:
            raise ValueError("Block metadata is missing 'name'")
        return cls(
            name=str(name),
            title=str(metadata.get("title") or ""),
            category=metadata.get("category"),
            description=str(metadata.get("description") or ""),
            uses_context=tuple(metadata.get("usesContext") or ()),
            attributes=dict(metadata.get("attributes") or {}),
            supports=dict(metadata.get("supports") or {}),
            script_handles=_handles(metadata.get("script")),
            view_script_handles=_handles(metadata.get("viewScript")),
            view_script_module_ids=_handles(metadata.get("viewScriptModule")),
            style_handles=_handles(metadata.get("style")),
            view_style_handles=_handles(metadata.get("viewStyle")),
            render_template=metadata.get("render"),
        )
