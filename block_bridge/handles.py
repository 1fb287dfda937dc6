"""Native render handles.

A handle is what the host's own block renderer passes to a block template:
the block name, the context the host already filtered, the attributes it
already validated and the resolved block type. It also knows the host's
convention for the wrapper element's attributes.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from django.utils.safestring import SafeString

from .specs import BlockType
from .wrapper import build_attributes

__all__ = ["NativeHandle", "NativeBlock", "block_class_name"]


def block_class_name(block_name: str) -> str:
    """Return the host's generated class for ``block_name``.

    ``core/paragraph`` becomes ``wp-block-paragraph`` and ``acme/hero-banner``
    becomes ``wp-block-acme-hero-banner``.
    """
    if block_name.startswith("core/"):
        block_name = block_name[len("core/"):]
    return "wp-block-" + block_name.replace("/", "-")


class NativeHandle(ABC):
    name: str
    context: Mapping[str, Any]
    attributes: Mapping[str, Any]
    block_type: Optional[BlockType]

    @abstractmethod
    def wrapper_attributes(self, extra_attrs: Optional[Mapping[str, Any]] = None) -> str:
        """Return the attribute string for the block's wrapper element."""
        raise NotImplementedError


@dataclass
class NativeBlock(NativeHandle):
    name: str
    context: Dict[str, Any] = field(default_factory=dict)
    attributes: Dict[str, Any] = field(default_factory=dict)
    block_type: Optional[BlockType] = None

    def wrapper_attributes(self, extra_attrs: Optional[Mapping[str, Any]] = None) -> SafeString:
        extra = dict(extra_attrs or {})
        classes = [block_class_name(self.name)]
        for source in (self.attributes.get("className"), extra.pop("class", None)):
            if source:
                classes.append(str(source).strip())
        attrs: Dict[str, Any] = {"class": " ".join(c for c in classes if c)}

        styles = []
        own_style = self.attributes.get("style")
        for source in (own_style if isinstance(own_style, str) else None, extra.pop("style", None)):
            if source:
                styles.append(str(source).strip().rstrip(";"))
        if styles:
            attrs["style"] = "; ".join(styles) + ";"

        anchor = self.attributes.get("anchor")
        if anchor and "id" not in extra:
            attrs["id"] = anchor

        attrs.update(extra)
        return build_attributes(attrs)
