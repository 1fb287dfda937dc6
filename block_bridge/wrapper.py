"""Wrapper markup for rendered block content."""
from __future__ import annotations

from typing import Any, Mapping, Optional

from django.utils.html import escape
from django.utils.safestring import SafeString, mark_safe

from .conf import settings

__all__ = ["build_attributes", "wrap_html"]


def build_attributes(attrs: Optional[Mapping[str, Any]]) -> SafeString:
    """Serialise ``attrs`` into an HTML attribute string.

    ``True`` emits the bare attribute name, ``False`` and ``None`` omit the
    attribute, anything else becomes ``name="escaped value"``.
    """
    parts = []
    for name, value in (attrs or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            if value:
                parts.append(escape(name))
            continue
        parts.append(f'{escape(name)}="{escape(str(value))}"')
    return mark_safe(" ".join(parts))


def wrap_html(html: str, ctx, extra_attrs: Optional[Mapping[str, Any]] = None) -> SafeString:
    """Wrap ``html`` in a ``<div>`` carrying the block's wrapper attributes.

    Native renders defer to the host handle's wrapper convention; every other
    render builds the attribute string directly. Attributes whose value is
    ``None`` are left out rather than rendered as ``name=""``, so callers can
    pass optional values without checking them first.
    """
    attrs = dict(extra_attrs or {})
    if ctx.supports_interactivity():
        attrs[settings.BLOCK_BRIDGE_INTERACTIVE_ATTRIBUTE] = ctx.block_name

    if ctx.is_native():
        wrapper_attrs = ctx.native_handle.wrapper_attributes(attrs)
    else:
        wrapper_attrs = build_attributes(attrs)

    return mark_safe(f"<div {wrapper_attrs}>{html}</div>")
