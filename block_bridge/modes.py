"""Render modes and detection of the mode that applies to a request."""
from __future__ import annotations

from enum import Enum

from django.core.exceptions import SuspiciousOperation
from django.http import UnreadablePostError
from django.http.multipartparser import MultiPartParserError

from .conf import settings
from .requests import get_current_request

__all__ = [
    "RenderMode",
    "detect_render_mode",
    "is_editor_context",
    "is_block_renderer_context",
]


class RenderMode(Enum):
    """Environment a block is being rendered in."""

    # Rendered by the host's own block renderer; it processes directives itself.
    NATIVE = "native"
    # Rendered by a page-assembly embedding through ``render_block``.
    BRIDGE = "bridge"
    # Server-side preview endpoint used by the editor.
    REST_PREVIEW = "rest_preview"
    # Editor request carrying the edit signal.
    EDITOR_PREVIEW = "editor_preview"

    def requires_directive_processing(self) -> bool:
        """Whether markup produced in this mode needs an explicit directive pass."""
        if self is RenderMode.NATIVE:
            return False
        if self in (RenderMode.BRIDGE, RenderMode.REST_PREVIEW, RenderMode.EDITOR_PREVIEW):
            return True
        raise ValueError(f"Unhandled render mode: {self!r}")

    def requires_manual_asset_enqueue(self) -> bool:
        """Whether assets must be enqueued explicitly in this mode."""
        if self is RenderMode.BRIDGE:
            return True
        if self in (RenderMode.NATIVE, RenderMode.REST_PREVIEW, RenderMode.EDITOR_PREVIEW):
            return False
        raise ValueError(f"Unhandled render mode: {self!r}")


def _request_param(request, name: str):
    for source in ("GET", "POST"):
        try:
            params = getattr(request, source, None)
        except (MultiPartParserError, SuspiciousOperation, UnreadablePostError):
            # Malformed or oversized bodies carry no mode signal.
            continue
        if params is None:
            continue
        value = params.get(name)
        if value is not None:
            return value
    return None


def is_editor_context(request=None) -> bool:
    """Return ``True`` when the request carries the editor edit signal."""

    request = request if request is not None else get_current_request()
    if request is None:
        return False
    value = _request_param(request, settings.BLOCK_BRIDGE_EDIT_PARAM)
    return value == settings.BLOCK_BRIDGE_EDIT_VALUE


def is_block_renderer_context(request=None) -> bool:
    """Return ``True`` when the request targets the block preview endpoint."""

    request = request if request is not None else get_current_request()
    if request is None:
        return False
    fragment = settings.BLOCK_BRIDGE_PREVIEW_PATH
    path = getattr(request, "path", "") or ""
    return bool(fragment) and fragment in path


def detect_render_mode(explicit_bridge: bool = False, request=None) -> RenderMode:
    """Pick the render mode from the bridge flag and the ambient request."""

    if explicit_bridge:
        return RenderMode.BRIDGE
    if is_editor_context(request):
        return RenderMode.EDITOR_PREVIEW
    if is_block_renderer_context(request):
        return RenderMode.REST_PREVIEW
    return RenderMode.NATIVE
