"""Front-end asset queueing for bridged block renders.

Block types name their scripts, ES modules and styles by handle. Rendering a
block through the bridge enqueues those handles on the request's
:class:`AssetQueue`; the ``{% block_bridge_assets %}`` tag prints them once.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from contextvars import ContextVar
from typing import List, Optional

from django.templatetags.static import static
from django.utils.html import format_html_join
from django.utils.safestring import SafeString, mark_safe

from .specs import BlockType

__all__ = [
    "AssetLoader",
    "AssetQueue",
    "get_asset_queue",
    "start_asset_queue",
    "reset_asset_queue",
    "enqueue_frontend_assets",
    "enqueue_editor_assets",
]


class AssetLoader(ABC):
    """Idempotent enqueue-by-handle operations."""

    @abstractmethod
    def enqueue_script(self, handle: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def enqueue_script_module(self, handle: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def enqueue_style(self, handle: str) -> None:
        raise NotImplementedError


def _asset_url(handle: str) -> str:
    if handle.startswith(("/", "http://", "https://")):
        return handle
    return static(handle)


class AssetQueue(AssetLoader):
    """Ordered, de-duplicated asset handles for one request."""

    def __init__(self) -> None:
        self.scripts: List[str] = []
        self.script_modules: List[str] = []
        self.styles: List[str] = []

    @staticmethod
    def _add(bucket: List[str], handle: str) -> None:
        if handle and handle not in bucket:
            bucket.append(handle)

    def enqueue_script(self, handle: str) -> None:
        self._add(self.scripts, handle)

    def enqueue_script_module(self, handle: str) -> None:
        self._add(self.script_modules, handle)

    def enqueue_style(self, handle: str) -> None:
        self._add(self.styles, handle)

    def __bool__(self) -> bool:
        return bool(self.scripts or self.script_modules or self.styles)

    def render_styles(self) -> SafeString:
        return format_html_join(
            "\n", '<link rel="stylesheet" href="{}">', ((_asset_url(h),) for h in self.styles)
        )

    def render_scripts(self) -> SafeString:
        modules = format_html_join(
            "\n", '<script type="module" src="{}"></script>', ((_asset_url(h),) for h in self.script_modules)
        )
        classic = format_html_join(
            "\n", '<script src="{}"></script>', ((_asset_url(h),) for h in self.scripts)
        )
        return mark_safe("\n".join(part for part in (modules, classic) if part))

    def render(self) -> SafeString:
        return mark_safe("\n".join(p for p in (self.render_styles(), self.render_scripts()) if p))


_queue_var: ContextVar[Optional[AssetQueue]] = ContextVar("block_bridge_assets", default=None)


def get_asset_queue() -> AssetQueue:
    """Return the asset queue for the current context, creating it on first use.

    Inside a request the middleware installs a fresh queue and drops it
    afterwards. Code running outside a request (management commands, worker
    threads) must call :func:`start_asset_queue` before rendering and
    :func:`reset_asset_queue` when done, or handles keep accumulating in the
    lazily created queue across renders.
    """

    queue = _queue_var.get()
    if queue is None:
        queue = AssetQueue()
        _queue_var.set(queue)
    return queue


def start_asset_queue() -> AssetQueue:
    """Install a fresh, empty asset queue for the current context."""

    queue = AssetQueue()
    _queue_var.set(queue)
    return queue


def reset_asset_queue() -> None:
    """Drop queued assets; the next :func:`get_asset_queue` starts empty."""

    _queue_var.set(None)


def enqueue_frontend_assets(block_type: BlockType, loader: Optional[AssetLoader] = None) -> None:
    """Enqueue a block type's front-end modules, scripts and styles."""

    loader = loader if loader is not None else get_asset_queue()
    for module_id in block_type.view_script_module_ids or ():
        loader.enqueue_script_module(module_id)
    for handle in block_type.view_script_handles or ():
        loader.enqueue_script(handle)
    for handle in block_type.style_handles or ():
        loader.enqueue_style(handle)
    for handle in block_type.view_style_handles or ():
        loader.enqueue_style(handle)


def enqueue_editor_assets(block_type: BlockType, loader: Optional[AssetLoader] = None) -> None:
    """Enqueue the front-end assets plus the editor and front-end scripts."""

    loader = loader if loader is not None else get_asset_queue()
    enqueue_frontend_assets(block_type, loader)
    for handle in block_type.script_handles or ():
        loader.enqueue_script(handle)
