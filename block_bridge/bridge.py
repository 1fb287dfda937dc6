"""Render blocks outside the host's native block renderer.

:class:`BlockBridge` lets page-assembly views and templates render a
registered block through its template, with the same context allow-list,
attribute validation, assets and directive processing the block gets when
the host renders it natively. Templates read their data through
:meth:`BlockBridge.context` / :meth:`BlockBridge.attributes` and wrap their
markup with :meth:`BlockBridge.render`, without branching on the render mode.

Only one bridged render may be active per execution context. A template that
calls :meth:`BlockBridge.render_block` while another bridged render is in
progress raises :class:`NestedBridgeRenderError`.
"""
from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any, Callable, Dict, Mapping, Optional, Union

from django.apps import apps
from django.template import Context, RequestContext, Template, TemplateDoesNotExist, loader as template_loader
from django.utils.safestring import SafeString, mark_safe

from .assets import AssetLoader, enqueue_frontend_assets, get_asset_queue
from .conf import settings
from .context import RenderContext
from .directives import process_directives
from .handles import NativeHandle
from .modes import is_editor_context
from .registry import BlockTypeRegistry, block_registry
from .wrapper import wrap_html

log = logging.getLogger(__name__)

__all__ = [
    "BlockBridge",
    "NestedBridgeRenderError",
    "bridge",
    "render_block",
    "get_context",
    "get_attributes",
    "render",
    "is_bridge_context",
    "get_post_id",
    "get_preview_example_post",
]


class NestedBridgeRenderError(RuntimeError):
    """Raised when ``render_block`` is entered while a bridged render is active."""


TemplateRef = Union[str, Callable[[RenderContext], str], Any, None]

# The render context of the bridged render in progress, if any.
_active_context: ContextVar[Optional[RenderContext]] = ContextVar(
    "block_bridge_active_context", default=None
)


class BlockBridge:
    """Orchestrates bridged block renders and the accessors templates use."""

    def __init__(
        self,
        registry: Optional[BlockTypeRegistry] = None,
        loader: Optional[AssetLoader] = None,
    ) -> None:
        self._registry = registry
        self._loader = loader

    @property
    def registry(self) -> BlockTypeRegistry:
        return self._registry if self._registry is not None else block_registry

    @property
    def loader(self) -> AssetLoader:
        return self._loader if self._loader is not None else get_asset_queue()

    # ------------------------------------------------------------------
    # Render cycle
    # ------------------------------------------------------------------

    def _resolve_template(self, template: TemplateRef, ctx: RenderContext):
        """Return a ``RenderContext -> str`` callable, or ``None`` if unresolvable."""
        if template is None and ctx.block_type is not None:
            template = ctx.block_type.render_template
        if template is None or template == "":
            return None

        if isinstance(template, str):
            try:
                template = template_loader.get_template(template)
            except TemplateDoesNotExist:
                return None

        if isinstance(template, Template):
            engine_template = template

            def invoke(render_ctx: RenderContext, request=None) -> str:
                values = self._template_context(render_ctx)
                if request is not None:
                    return engine_template.render(RequestContext(request, values))
                return engine_template.render(Context(values))

            return invoke

        if hasattr(template, "render"):
            django_template = template

            def invoke(render_ctx: RenderContext, request=None) -> str:
                return django_template.render(self._template_context(render_ctx), request)

            return invoke

        if callable(template):
            return lambda render_ctx, request=None: template(render_ctx)
        return None

    @staticmethod
    def _template_context(ctx: RenderContext) -> Dict[str, Any]:
        return {
            "block_name": ctx.block_name,
            "block_context": dict(ctx.context),
            "attributes": dict(ctx.attributes),
            "render_context": ctx,
            "is_bridge": ctx.is_bridge(),
        }

    def render_block(
        self,
        block_name: str,
        template: TemplateRef = None,
        context: Optional[Mapping[str, Any]] = None,
        attributes: Optional[Mapping[str, Any]] = None,
        request=None,
    ) -> SafeString:
        """Render ``block_name`` through ``template`` and return the markup.

        ``template`` is a Django template name or object, or a callable taking
        the :class:`RenderContext`; when omitted the block type's
        ``render_template`` is used. Unregistered blocks and unresolvable
        templates render nothing. Output of a template that raises is
        discarded and the exception propagates.
        """
        ctx = RenderContext.from_bridge(block_name, context, attributes, registry=self.registry)
        if ctx is None:
            log.debug("Skipping bridged render of unregistered block %s", block_name)
            return mark_safe("")

        invoke = self._resolve_template(template, ctx)
        if invoke is None:
            log.debug("Skipping bridged render of %s: template %r not found", block_name, template)
            return mark_safe("")

        active = _active_context.get()
        if active is not None:
            raise NestedBridgeRenderError(
                f"Cannot render {block_name} while {active.block_name} is being rendered"
            )

        enqueue_frontend_assets(ctx.block_type, self.loader)

        token = _active_context.set(ctx)
        try:
            html = str(invoke(ctx, request))
            if ctx.requires_directive_processing():
                html = process_directives(html)
        finally:
            _active_context.reset(token)
        return mark_safe(html)

    # ------------------------------------------------------------------
    # Template accessors
    # ------------------------------------------------------------------

    def active_context(self) -> Optional[RenderContext]:
        return _active_context.get()

    def is_bridge_context(self) -> bool:
        ctx = _active_context.get()
        return ctx is not None and ctx.is_bridge()

    def context(self, native_handle: Optional[NativeHandle] = None) -> Dict[str, Any]:
        ctx = _active_context.get()
        if ctx is not None:
            return dict(ctx.context)
        if native_handle is not None:
            return dict(native_handle.context or {})
        return {}

    def attributes(self, native_handle: Optional[NativeHandle] = None) -> Dict[str, Any]:
        ctx = _active_context.get()
        if ctx is not None:
            return dict(ctx.attributes)
        if native_handle is not None:
            return dict(native_handle.attributes or {})
        return {}

    def render(
        self,
        html: str,
        native_handle: Optional[NativeHandle] = None,
        extra_attrs: Optional[Mapping[str, Any]] = None,
        request=None,
    ) -> str:
        """Wrap ``html`` for the effective render context.

        Returns ``html`` unchanged when neither a bridged render is active nor
        a native handle is given.
        """
        ctx = _active_context.get()
        if ctx is None and native_handle is not None:
            ctx = RenderContext.from_native(native_handle, request=request)
        if ctx is None:
            return html

        output = wrap_html(html, ctx, extra_attrs)
        if ctx.requires_directive_processing():
            output = mark_safe(process_directives(output))
        return output

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def get_post_id(
        use_block_context: bool = True,
        block_context: Optional[Mapping[str, Any]] = None,
        attributes: Optional[Mapping[str, Any]] = None,
        default: Optional[int] = None,
    ) -> Optional[int]:
        """Resolve ``postId`` from block context or attributes, else ``default``."""
        source = block_context if use_block_context else attributes
        value = (source or {}).get("postId")
        if value is None:
            value = default
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def get_preview_example_post(self, content_type, request=None):
        """Return the pk of the newest published item for editor previews.

        ``content_type`` is a model label (``"app_label.ModelName"``) or a
        model class. Outside editor previews, and when nothing matches, the
        result is ``None``.
        """
        if not is_editor_context(request):
            return None

        model = content_type
        if isinstance(content_type, str):
            try:
                model = apps.get_model(content_type)
            except (LookupError, ValueError):
                log.warning("Unknown preview content type %r", content_type)
                return None

        qs = model._default_manager.filter(**dict(settings.BLOCK_BRIDGE_PREVIEW_FILTER or {}))
        ordering = settings.BLOCK_BRIDGE_PREVIEW_ORDERING or ("-pk",)
        if isinstance(ordering, str):
            ordering = (ordering,)
        return qs.order_by(*ordering).values_list("pk", flat=True).first()


bridge = BlockBridge()


def render_block(block_name, template=None, context=None, attributes=None, request=None):
    return bridge.render_block(block_name, template, context, attributes, request=request)


def get_context(native_handle=None):
    return bridge.context(native_handle)


def get_attributes(native_handle=None):
    return bridge.attributes(native_handle)


def render(html, native_handle=None, extra_attrs=None, request=None):
    return bridge.render(html, native_handle, extra_attrs, request=request)


def is_bridge_context() -> bool:
    return bridge.is_bridge_context()


get_post_id = BlockBridge.get_post_id


def get_preview_example_post(content_type, request=None):
    return bridge.get_preview_example_post(content_type, request=request)
