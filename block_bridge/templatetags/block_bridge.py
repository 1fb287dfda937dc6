from django import template
from django.template.base import token_kwargs

from block_bridge.assets import get_asset_queue
from block_bridge.bridge import bridge
from block_bridge.handles import NativeHandle

register = template.Library()

CONTEXT_PREFIX = "ctx_"


def _native_handle(context):
    handle = context.get("block")
    return handle if isinstance(handle, NativeHandle) else None


@register.simple_tag(takes_context=True)
def bridge_block(context, block_name, template_name=None, context_data=None, attributes=None, **kwargs):
    """Render a registered block from a page template.

    ``ctx_<key>=value`` arguments go into the block context, any other keyword
    argument into the attributes.
    """
    block_context = dict(context_data or {})
    block_attributes = dict(attributes or {})
    for key, value in kwargs.items():
        if key.startswith(CONTEXT_PREFIX):
            block_context[key[len(CONTEXT_PREFIX):]] = value
        else:
            block_attributes[key] = value
    return bridge.render_block(
        block_name,
        template_name,
        block_context,
        block_attributes,
        request=context.get("request"),
    )


@register.simple_tag(takes_context=True)
def block_context(context):
    return bridge.context(_native_handle(context))


@register.simple_tag(takes_context=True)
def block_attributes(context):
    return bridge.attributes(_native_handle(context))


@register.simple_tag
def is_bridge_context():
    return bridge.is_bridge_context()


@register.simple_tag
def block_bridge_assets():
    return get_asset_queue().render()


class BlockWrapperNode(template.Node):
    def __init__(self, nodelist, extra_attrs):
        self.nodelist = nodelist
        self.extra_attrs = extra_attrs

    def render(self, context):
        html = self.nodelist.render(context)
        extra = {key: value.resolve(context) for key, value in self.extra_attrs.items()}
        return bridge.render(html, _native_handle(context), extra, request=context.get("request"))


@register.tag
def block_wrapper(parser, token):
    """Wrap the enclosed markup in the block's wrapper element.

    Usage::

        {% block_wrapper class="card" data_id=item.pk %}...{% endblock_wrapper %}

    Underscores in attribute names become dashes.
    """
    bits = token.split_contents()[1:]
    raw = token_kwargs(bits, parser)
    if bits:
        raise template.TemplateSyntaxError(f"Unexpected arguments to block_wrapper: {bits}")
    extra_attrs = {key.replace("_", "-"): value for key, value in raw.items()}
    nodelist = parser.parse(("endblock_wrapper",))
    parser.delete_first_token()
    return BlockWrapperNode(nodelist, extra_attrs)
