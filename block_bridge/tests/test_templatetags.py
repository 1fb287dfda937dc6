from django.template import Context, Template, TemplateSyntaxError
from django.template.loader import render_to_string
from django.test import RequestFactory, SimpleTestCase

from block_bridge.assets import get_asset_queue, reset_asset_queue
from block_bridge.handles import NativeBlock
from block_bridge.registry import block_registry

from .utils import card_type


class TemplateTagTests(SimpleTestCase):
    def setUp(self):
        reset_asset_queue()
        block_registry.register(card_type())

    def tearDown(self):
        block_registry.unregister("demo/card")
        reset_asset_queue()

    def test_bridge_block_tag(self):
        html = render_to_string("pages/page.html")
        markup, assets = html.split("|", 1)
        self.assertEqual(markup, "<h2>Hello</h2><p>5</p>")
        self.assertIn('<link rel="stylesheet" href="/static/demo/card/style.css">', assets)
        self.assertIn('<script type="module" src="/static/demo/card/view.js"></script>', assets)

    def test_bridge_block_tag_for_unregistered_block(self):
        html = Template("{% load block_bridge %}[{% bridge_block 'demo/missing' %}]").render(Context())
        self.assertEqual(html, "[]")
        self.assertFalse(get_asset_queue())

    def test_block_wrapper_in_bridged_template(self):
        html = Template(
            "{% load block_bridge %}{% bridge_block 'demo/card' 'blocks/wrapped.html' title='Deal' %}"
        ).render(Context())
        self.assertEqual(html, '<div class="card"><span>Deal</span></div>')

    def test_block_wrapper_with_native_handle(self):
        handle = NativeBlock(name="demo/card", attributes={"title": "Native"}, block_type=card_type())
        request = RequestFactory().get("/")
        html = render_to_string("native/card.html", {"block": handle}, request=request)
        self.assertEqual(html, '<div class="wp-block-demo-card">Native</div>')

    def test_block_wrapper_without_context_is_transparent(self):
        html = Template("{% load block_bridge %}{% block_wrapper %}<b>x</b>{% endblock_wrapper %}").render(Context())
        self.assertEqual(html, "<b>x</b>")

    def test_block_wrapper_rejects_positional_arguments(self):
        with self.assertRaises(TemplateSyntaxError):
            Template("{% load block_bridge %}{% block_wrapper 'x' %}{% endblock_wrapper %}")

    def test_block_wrapper_attribute_names(self):
        handle = NativeBlock(name="demo/card", block_type=card_type())
        html = Template(
            "{% load block_bridge %}{% block_wrapper data_id=5 %}{% endblock_wrapper %}"
        ).render(Context({"block": handle}))
        self.assertEqual(html, '<div class="wp-block-demo-card" data-id="5"></div>')

    def test_is_bridge_context_tag(self):
        outside = Template("{% load block_bridge %}{% is_bridge_context %}").render(Context())
        self.assertEqual(outside, "False")
