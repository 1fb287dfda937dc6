from dataclasses import FrozenInstanceError

from django.test import RequestFactory, SimpleTestCase

from block_bridge.context import RenderContext
from block_bridge.handles import NativeBlock
from block_bridge.modes import RenderMode
from block_bridge.registry import Registry
from block_bridge.validation import apply_defaults_and_cast

from .utils import card_type


class BridgeContextTests(SimpleTestCase):
    def setUp(self):
        self.registry = Registry()
        self.registry.register(card_type())

    def test_context_and_attributes_are_validated(self):
        ctx = RenderContext.from_bridge(
            "demo/card", {"postId": 7, "extra": "x"}, {}, registry=self.registry
        )
        self.assertEqual(dict(ctx.context), {"postId": 7})
        self.assertEqual(dict(ctx.attributes), {"title": "Untitled"})
        self.assertIs(ctx.mode, RenderMode.BRIDGE)
        self.assertIsNone(ctx.native_handle)
        self.assertTrue(ctx.is_bridge())
        self.assertFalse(ctx.is_native())
        self.assertTrue(ctx.requires_manual_asset_enqueue())

    def test_no_directive_pass_without_interactivity(self):
        ctx = RenderContext.from_bridge("demo/card", registry=self.registry)
        self.assertFalse(ctx.supports_interactivity())
        self.assertFalse(ctx.requires_directive_processing())

    def test_directive_pass_with_interactivity(self):
        self.registry.unregister("demo/card")
        self.registry.register(card_type(supports={"interactivity": True}))
        ctx = RenderContext.from_bridge("demo/card", registry=self.registry)
        self.assertTrue(ctx.requires_directive_processing())

    def test_unregistered_block(self):
        self.assertIsNone(RenderContext.from_bridge("demo/missing", registry=self.registry))
        self.assertIsNone(RenderContext.from_bridge("", registry=self.registry))

    def test_context_is_immutable(self):
        ctx = RenderContext.from_bridge("demo/card", {"postId": 1}, registry=self.registry)
        with self.assertRaises(TypeError):
            ctx.context["postId"] = 2
        with self.assertRaises(FrozenInstanceError):
            ctx.mode = RenderMode.NATIVE

    def test_caller_mapping_is_copied(self):
        raw = {"postId": 1}
        ctx = RenderContext.from_bridge("demo/card", raw, registry=self.registry)
        raw["postId"] = 2
        self.assertEqual(ctx.context["postId"], 1)


class NativeContextTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()
        self.handle = NativeBlock(
            name="demo/card",
            context={"postId": 3, "hostOnly": True},
            attributes={"title": 42},
            block_type=card_type(supports={"interactivity": True}),
        )

    def test_uses_handle_data_as_is(self):
        ctx = RenderContext.from_native(self.handle)
        self.assertEqual(dict(ctx.context), {"postId": 3, "hostOnly": True})
        self.assertEqual(dict(ctx.attributes), {"title": 42})
        self.assertIs(ctx.native_handle, self.handle)
        self.assertTrue(ctx.is_native())
        self.assertFalse(ctx.is_bridge())

    def test_mode_follows_request(self):
        native = RenderContext.from_native(self.handle, request=self.factory.get("/"))
        editor = RenderContext.from_native(self.handle, request=self.factory.get("/", {"context": "edit"}))
        rest = RenderContext.from_native(self.handle, request=self.factory.get("/api/block-renderer/demo/"))
        self.assertIs(native.mode, RenderMode.NATIVE)
        self.assertIs(editor.mode, RenderMode.EDITOR_PREVIEW)
        self.assertIs(rest.mode, RenderMode.REST_PREVIEW)
        self.assertFalse(native.requires_directive_processing())
        self.assertTrue(editor.requires_directive_processing())
        self.assertTrue(rest.requires_directive_processing())
        self.assertTrue(editor.is_native())

    def test_explicit_attributes_override_handle(self):
        ctx = RenderContext.from_native(self.handle, {"title": "Given"})
        self.assertEqual(dict(ctx.attributes), {"title": "Given"})


class CastParityTests(SimpleTestCase):
    def test_bridge_and_direct_validation_agree(self):
        schema = {
            "title": {"type": "string"},
            "size": {"type": "number", "default": 1},
            "tags": {"type": "array"},
        }
        registry = Registry()
        registry.register(card_type(attributes=schema))
        raw = {"title": 5, "size": "2.5", "tags": "oops", "junk": 1}
        ctx = RenderContext.from_bridge("demo/card", attributes=raw, registry=registry)
        self.assertEqual(dict(ctx.attributes), apply_defaults_and_cast(schema, raw))
        self.assertEqual(dict(ctx.attributes), {"title": "5", "size": 2.5, "tags": []})
