from typing import List, Tuple

from block_bridge.assets import AssetLoader
from block_bridge.specs import BlockType


class RecordingLoader(AssetLoader):
    """Asset loader double that records every enqueue call in order."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str]] = []

    def enqueue_script(self, handle: str) -> None:
        self.calls.append(("script", handle))

    def enqueue_script_module(self, handle: str) -> None:
        self.calls.append(("module", handle))

    def enqueue_style(self, handle: str) -> None:
        self.calls.append(("style", handle))


def mark_processed(html: str) -> str:
    return f"{html}<!--directives-->"


def card_type(**overrides) -> BlockType:
    values = dict(
        name="demo/card",
        uses_context=("postId",),
        attributes={"title": {"type": "string", "default": "Untitled"}},
        view_script_module_ids=("demo/card/view.js",),
        style_handles=("demo/card/style.css",),
        render_template="blocks/card.html",
    )
    values.update(overrides)
    return BlockType(**values)
