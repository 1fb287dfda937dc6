"""Loading of the directive post-processor.

The processor activates interactivity directives in rendered markup. It is a
pure ``str -> str`` callable named by the ``BLOCK_BRIDGE_DIRECTIVE_PROCESSOR``
setting.
"""
from __future__ import annotations

from typing import Callable

from django.utils.module_loading import import_string

from .conf import settings

__all__ = ["get_directive_processor", "process_directives", "passthrough"]


def passthrough(html: str) -> str:
    return html


def get_directive_processor() -> Callable[[str], str]:
    processor = settings.BLOCK_BRIDGE_DIRECTIVE_PROCESSOR
    if callable(processor):
        return processor
    return import_string(processor)


def process_directives(html: str) -> str:
    return get_directive_processor()(html)
