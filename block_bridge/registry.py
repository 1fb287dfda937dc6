from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional
import logging

from .specs import BlockType

log = logging.getLogger(__name__)


class BlockTypeRegistry(ABC):
    """Looks up block type descriptors by name."""

    @abstractmethod
    def get_registered(self, name: str) -> Optional[BlockType]:
        raise NotImplementedError


class Registry(BlockTypeRegistry):
    """In-process registry of block types keyed by name."""

    def __init__(self) -> None:
        self._block_types: Dict[str, BlockType] = {}

    def register(self, block_type: BlockType) -> BlockType:
        if not block_type.name:
            raise ValueError("BlockType.name is required")
        if block_type.name in self._block_types:
            raise ValueError(f"Duplicate block type: {block_type.name}")
        self._block_types[block_type.name] = block_type
        log.debug("Registered block type %s", block_type.name)
        return block_type

    def register_metadata(self, metadata: Mapping[str, Any]) -> BlockType:
        return self.register(BlockType.from_metadata(metadata))

    def unregister(self, name: str) -> Optional[BlockType]:
        return self._block_types.pop(name, None)

    def get_registered(self, name: str) -> Optional[BlockType]:
        return self._block_types.get(name)

    def is_registered(self, name: str) -> bool:
        return name in self._block_types

    def all(self) -> Dict[str, BlockType]:
        return dict(self._block_types)

    def clear(self) -> None:
        self._block_types.clear()


block_registry = Registry()


def register(block_type: BlockType) -> BlockType:
    return block_registry.register(block_type)


def get_registry() -> Dict[str, BlockType]:
    return block_registry.all()
