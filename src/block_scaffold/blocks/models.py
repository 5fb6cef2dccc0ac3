"""Block descriptor and clone context models.

A block list is a tree of two kinds of entries: ``Block`` leaves that can be
cloned into a project, and ``BlockDir`` groups that own nested entries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from block_scaffold.errors import BlockDescriptorError

BLOCK_TYPE = "block"
DIR_TYPE = "dir"

_BLOCK_KEYS = ("type", "path", "name", "url", "previewUrl", "tags")
_DIR_KEYS = ("type", "path", "blocks")


@dataclass(frozen=True)
class Block:
    """A selectable code block (leaf entry)."""

    path: str
    name: str | None = None
    url: str | None = None
    preview_url: str | None = None
    tags: tuple[str, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict)

    type = BLOCK_TYPE

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": BLOCK_TYPE, "path": self.path}
        if self.name is not None:
            d["name"] = self.name
        if self.url is not None:
            d["url"] = self.url
        if self.preview_url is not None:
            d["previewUrl"] = self.preview_url
        if self.tags:
            d["tags"] = list(self.tags)
        d.update(self.extra)
        return d


@dataclass(frozen=True)
class BlockDir:
    """A directory of blocks; always owns a (possibly empty) sequence."""

    path: str
    blocks: tuple[BlockDescriptor, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict)

    type = DIR_TYPE

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "type": DIR_TYPE,
            "path": self.path,
            "blocks": [entry.to_dict() for entry in self.blocks],
        }
        d.update(self.extra)
        return d


BlockDescriptor = Block | BlockDir


def parse_block_descriptor(data: Mapping[str, Any]) -> BlockDescriptor:
    """Build a ``Block`` or ``BlockDir`` from a registry entry.

    Raises:
        BlockDescriptorError: If the entry is not a mapping, has no string
            ``path`` or carries an unknown ``type``.
    """
    if not isinstance(data, Mapping):
        raise BlockDescriptorError(f"Block entry must be an object, got {type(data).__name__}")

    kind = data.get("type")
    path = data.get("path")
    if not isinstance(path, str):
        raise BlockDescriptorError(f"Block entry of type {kind!r} has no string 'path'")

    if kind == BLOCK_TYPE:
        tags = data.get("tags") or ()
        return Block(
            path=path,
            name=data.get("name"),
            url=data.get("url"),
            preview_url=data.get("previewUrl"),
            tags=tuple(str(tag) for tag in tags),
            extra={key: value for key, value in data.items() if key not in _BLOCK_KEYS},
        )
    if kind == DIR_TYPE:
        children = data.get("blocks")
        if not isinstance(children, list):
            raise BlockDescriptorError(f"Block directory '{path}' has no 'blocks' list")
        return BlockDir(
            path=path,
            blocks=tuple(parse_block_descriptor(child) for child in children),
            extra={key: value for key, value in data.items() if key not in _DIR_KEYS},
        )

    raise BlockDescriptorError(f"Unknown block entry type {kind!r} for '{path}'")


def parse_block_list(payload: Any) -> list[BlockDescriptor]:
    """Parse a JSON block list (an array of descriptors)."""
    if not isinstance(payload, list):
        raise BlockDescriptorError(f"Block list must be a JSON array, got {type(payload).__name__}")
    return [parse_block_descriptor(entry) for entry in payload]


@dataclass(frozen=True)
class CloneContext:
    """Identifies a local block repository cache and its upstream branch."""

    repo: str
    id: str
    branch: str
    blocks_temp_path: Path
    template_tmp_dir_path: Path
    path: str = ""


__all__ = [
    "BLOCK_TYPE",
    "DIR_TYPE",
    "Block",
    "BlockDescriptor",
    "BlockDir",
    "CloneContext",
    "parse_block_descriptor",
    "parse_block_list",
]
