"""Turn a block tree into choices for the interactive block picker."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from typing import Callable, Sequence
from urllib.parse import urlparse

from block_scaffold.blocks.models import Block, BlockDescriptor, BlockDir
from block_scaffold.core.config import PREVIEW_HOST

LinkRenderer = Callable[[str, str], str]


@dataclass(frozen=True)
class BlockChoice:
    """One selectable row: ``value`` and ``key`` are the block's full path."""

    name: str
    value: str
    key: str
    tags: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "value": self.value, "key": self.key}


def rich_link(text: str, url: str) -> str:
    """Render a terminal hyperlink with Rich markup."""
    return f"[link={url}]{text}[/link]"


def join_block_path(*parts: str) -> str:
    """Join path segments the way POSIX path joining normalises them."""
    joined = "/".join(part for part in parts if part)
    if not joined:
        return "."
    return posixpath.normpath(joined)


def preview_link_url(preview_url: str, preview_host: str = PREVIEW_HOST) -> str:
    if urlparse(preview_url).scheme:
        return preview_url
    return f"{preview_host.rstrip('/')}/{preview_url.lstrip('/')}"


def print_blocks(
    blocks: Sequence[BlockDescriptor],
    has_link: bool = False,
    *,
    link_renderer: LinkRenderer = rich_link,
    preview_host: str = PREVIEW_HOST,
) -> list[BlockChoice]:
    """Flatten a block tree into picker choices, depth first, in input order.

    Directories contribute their path to every block below them but produce
    no choice themselves.
    """
    choices: list[BlockChoice] = []

    def walk(entries: Sequence[BlockDescriptor], parent_path: str = "") -> None:
        for entry in entries:
            if isinstance(entry, Block):
                block_name = join_block_path(parent_path, entry.path)
                name = f"📦  [cyan]{block_name}[/cyan]  "
                if has_link and entry.preview_url:
                    name += link_renderer("Preview", preview_link_url(entry.preview_url, preview_host))
                choices.append(BlockChoice(name=name, value=block_name, key=block_name, tags=entry.tags))
            elif isinstance(entry, BlockDir):
                walk(entry.blocks, join_block_path(parent_path, entry.path))
            else:
                raise TypeError(f"Unsupported block entry: {entry!r}")

    walk(blocks)
    return choices


__all__ = [
    "BlockChoice",
    "LinkRenderer",
    "join_block_path",
    "preview_link_url",
    "print_blocks",
    "rich_link",
]
