"""Exception hierarchy for block registry, sync and configuration failures."""

from __future__ import annotations


class BlockError(Exception):
    """Base exception for block tooling errors."""
    pass


class BlockDescriptorError(BlockError, ValueError):
    """A block list entry or registry payload has an unexpected shape."""


class BlockConfigError(BlockError, RuntimeError):
    """Raised when .blocks/config.yaml cannot be used."""


class RepoSyncError(BlockError, RuntimeError):
    """A git step of a clone or update exited unsuccessfully.

    The message preserves what git reported; ``step`` names the sub-step
    (``fetch``, ``checkout``, ``pull``, ``submodule-init``,
    ``submodule-update`` or ``clone``) so callers do not need to parse it.
    """

    def __init__(self, step: str, message: str, returncode: int | None = None):
        self.step = step
        self.returncode = returncode
        super().__init__(message)


__all__ = [
    "BlockConfigError",
    "BlockDescriptorError",
    "BlockError",
    "RepoSyncError",
]
