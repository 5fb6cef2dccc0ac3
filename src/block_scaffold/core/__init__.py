"""Core configuration exports."""

from .config import (
    APP_NAME,
    DEFAULT_BRANCH,
    IGNORED_BLOCK_DIRS,
    SUBMODULE_MARKER,
    BlockSettings,
    default_cache_dir,
    load_settings,
)

__all__ = [
    "APP_NAME",
    "BlockSettings",
    "DEFAULT_BRANCH",
    "IGNORED_BLOCK_DIRS",
    "SUBMODULE_MARKER",
    "default_cache_dir",
    "load_settings",
]
