"""Block registry constants and project-scoped settings in .blocks/config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_cache_dir
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from block_scaffold.errors import BlockConfigError

APP_NAME = "block-scaffold"

DEFAULT_BRANCH = "master"

# Vendor registry that publishes a pre-built block list.
VENDOR_OWNER = "ant-design"
VENDOR_REPO = "pro-blocks"
VENDOR_BLOCK_LIST_URL = "https://raw.githubusercontent.com/ant-design/pro-blocks/master/blockList.json"

GITHUB_API_URL = "https://api.github.com"
PREVIEW_HOST = "https://preview.pro.ant.design"
DEFAULT_BLOCK_TAGS = ("Ant Design Pro",)

IGNORED_BLOCK_DIRS = ("_scripts", "tests")
SUBMODULE_MARKER = ".gitmodules"

CONFIG_DIR = ".blocks"
CONFIG_FILE = "config.yaml"

CACHE_DIR_ENV_VAR = "BLOCKS_CACHE_DIR"
PREVIEW_HOST_ENV_VAR = "BLOCKS_PREVIEW_HOST"
GITHUB_API_ENV_VAR = "BLOCKS_GITHUB_API"


def default_cache_dir() -> Path:
    """Return the user cache directory that holds cloned block repositories."""
    return Path(user_cache_dir(APP_NAME)) / "blocks"


@dataclass(slots=True)
class BlockSettings:
    """Resolved registry and cache settings for one CLI invocation."""

    cache_dir: Path = field(default_factory=default_cache_dir)
    github_api_url: str = GITHUB_API_URL
    preview_host: str = PREVIEW_HOST
    vendor_owner: str = VENDOR_OWNER
    vendor_repo: str = VENDOR_REPO
    vendor_block_list_url: str = VENDOR_BLOCK_LIST_URL
    default_branch: str = DEFAULT_BRANCH
    ignored_dirs: tuple[str, ...] = IGNORED_BLOCK_DIRS
    tags: tuple[str, ...] = DEFAULT_BLOCK_TAGS

    def is_vendor_repo(self, owner: str, name: str) -> bool:
        return owner == self.vendor_owner and name == self.vendor_repo

    @classmethod
    def from_dict(cls, data: dict[str, object] | None) -> "BlockSettings":
        settings = cls()
        if not isinstance(data, dict):
            return settings

        cache_dir = data.get("cache_dir")
        if isinstance(cache_dir, str) and cache_dir.strip():
            settings.cache_dir = Path(cache_dir.strip()).expanduser()

        for key in ("github_api_url", "preview_host", "vendor_block_list_url"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                setattr(settings, key, value.strip().rstrip("/"))

        for key in ("vendor_owner", "vendor_repo", "default_branch"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                setattr(settings, key, value.strip())

        ignored = data.get("ignored_dirs")
        if isinstance(ignored, list):
            settings.ignored_dirs = tuple(str(item) for item in ignored if str(item).strip())

        tags = data.get("tags")
        if isinstance(tags, list):
            settings.tags = tuple(str(item) for item in tags if str(item).strip())

        return settings


def config_path(project_root: Path) -> Path:
    return project_root / CONFIG_DIR / CONFIG_FILE


def _read_config(path: Path) -> dict[str, object]:
    if not path.exists():
        return {}
    yaml = YAML(typ="safe")
    try:
        data = yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as exc:
        raise BlockConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise BlockConfigError(f"Expected a mapping at the top of {path}")
    section = data.get("blocks", {})
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise BlockConfigError(f"'blocks' in {path} must be a mapping")
    return section


def load_settings(project_root: Path | None = None) -> BlockSettings:
    """Load settings from the project config file, then apply env overrides.

    Resolution order (later wins):
    1. Built-in defaults
    2. ``<project_root>/.blocks/config.yaml`` (``blocks:`` section)
    3. ``BLOCKS_CACHE_DIR``, ``BLOCKS_PREVIEW_HOST``, ``BLOCKS_GITHUB_API``
    """
    data: dict[str, object] = {}
    if project_root is not None:
        data = _read_config(config_path(project_root))
    settings = BlockSettings.from_dict(data)

    if env_cache := os.environ.get(CACHE_DIR_ENV_VAR):
        settings.cache_dir = Path(env_cache).expanduser()
    if env_preview := os.environ.get(PREVIEW_HOST_ENV_VAR):
        settings.preview_host = env_preview.rstrip("/")
    if env_api := os.environ.get(GITHUB_API_ENV_VAR):
        settings.github_api_url = env_api.rstrip("/")

    return settings


__all__ = [
    "APP_NAME",
    "BlockSettings",
    "DEFAULT_BRANCH",
    "GITHUB_API_URL",
    "IGNORED_BLOCK_DIRS",
    "PREVIEW_HOST",
    "SUBMODULE_MARKER",
    "VENDOR_BLOCK_LIST_URL",
    "config_path",
    "default_cache_dir",
    "load_settings",
]
