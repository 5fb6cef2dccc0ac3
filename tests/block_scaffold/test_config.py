"""Tests for .blocks/config.yaml loading and environment overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from block_scaffold.core.config import (
    GITHUB_API_URL,
    BlockSettings,
    default_cache_dir,
    load_settings,
)
from block_scaffold.errors import BlockConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("BLOCKS_CACHE_DIR", "BLOCKS_PREVIEW_HOST", "BLOCKS_GITHUB_API"):
        monkeypatch.delenv(name, raising=False)


def _write_config(root: Path, text: str) -> None:
    config_dir = root / ".blocks"
    config_dir.mkdir()
    (config_dir / "config.yaml").write_text(text, encoding="utf-8")


def test_defaults_without_project(tmp_path: Path):
    settings = load_settings(tmp_path)

    assert settings.cache_dir == default_cache_dir()
    assert settings.github_api_url == GITHUB_API_URL
    assert settings.ignored_dirs == ("_scripts", "tests")
    assert settings.is_vendor_repo("ant-design", "pro-blocks")
    assert not settings.is_vendor_repo("acme", "pro-blocks")


def test_project_config_section(tmp_path: Path):
    _write_config(
        tmp_path,
        "blocks:\n"
        "  cache_dir: /tmp/block-cache\n"
        "  preview_host: https://preview.example.com/\n"
        "  default_branch: main\n"
        "  ignored_dirs: [scripts, docs]\n"
        "  tags: [Internal]\n",
    )

    settings = load_settings(tmp_path)

    assert settings.cache_dir == Path("/tmp/block-cache")
    assert settings.preview_host == "https://preview.example.com"
    assert settings.default_branch == "main"
    assert settings.ignored_dirs == ("scripts", "docs")
    assert settings.tags == ("Internal",)


def test_environment_overrides_file(tmp_path: Path, monkeypatch):
    _write_config(tmp_path, "blocks:\n  preview_host: https://from-file\n")
    monkeypatch.setenv("BLOCKS_PREVIEW_HOST", "https://from-env/")
    monkeypatch.setenv("BLOCKS_CACHE_DIR", str(tmp_path / "cache"))
    monkeypatch.setenv("BLOCKS_GITHUB_API", "https://ghe.example.com/api/v3/")

    settings = load_settings(tmp_path)

    assert settings.preview_host == "https://from-env"
    assert settings.cache_dir == tmp_path / "cache"
    assert settings.github_api_url == "https://ghe.example.com/api/v3"


def test_invalid_yaml_raises(tmp_path: Path):
    _write_config(tmp_path, "blocks: [unclosed\n")

    with pytest.raises(BlockConfigError, match="Invalid YAML"):
        load_settings(tmp_path)


def test_blocks_section_must_be_mapping(tmp_path: Path):
    _write_config(tmp_path, "blocks:\n  - one\n")

    with pytest.raises(BlockConfigError, match="must be a mapping"):
        load_settings(tmp_path)


def test_from_dict_ignores_blank_values():
    settings = BlockSettings.from_dict({"default_branch": "  ", "vendor_owner": None})

    assert settings.default_branch == "master"
    assert settings.vendor_owner == "ant-design"
