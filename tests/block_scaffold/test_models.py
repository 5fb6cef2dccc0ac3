"""Tests for block descriptor parsing and git URL parsing."""

from __future__ import annotations

import pytest

from block_scaffold.blocks.giturl import parse_git_url
from block_scaffold.blocks.models import Block, BlockDir, parse_block_descriptor, parse_block_list
from block_scaffold.errors import BlockDescriptorError


class TestParseBlockDescriptor:
    def test_block_keeps_unknown_keys(self):
        entry = {
            "type": "block",
            "path": "AccountCenter",
            "previewUrl": "https://preview.pro.ant.design/account/center",
            "tags": ["Ant Design Pro"],
            "img": "https://example.com/a.png",
            "isPage": True,
        }

        block = parse_block_descriptor(entry)

        assert isinstance(block, Block)
        assert block.type == "block"
        assert block.preview_url == entry["previewUrl"]
        assert block.tags == ("Ant Design Pro",)
        assert block.extra == {"img": "https://example.com/a.png", "isPage": True}
        assert block.to_dict() == entry

    def test_dir_owns_nested_blocks(self):
        entry = {"type": "dir", "path": "user", "blocks": [{"type": "block", "path": "login"}]}

        block_dir = parse_block_descriptor(entry)

        assert isinstance(block_dir, BlockDir)
        assert block_dir.type == "dir"
        assert block_dir.blocks == (Block(path="login"),)
        assert block_dir.to_dict() == entry

    def test_dir_keeps_unknown_keys(self):
        entry = {
            "type": "dir",
            "path": "user",
            "blocks": [{"type": "block", "path": "login"}],
            "title": "User pages",
            "order": 2,
        }

        block_dir = parse_block_descriptor(entry)

        assert block_dir.extra == {"title": "User pages", "order": 2}
        assert block_dir.to_dict() == entry

    def test_dir_without_blocks_is_rejected(self):
        with pytest.raises(BlockDescriptorError, match="no 'blocks' list"):
            parse_block_descriptor({"type": "dir", "path": "user"})

    def test_unknown_type_is_rejected(self):
        with pytest.raises(BlockDescriptorError, match="Unknown block entry type"):
            parse_block_descriptor({"type": "page", "path": "x"})

    def test_missing_path_is_rejected(self):
        with pytest.raises(BlockDescriptorError, match="no string 'path'"):
            parse_block_descriptor({"type": "block"})

    def test_block_list_must_be_array(self):
        with pytest.raises(BlockDescriptorError, match="JSON array"):
            parse_block_list({"type": "block", "path": "x"})


class TestParseGitUrl:
    def test_https_url(self):
        ref = parse_git_url("https://github.com/ant-design/pro-blocks")
        assert (ref.host, ref.owner, ref.name, ref.branch, ref.path) == (
            "github.com",
            "ant-design",
            "pro-blocks",
            None,
            "",
        )
        assert ref.slug == "ant-design/pro-blocks"

    def test_https_url_with_git_suffix(self):
        ref = parse_git_url("https://github.com/ant-design/pro-blocks.git")
        assert ref.name == "pro-blocks"
        assert ref.clone_url == "https://github.com/ant-design/pro-blocks.git"

    def test_http_url_keeps_scheme_for_cloning(self):
        ref = parse_git_url("http://git.internal/acme/blocks")
        assert ref.scheme == "http"
        assert ref.clone_url == "http://git.internal/acme/blocks.git"

    def test_browse_url_with_branch_and_nested_path(self):
        ref = parse_git_url("https://github.com/acme/blocks/tree/main/user/Login")
        assert ref.branch == "main"
        assert ref.path == "user/Login"

    def test_scp_style_url(self):
        ref = parse_git_url("git@gitlab.com:acme/blocks.git")
        assert (ref.host, ref.owner, ref.name) == ("gitlab.com", "acme", "blocks")

    def test_ssh_scheme_url(self):
        ref = parse_git_url("ssh://git@github.com/acme/blocks.git")
        assert (ref.host, ref.owner, ref.name) == ("github.com", "acme", "blocks")

    @pytest.mark.parametrize("url", ["https://github.com/acme", "not a url", "https:///acme/blocks"])
    def test_invalid_urls(self, url):
        with pytest.raises(ValueError):
            parse_git_url(url)
