"""Resolve the list of selectable blocks published by a git repository.

Two sources are supported:

- the vendor registry, which publishes a pre-built ``blockList.json``;
- any other GitHub repository, whose top-level directories are treated as
  blocks (read through the git trees API).
"""

from __future__ import annotations

import logging
import os
import re
import ssl

import httpx
import truststore

from block_scaffold.blocks.giturl import GitRepoRef, parse_git_url
from block_scaffold.blocks.models import Block, BlockDescriptor, parse_block_list
from block_scaffold.cli.ui import ProgressReporter
from block_scaffold.core.config import BlockSettings
from block_scaffold.errors import BlockDescriptorError

logger = logging.getLogger(__name__)

ssl_context = truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)

_NAME_TOKEN = re.compile(r"[A-Z]?[a-z]+|[0-9]+")


def _github_token(cli_token: str | None = None) -> str | None:
    """Return sanitized GitHub token (cli arg takes precedence) or None."""
    return ((cli_token or os.getenv("GH_TOKEN") or os.getenv("GITHUB_TOKEN") or "").strip()) or None


def _github_auth_headers(cli_token: str | None = None) -> dict:
    """Return Authorization header dict only when a non-empty token exists."""
    token = _github_token(cli_token)
    return {"Authorization": f"Bearer {token}"} if token else {}


def gen_block_name(name: str) -> str:
    """Turn a block directory name into a preview route.

    ``AccountCenter`` -> ``account/center``. A capital letter counts only when
    lowercase letters follow it; lone capitals are dropped. Digit runs are
    kept as their own segment.
    """
    return "/".join(token.lower() for token in _NAME_TOKEN.findall(name))


def _get_json(client: httpx.Client, url: str, token: str | None) -> object:
    response = client.get(url, headers=_github_auth_headers(token))
    response.raise_for_status()
    return response.json()


def _blocks_from_tree(payload: object, repo: GitRepoRef, settings: BlockSettings) -> list[Block]:
    if not isinstance(payload, dict) or not isinstance(payload.get("tree"), list):
        raise BlockDescriptorError(f"Tree listing for {repo.slug} has no 'tree' array")

    ref = settings.default_branch
    base_url = repo.https_url
    blocks: list[Block] = []
    for entry in payload["tree"]:
        if not isinstance(entry, dict):
            raise BlockDescriptorError(f"Tree listing for {repo.slug} has a non-object entry: {entry!r}")
        path = entry.get("path")
        if entry.get("type") != "tree":
            continue
        if not isinstance(path, str) or not path:
            raise BlockDescriptorError(f"Tree entry in {repo.slug} has no string 'path': {entry!r}")
        if path in settings.ignored_dirs or path.startswith("."):
            continue
        blocks.append(
            Block(
                path=path,
                name=path,
                url=f"{base_url}/tree/{ref}/{path}",
                preview_url=f"{settings.preview_host}/{gen_block_name(path)}",
                tags=settings.tags,
                extra={
                    "isPage": True,
                    "defaultPath": f"/{path}",
                    "img": f"{repo.https_url}/raw/{ref}/{path}/snapshot.png",
                },
            )
        )
    return blocks


def fetch_block_list(
    git_url: str,
    reporter: ProgressReporter,
    *,
    settings: BlockSettings | None = None,
    client: httpx.Client | None = None,
    github_token: str | None = None,
) -> list[BlockDescriptor]:
    """Fetch the blocks published by ``git_url``.

    Network and JSON errors propagate unchanged after the reporter has been
    marked failed. No retry is attempted.
    """
    settings = settings or BlockSettings()
    repo = parse_git_url(git_url)
    owns_client = client is None
    if client is None:
        client = httpx.Client(verify=ssl_context, timeout=30, follow_redirects=True)

    reporter.start(f"🔍  find block list from {git_url}")
    try:
        if settings.is_vendor_repo(repo.owner, repo.name):
            logger.info("Fetching vendor block list from %s", settings.vendor_block_list_url)
            blocks = parse_block_list(_get_json(client, settings.vendor_block_list_url, github_token))
        else:
            api_url = (
                f"{settings.github_api_url}/repos/{repo.owner}/{repo.name}"
                f"/git/trees/{settings.default_branch}"
            )
            logger.info("Listing block directories from %s", api_url)
            payload = _get_json(client, api_url, github_token)
            blocks = _blocks_from_tree(payload, repo, settings)
    except Exception:
        reporter.fail()
        logger.warning("Could not fetch block list for %s", git_url)
        raise
    finally:
        if owns_client:
            client.close()

    reporter.succeed()
    return blocks


__all__ = ["fetch_block_list", "gen_block_name"]
