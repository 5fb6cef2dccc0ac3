"""Block registry, presentation, repository sync and route tree helpers."""

from .giturl import GitRepoRef, parse_git_url
from .models import (
    Block,
    BlockDescriptor,
    BlockDir,
    CloneContext,
    parse_block_descriptor,
    parse_block_list,
)
from .presentation import BlockChoice, print_blocks
from .registry import fetch_block_list, gen_block_name
from .routes import (
    RouteNode,
    depth_router_config,
    gen_router_to_tree_data,
    load_routes,
    prefix_closure,
    reduce_data,
    route_exists,
)
from .sync import build_clone_context, git_clone, git_update, is_submodule_repo, sync_block_repo

__all__ = [
    "Block",
    "BlockChoice",
    "BlockDescriptor",
    "BlockDir",
    "CloneContext",
    "GitRepoRef",
    "RouteNode",
    "build_clone_context",
    "depth_router_config",
    "fetch_block_list",
    "gen_block_name",
    "gen_router_to_tree_data",
    "git_clone",
    "git_update",
    "is_submodule_repo",
    "load_routes",
    "parse_block_descriptor",
    "parse_block_list",
    "parse_git_url",
    "prefix_closure",
    "print_blocks",
    "reduce_data",
    "route_exists",
    "sync_block_repo",
]
