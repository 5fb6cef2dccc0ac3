"""CLI command modules for the blocks tool."""

from .blocks import fetch, list_blocks, route_exists_cmd, routes_cmd

__all__ = ["fetch", "list_blocks", "route_exists_cmd", "routes_cmd"]
