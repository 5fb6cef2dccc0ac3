"""Route tree helpers used to decide where a block can be mounted.

Routes are the nested ``{"path": ..., "routes": [...]}`` objects of an
application's router config. They are turned into a tree of ``RouteNode``,
flattened into a mapping keyed by full path, and optionally expanded so every
ancestor prefix of a path resolves to a node.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Sequence

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from block_scaffold.errors import BlockConfigError


@dataclass
class RouteNode:
    """Tree node built from a route's ``path``; ``children`` is never None."""

    title: str
    value: str
    key: str
    children: list[RouteNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "value": self.value,
            "key": self.key,
            "children": [child.to_dict() for child in self.children],
        }


def gen_router_to_tree_data(routes: Sequence[Mapping[str, Any]]) -> list[RouteNode]:
    """Map route objects to ``RouteNode`` trees.

    Routes without a ``path`` are dropped together with their nested routes.
    """
    nodes: list[RouteNode] = []
    for route in routes:
        path = route.get("path")
        if not path:
            continue
        nodes.append(
            RouteNode(
                title=path,
                value=path,
                key=path,
                children=gen_router_to_tree_data(route.get("routes") or []),
            )
        )
    return nodes


def reduce_data(tree_data: Sequence[RouteNode]) -> dict[str, RouteNode]:
    """Flatten nodes into a mapping keyed by full path.

    A node is only inserted when its key is not already taken by an earlier
    sibling (or that sibling's descendants). Descendant entries are merged in
    after the node and replace any existing value for the same key.

        /user -> [/user/list]   ==>   {"/user": ..., "/user/list": ...}
    """
    flattened: dict[str, RouteNode] = {}
    for node in tree_data:
        children_keys = reduce_data(node.children)
        if node.key not in flattened:
            flattened[node.key] = node
        flattened.update(children_keys)
    return flattened


def _ancestor_prefixes(key: str) -> list[str]:
    """Strict, non-empty ancestor prefixes: ``/a/b/c`` -> ``/a``, ``/a/b``."""
    segments = [segment for segment in key.split("/") if segment]
    return ["/" + "/".join(segments[:index]) for index in range(1, len(segments))]


def _close_prefixes(flattened: dict[str, RouteNode]) -> tuple[dict[str, RouteNode], list[RouteNode]]:
    """Expand ``flattened`` with ancestor prefixes.

    Keys are visited in insertion order. Each visit first reads the key's
    current owner (an earlier key may have claimed it as a prefix), then
    points every ancestor prefix at that owner, overwriting earlier claims.

    Returns the expanded mapping and the owner read for each flattened key,
    in visit order.
    """
    prefix_owner: dict[str, RouteNode] = {}
    visited: list[RouteNode] = []
    for key, node in flattened.items():
        owner = prefix_owner.get(key, node)
        visited.append(owner)
        for prefix in _ancestor_prefixes(key):
            prefix_owner[prefix] = owner

    expanded = dict(flattened)
    expanded.update(prefix_owner)
    return expanded, visited


def prefix_closure(routes: Sequence[Mapping[str, Any]]) -> dict[str, RouteNode]:
    """Flattened route mapping plus an entry for every ancestor prefix."""
    expanded, _ = _close_prefixes(reduce_data(gen_router_to_tree_data(routes)))
    return expanded


def depth_router_config(routes: Sequence[Mapping[str, Any]]) -> list[RouteNode]:
    """Nodes that can host child routes, one per flattened key, in key order.

        /user /user/list /user/list/item  ==>  [/user -> [/user/list -> [...]]]
    """
    _, visited = _close_prefixes(reduce_data(gen_router_to_tree_data(routes)))
    return [node for node in visited if node.children]


def route_exists(path: str, routes: Sequence[Mapping[str, Any]] | None = None) -> bool:
    """Return True when ``path`` is the exact path of some route.

    Only real keys count; ancestor prefixes of deeper routes do not.
    """
    return path in reduce_data(gen_router_to_tree_data(routes or []))


def load_routes(path: Path) -> list[dict[str, Any]]:
    """Read a route config from JSON or YAML.

    The file holds either a list of route objects or a mapping with a
    ``routes`` list.
    """
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = YAML(typ="safe").load(text)
    except (ValueError, YAMLError) as exc:
        raise BlockConfigError(f"Cannot parse routes file {path}: {exc}") from exc

    if isinstance(data, Mapping):
        data = data.get("routes")
    if not isinstance(data, list):
        raise BlockConfigError(f"Routes file {path} must contain a list of routes")
    return data


__all__ = [
    "RouteNode",
    "depth_router_config",
    "gen_router_to_tree_data",
    "load_routes",
    "prefix_closure",
    "reduce_data",
    "route_exists",
]
