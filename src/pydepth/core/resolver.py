"""Resolve dependency trees from a pre-resolved graph manifest."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from pydepth.core.tree import DependencyNode

logger = logging.getLogger(__name__)

DEFAULT_GRAPH_FILE = "depgraph.json"


class ResolutionError(Exception):
    """A root package could not be resolved."""


class Resolver(Protocol):
    def resolve(self, name: str) -> DependencyNode: ...


@dataclass
class ResolveOptions:
    """Options controlling how far a tree is resolved."""

    resolve_internal: bool = False
    resolve_test: bool = False
    # 0 means no limit
    max_depth: int = 0


@dataclass
class PackageSpec:
    """One package entry from the graph manifest."""

    name: str
    internal: bool = False
    deps: list[str] = field(default_factory=list)
    test_deps: list[str] = field(default_factory=list)


def _name_list(entry: dict, key: str, package: str) -> list[str]:
    value = entry.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ResolutionError(f"package '{package}': '{key}' must be a list of names")
    return list(value)


def parse_graph(data: object) -> dict[str, PackageSpec]:
    """
    Convert a decoded manifest into PackageSpec entries.

    Expected shape: {"packages": {name: {"internal": bool, "deps": [...], "test_deps": [...]}}}.
    """
    if not isinstance(data, dict) or not isinstance(data.get("packages"), dict):
        raise ResolutionError("graph manifest has no 'packages' object")
    graph: dict[str, PackageSpec] = {}
    for name, entry in data["packages"].items():
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise ResolutionError(f"package '{name}': entry must be an object")
        graph[name] = PackageSpec(
            name=name,
            internal=bool(entry.get("internal", False)),
            deps=_name_list(entry, "deps", name),
            test_deps=_name_list(entry, "test_deps", name),
        )
    return graph


def load_graph(path: Path | str) -> dict[str, PackageSpec]:
    """
    Read a graph manifest from disk.

    Raises:
        ResolutionError: If the file is unreadable, not JSON, or malformed.
    """
    path = Path(path)
    logger.debug("Loading graph manifest %s", path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ResolutionError(f"cannot read graph manifest {path}: {e.strerror or e}") from e
    except json.JSONDecodeError as e:
        raise ResolutionError(f"invalid graph manifest {path}: {e}") from e
    graph = parse_graph(data)
    logger.debug("Loaded %d package(s) from %s", len(graph), path)
    return graph


def _sort_key(node: DependencyNode) -> tuple[bool, str]:
    # Internal packages first, then by name.
    return (not node.internal, node.name)


class GraphResolver:
    """
    Build DependencyNode trees from a package graph.

    A package is expanded only the first time it is met during one resolve()
    call; later occurrences are leaves, which also stops cycles.
    """

    def __init__(
        self,
        graph: dict[str, PackageSpec],
        options: ResolveOptions | None = None,
    ) -> None:
        self.graph = graph
        self.options = options or ResolveOptions()
        self._seen: set[str] = set()

    def resolve(self, name: str) -> DependencyNode:
        """
        Resolve the tree rooted at name.

        Raises:
            ResolutionError: If name is empty or the root package is unknown.
        """
        if not name:
            raise ResolutionError("root package not specified")
        logger.debug("Resolving %s with %s", name, self.options)
        self._seen = set()
        root = self._resolve(name, depth=0, test=False)
        if not root.resolved:
            raise ResolutionError("unable to resolve root package")
        return root

    def _lookup(self, name: str) -> PackageSpec | None:
        spec = self.graph.get(name)
        if spec is None and name in sys.stdlib_module_names:
            spec = PackageSpec(name=name, internal=True)
        return spec

    def _at_max_depth(self, depth: int) -> bool:
        return self.options.max_depth > 0 and depth >= self.options.max_depth

    def _resolve(self, name: str, depth: int, test: bool) -> DependencyNode:
        node = DependencyNode(name=name, test=test)
        seen = name in self._seen
        self._seen.add(name)

        spec = self._lookup(name)
        if spec is None:
            node.resolved = False
            return node
        node.internal = spec.internal
        if seen or self._at_max_depth(depth):
            return node
        if spec.internal and not (self.options.resolve_internal or depth == 0):
            return node

        unique: set[str] = set()
        self._add_children(node, spec.deps, depth, unique, test=False)
        if self.options.resolve_test:
            self._add_children(node, spec.test_deps, depth, unique, test=True)
        node.children.sort(key=_sort_key)
        return node

    def _add_children(
        self,
        node: DependencyNode,
        names: list[str],
        depth: int,
        unique: set[str],
        *,
        test: bool,
    ) -> None:
        for dep in names:
            if dep == node.name or dep in unique:
                continue
            unique.add(dep)
            node.children.append(self._resolve(dep, depth + 1, test))
