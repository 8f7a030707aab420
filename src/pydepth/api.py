"""Public API: use pydepth from Python or from other tools."""

from __future__ import annotations

import os
from pathlib import Path

from pydepth.core.resolver import (
    DEFAULT_GRAPH_FILE,
    GraphResolver,
    ResolveOptions,
    load_graph,
)
from pydepth.core.summary import Summary, summarize
from pydepth.core.tree import DependencyNode

GRAPH_ENV_VAR = "PYDEPTH_GRAPH"


def default_graph_path() -> Path:
    """Graph manifest location: $PYDEPTH_GRAPH, else depgraph.json in the current directory."""
    return Path(os.environ.get(GRAPH_ENV_VAR) or DEFAULT_GRAPH_FILE)


def make_resolver(
    graph_path: Path | str | None = None,
    *,
    resolve_internal: bool = False,
    resolve_test: bool = False,
    max_depth: int = 0,
) -> GraphResolver:
    """
    Load a graph manifest and wrap it in a GraphResolver.

    Raises:
        ResolutionError: If the manifest cannot be loaded.
    """
    graph = load_graph(graph_path if graph_path is not None else default_graph_path())
    options = ResolveOptions(
        resolve_internal=resolve_internal,
        resolve_test=resolve_test,
        max_depth=max_depth,
    )
    return GraphResolver(graph, options)


def list_known_packages(graph_path: Path | str | None = None) -> list[str]:
    """Return the sorted package names declared in the graph manifest."""
    graph = load_graph(graph_path if graph_path is not None else default_graph_path())
    return sorted(graph)


def build_tree(
    root_package: str,
    *,
    graph_path: Path | str | None = None,
    resolve_internal: bool = False,
    resolve_test: bool = False,
    max_depth: int = 0,
) -> DependencyNode:
    """
    Build a full dependency tree for a package.

    Args:
        root_package: Name of the root package.
        graph_path: Graph manifest to resolve against (default: default_graph_path()).
        resolve_internal: Also expand dependencies of internal (stdlib) packages.
        resolve_test: Also follow test-only dependencies.
        max_depth: Maximum depth to resolve; 0 = unlimited.

    Returns:
        Root DependencyNode.

    Raises:
        ResolutionError: If the manifest cannot be loaded or the root is unknown.
    """
    resolver = make_resolver(
        graph_path,
        resolve_internal=resolve_internal,
        resolve_test=resolve_test,
        max_depth=max_depth,
    )
    return resolver.resolve(root_package)


def summarize_tree(
    root_package: str,
    *,
    graph_path: Path | str | None = None,
    resolve_internal: bool = False,
    resolve_test: bool = False,
    max_depth: int = 0,
) -> Summary:
    """Build the tree for root_package and return its deduplicated Summary."""
    tree = build_tree(
        root_package,
        graph_path=graph_path,
        resolve_internal=resolve_internal,
        resolve_test=resolve_test,
        max_depth=max_depth,
    )
    return summarize(tree)
