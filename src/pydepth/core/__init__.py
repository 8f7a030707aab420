"""Core library: dependency nodes, graph resolution, tree rendering and summaries."""

from pydepth.core.render import render_tree, to_json, write_json, write_tree
from pydepth.core.resolver import (
    GraphResolver,
    PackageSpec,
    ResolutionError,
    ResolveOptions,
    Resolver,
    load_graph,
)
from pydepth.core.summary import Summary, summarize, write_summary
from pydepth.core.tree import DependencyNode

__all__ = [
    "DependencyNode",
    "GraphResolver",
    "PackageSpec",
    "ResolutionError",
    "ResolveOptions",
    "Resolver",
    "load_graph",
    "render_tree",
    "write_tree",
    "to_json",
    "write_json",
    "Summary",
    "summarize",
    "write_summary",
]
