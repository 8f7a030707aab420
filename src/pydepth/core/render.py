"""Text tree and JSON rendering for dependency trees."""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import TextIO

from pydepth.core.tree import DependencyNode

OUTPUT_PADDING = "  "
OUTPUT_PREFIX = "├ "
OUTPUT_PREFIX_LAST = "└ "


def render_tree(node: DependencyNode, depth: int = 0, is_last: bool = False) -> Iterator[str]:
    """
    Yield one line per node, depth-first, children in their resolved order.

    Every occurrence of a package is rendered, so shared dependencies show up
    once per path that reaches them.
    """
    prefix = ""
    if depth > 0:
        prefix = OUTPUT_PREFIX_LAST if is_last else OUTPUT_PREFIX
    yield f"{OUTPUT_PADDING * depth}{prefix}{node}"

    children = node.children
    for i, child in enumerate(children):
        yield from render_tree(child, depth + 1, i == len(children) - 1)


def write_tree(stream: TextIO, node: DependencyNode) -> None:
    """Write the rendered tree to stream, one line at a time."""
    for line in render_tree(node):
        stream.write(line + "\n")


def to_json(node: DependencyNode) -> str:
    """Render the full tree as an indented JSON document."""
    return json.dumps(node.to_dict(), indent=2, ensure_ascii=False)


def write_json(stream: TextIO, node: DependencyNode) -> None:
    stream.write(to_json(node) + "\n")
