"""Deduplicated summary counts over a dependency tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from pydepth.core.tree import DependencyNode


@dataclass
class Summary:
    """Counts of unique packages below a root."""

    internal: int = 0
    external: int = 0
    testing: int = 0

    @property
    def total(self) -> int:
        return self.internal + self.external

    def __str__(self) -> str:
        return (
            f"{self.total} dependencies ({self.internal} internal, "
            f"{self.external} external, {self.testing} testing)."
        )

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "internal": self.internal,
            "external": self.external,
            "testing": self.testing,
        }


def _collect_summary(summary: Summary, node: DependencyNode, seen: set[str]) -> None:
    if node.name in seen:
        # Already counted through another path; its subtree is not walked again.
        return
    seen.add(node.name)
    if node.internal:
        summary.internal += 1
    else:
        summary.external += 1
    if node.test:
        summary.testing += 1
    for child in node.children:
        _collect_summary(summary, child, seen)


def summarize(root: DependencyNode) -> Summary:
    """
    Count the unique packages below root (root itself excluded).

    Each name is counted once, using the flags of the first occurrence met in
    depth-first order.
    """
    summary = Summary()
    seen: set[str] = set()
    for child in root.children:
        _collect_summary(summary, child, seen)
    return summary


def write_summary(stream: TextIO, root: DependencyNode) -> None:
    stream.write(f"{summarize(root)}\n")
