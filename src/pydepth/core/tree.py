"""Represent resolved package dependency trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DependencyNode:
    """A node in the dependency tree: one package occurrence and its direct children."""

    name: str
    internal: bool = False
    test: bool = False
    children: list[DependencyNode] = field(default_factory=list)
    # False when the package could not be found in the graph
    resolved: bool = True

    def __str__(self) -> str:
        if not self.resolved:
            return f"{self.name} (unresolved)"
        return self.name

    def to_dict(self) -> dict:
        """Serialize node to a JSON-friendly dict (for --json output and the HTTP API)."""
        return {
            "name": self.name,
            "internal": self.internal,
            "resolved": self.resolved,
            "test": self.test,
            "children": [c.to_dict() for c in self.children],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DependencyNode:
        """
        Rebuild a node (and its subtree) from the dict produced by to_dict().

        Raises:
            ValueError: If a node has no name.
        """
        name = data.get("name")
        if not name:
            raise ValueError("dependency node has no name")
        return cls(
            name=name,
            internal=bool(data.get("internal", False)),
            test=bool(data.get("test", False)),
            resolved=bool(data.get("resolved", True)),
            children=[cls.from_dict(c) for c in data.get("children", [])],
        )
