"""Shared fixtures: a sample graph manifest on disk and a diamond-shaped tree."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from pydepth.core.tree import DependencyNode

SAMPLE_GRAPH = {
    "packages": {
        "app": {"deps": ["libA", "libB"], "test_deps": ["pytest", "libA"]},
        "libA": {"deps": ["libC"]},
        "libB": {"internal": True, "deps": ["libC", "libD"]},
        "libC": {},
        "libD": {"deps": ["missing_pkg"]},
        "pytest": {"deps": ["pluggy"]},
        "pluggy": None,
    }
}


@pytest.fixture
def graph_file(tmp_path: Path) -> Path:
    path = tmp_path / "depgraph.json"
    path.write_text(json.dumps(SAMPLE_GRAPH))
    return path


@pytest.fixture
def diamond() -> DependencyNode:
    """app -> [libA -> libC, libB (internal, test) -> libC]."""
    return DependencyNode(
        name="app",
        children=[
            DependencyNode(name="libA", children=[DependencyNode(name="libC")]),
            DependencyNode(
                name="libB",
                internal=True,
                test=True,
                children=[DependencyNode(name="libC")],
            ),
        ],
    )
