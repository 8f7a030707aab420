"""Tests for pydepth.core.resolver module."""

from __future__ import annotations

from pathlib import Path

import pytest

from pydepth.core.render import render_tree
from pydepth.core.resolver import (
    GraphResolver,
    PackageSpec,
    ResolutionError,
    ResolveOptions,
    load_graph,
    parse_graph,
)
from pydepth.core.summary import summarize


def _graph(packages: dict) -> dict[str, PackageSpec]:
    return parse_graph({"packages": packages})


class TestLoadGraph:
    """Tests for load_graph / parse_graph."""

    def test_load(self, graph_file: Path) -> None:
        graph = load_graph(graph_file)
        assert set(graph) == {"app", "libA", "libB", "libC", "libD", "pytest", "pluggy"}
        assert graph["libB"].internal is True
        assert graph["app"].test_deps == ["pytest", "libA"]
        assert graph["pluggy"] == PackageSpec(name="pluggy")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ResolutionError, match="cannot read graph manifest"):
            load_graph(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ResolutionError, match="invalid graph manifest"):
            load_graph(path)

    def test_no_packages(self) -> None:
        with pytest.raises(ResolutionError, match="no 'packages'"):
            parse_graph({"pkgs": {}})

    def test_not_an_object(self) -> None:
        with pytest.raises(ResolutionError):
            parse_graph([1, 2])

    def test_deps_not_list(self) -> None:
        with pytest.raises(ResolutionError, match="'deps' must be a list"):
            _graph({"a": {"deps": "b"}})

    def test_entry_not_object(self) -> None:
        with pytest.raises(ResolutionError, match="entry must be an object"):
            _graph({"a": ["b"]})

    def test_load_accepts_str_path(self, graph_file: Path) -> None:
        assert "app" in load_graph(str(graph_file))


class TestGraphResolver:
    """Tests for GraphResolver.resolve."""

    def test_default_options(self, graph_file: Path) -> None:
        root = GraphResolver(load_graph(graph_file)).resolve("app")
        assert list(render_tree(root)) == [
            "app",
            "  ├ libB",
            "  └ libA",
            "    └ libC",
        ]
        libb = root.children[0]
        assert libb.internal is True
        assert libb.children == []

    def test_resolve_internal(self, graph_file: Path) -> None:
        resolver = GraphResolver(load_graph(graph_file), ResolveOptions(resolve_internal=True))
        root = resolver.resolve("app")
        assert list(render_tree(root)) == [
            "app",
            "  ├ libB",
            "    ├ libC",
            "    └ libD",
            "      └ missing_pkg (unresolved)",
            "  └ libA",
            "    └ libC",
        ]
        s = summarize(root)
        assert (s.total, s.internal, s.external, s.testing) == (5, 1, 4, 0)

    def test_resolve_test(self, graph_file: Path) -> None:
        resolver = GraphResolver(load_graph(graph_file), ResolveOptions(resolve_test=True))
        root = resolver.resolve("app")
        assert [c.name for c in root.children] == ["libB", "libA", "pytest"]
        pytest_node = root.children[2]
        assert pytest_node.test is True
        assert [c.name for c in pytest_node.children] == ["pluggy"]
        assert pytest_node.children[0].test is False
        # libA is a regular dependency, so its test_deps entry is dropped.
        assert root.children[1].test is False
        s = summarize(root)
        assert (s.total, s.internal, s.external, s.testing) == (5, 1, 4, 1)

    def test_max_depth(self, graph_file: Path) -> None:
        resolver = GraphResolver(load_graph(graph_file), ResolveOptions(max_depth=1))
        root = resolver.resolve("app")
        assert [c.name for c in root.children] == ["libB", "libA"]
        assert all(c.children == [] for c in root.children)

    def test_internal_root_is_expanded(self, graph_file: Path) -> None:
        root = GraphResolver(load_graph(graph_file)).resolve("libB")
        assert root.internal is True
        assert [c.name for c in root.children] == ["libC", "libD"]

    def test_unknown_root(self, graph_file: Path) -> None:
        with pytest.raises(ResolutionError, match="unable to resolve root package"):
            GraphResolver(load_graph(graph_file)).resolve("nonexistent_pkg_xyz")

    def test_empty_root(self, graph_file: Path) -> None:
        with pytest.raises(ResolutionError, match="root package not specified"):
            GraphResolver(load_graph(graph_file)).resolve("")

    def test_stdlib_fallback(self) -> None:
        root = GraphResolver(_graph({"app": {"deps": ["json", "nope_xyz"]}})).resolve("app")
        assert [(c.name, c.internal, c.resolved) for c in root.children] == [
            ("json", True, True),
            ("nope_xyz", False, False),
        ]

    def test_stdlib_root(self) -> None:
        root = GraphResolver(_graph({})).resolve("json")
        assert root.internal is True
        assert root.children == []

    def test_cycle_terminates(self) -> None:
        root = GraphResolver(_graph({"a": {"deps": ["b"]}, "b": {"deps": ["a"]}})).resolve("a")
        assert list(render_tree(root)) == ["a", "  └ b", "    └ a"]

    def test_first_occurrence_expanded(self) -> None:
        graph = _graph(
            {
                "root": {"deps": ["p", "q"]},
                "p": {"deps": ["s"]},
                "q": {"deps": ["s"]},
                "s": {"deps": ["t"]},
                "t": {},
            }
        )
        root = GraphResolver(graph).resolve("root")
        p, q = root.children
        assert [c.name for c in p.children[0].children] == ["t"]
        assert q.children[0].children == []

    def test_self_dependency_skipped(self) -> None:
        graph = _graph({"a": {"deps": ["b", "a"], "test_deps": ["a"]}, "b": {"deps": ["b"]}})
        root = GraphResolver(graph, ResolveOptions(resolve_test=True)).resolve("a")
        assert list(render_tree(root)) == ["a", "  └ b"]
        s = summarize(root)
        assert (s.total, s.external, s.testing) == (1, 1, 0)

    def test_duplicate_deps_dropped(self) -> None:
        root = GraphResolver(_graph({"a": {"deps": ["b", "b"]}, "b": {}})).resolve("a")
        assert [c.name for c in root.children] == ["b"]

    def test_cache_reset_between_calls(self, graph_file: Path) -> None:
        resolver = GraphResolver(load_graph(graph_file))
        first = resolver.resolve("libA")
        second = resolver.resolve("libA")
        assert first == second
        assert [c.name for c in second.children] == ["libC"]

    def test_children_sorted_internal_first(self) -> None:
        graph = _graph(
            {
                "app": {"deps": ["zeta", "beta", "alpha_int"]},
                "zeta": {},
                "beta": {},
                "alpha_int": {"internal": True},
            }
        )
        root = GraphResolver(graph).resolve("app")
        assert [c.name for c in root.children] == ["alpha_int", "beta", "zeta"]

