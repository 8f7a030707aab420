"""Textual TUI for navigating resolved package dependency trees."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import ModalScreen
from textual.widgets import Footer, Header, Input, Static, Tree
from textual.widgets.tree import TreeNode

from pydepth.api import default_graph_path, make_resolver
from pydepth.core.resolver import GraphResolver, ResolutionError
from pydepth.core.summary import summarize

# Limits to avoid huge trees
MAX_TREE_NODES = 2000
EXPAND_DEPTH_DEFAULT = 2

COLOR_HEADER = "bold magenta"
COLOR_PKG = "white"
COLOR_INTERNAL = "dim"
COLOR_TEST = "yellow"
COLOR_UNRESOLVED = "red"
COLOR_STATS = "cyan"


def _count_nodes(node: Any) -> int:
    """Count nodes in tree (for cap)."""
    n = 1
    for c in getattr(node, "children", []):
        n += _count_nodes(c)
    return n


def _node_stats(node: Any) -> tuple[int, int, int]:
    """Return (direct_children, total_descendants, max_depth) for a node."""
    children = getattr(node, "children", []) or []
    direct = len(children)
    total = 0
    max_d = 0
    for c in children:
        sub_direct, sub_total, sub_depth = _node_stats(c)
        total += 1 + sub_total
        max_d = max(max_d, 1 + sub_depth)
    return direct, total, max_d


def _node_label(node: Any) -> str:
    """Rich markup label for a tree node: colored by kind, with flags appended."""
    if not getattr(node, "resolved", True):
        return f"[{COLOR_UNRESOLVED}]{node.name}[/] [dim](unresolved)[/]"
    color = COLOR_INTERNAL if node.internal else COLOR_PKG
    tags = []
    if node.internal:
        tags.append("internal")
    if node.test:
        tags.append(f"[{COLOR_TEST}]test[/]")
    suffix = f" [dim]({', '.join(tags)})[/]" if tags else ""
    return f"[{color}]{node.name}[/]{suffix}"


def _populate_textual_tree(
    tn: TreeNode,
    node: Any,
    *,
    max_nodes: int = MAX_TREE_NODES,
    node_count: list[int] | None = None,
) -> None:
    """Recursively add DependencyNode children; cap total nodes."""
    if node_count is None:
        node_count = [0]
    for child in getattr(node, "children", []):
        if node_count[0] >= max_nodes:
            tn.add_leaf(f"[dim]… truncated ({max_nodes} nodes max)[/]")
            return
        node_count[0] += 1
        if child.children:
            child_tn = tn.add(_node_label(child), data=child, expand=False)
            _populate_textual_tree(child_tn, child, max_nodes=max_nodes, node_count=node_count)
        else:
            tn.add_leaf(_node_label(child), data=child)


def _expand_to_depth(tn: TreeNode, depth: int, current: int = 0) -> None:
    """Expand tree nodes up to given depth (0 = root only)."""
    if current >= depth:
        return
    tn.expand()
    for child in tn.children:
        _expand_to_depth(child, depth, current + 1)


class SearchScreen(ModalScreen[str | None]):
    """Modal to search for packages in the tree. Keyboard-only."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    SearchScreen {
        align: center middle;
        padding: 2 4;
    }
    SearchScreen #search_input {
        width: 60;
        margin: 1 0;
    }
    """

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static("[bold cyan]Search[/]\n\nType a package name or partial match.", markup=True)
            yield Input(placeholder="package name...", id="search_input")
            yield Static(
                "[dim]Enter[/] = Search  ·  [dim]Escape[/] = Cancel  ·  "
                "[dim]n[/]/[dim]N[/] = next/previous match",
                markup=True,
            )

    def on_mount(self) -> None:
        self.query_one("#search_input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        value = event.value.strip()
        self.dismiss(value if value else None)

    def action_cancel(self) -> None:
        self.dismiss(None)


class DepTreeApp(App[None]):
    """Terminal UI to explore resolved dependency trees."""

    TITLE = "pydepth"
    BINDINGS = [
        Binding("escape", "back", "Back", show=True),
        Binding("b", "back", "Back", show=False),
        Binding("/", "search", "Search"),
        Binding("n", "next_match", "Next match", show=False),
        Binding("N", "prev_match", "Prev match", show=False),
        Binding("e", "expand_all", "Expand all"),
        Binding("c", "collapse_all", "Collapse"),
        Binding("q", "quit", "Quit"),
    ]

    DEFAULT_CSS = """
    #details {
        padding: 1 2;
        border: solid $primary;
        height: auto;
        min-height: 8;
    }
    """

    def __init__(
        self,
        resolver: GraphResolver,
        root_package: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._resolver = resolver
        self._root_package = root_package
        self._root_node: Any = None
        self._search_matches: list[TreeNode] = []
        self._search_index: int = 0

    def compose(self) -> ComposeResult:
        yield Header(show_clock=False)
        with Container(id="main_container"):
            yield Tree("Dependencies", id="dep_tree")
            yield Static("", id="details")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = "Dependency Tree Explorer"
        if self._root_package:
            self._load_tree(self._root_package)
        else:
            self._load_package_list()

    def _tree(self) -> Tree:
        return self.query_one("#dep_tree", Tree)

    def _set_details(self, text: str) -> None:
        self.query_one("#details", Static).update(text)

    def _load_package_list(self) -> None:
        tree = self._tree()
        tree.clear()
        names = sorted(self._resolver.graph)
        tree.root.label = f"[{COLOR_HEADER}]Packages ({len(names)})[/]"
        for name in names:
            tree.root.add_leaf(f"[{COLOR_PKG}]{name}[/]", data=name)
        tree.root.expand()
        self._set_details(
            f"[{COLOR_HEADER}]Package list[/]\n\n"
            "[dim]↑/↓[/] move  ·  [dim]Enter[/] on a package = load tree  ·  [dim]q[/] = Quit"
        )
        tree.focus()

    def _load_tree(self, root_package: str) -> None:
        try:
            root = self._resolver.resolve(root_package)
        except ResolutionError as e:
            self._set_details(f"[red]'{root_package}': {e}[/]")
            return
        self._root_package = root_package
        self._root_node = root
        self._search_matches = []
        tree = self._tree()
        tree.clear()
        tree.root.label = f"[{COLOR_HEADER}]{root.name}[/]"
        tree.root.data = root
        _populate_textual_tree(tree.root, root)
        _expand_to_depth(tree.root, EXPAND_DEPTH_DEFAULT)
        self._set_details(self._format_node(root))
        tree.focus()

    def _format_node(self, node: Any) -> str:
        direct, total_desc, max_depth = _node_stats(node)
        flags = [
            "internal" if node.internal else "external",
            "test" if node.test else "regular",
        ]
        if not node.resolved:
            flags.append("unresolved")
        lines = [
            f"[{COLOR_HEADER}]Package[/]",
            f"  {_node_label(node)}  [dim]{', '.join(flags)}[/]",
            "",
            f"[{COLOR_HEADER}]Stats[/]",
            f"  Direct dependencies:  [{COLOR_STATS}]{direct}[/]",
            f"  Nodes below:          [{COLOR_STATS}]{total_desc}[/] [dim](every path)[/]",
            f"  Max depth from here:  [{COLOR_STATS}]{max_depth}[/] [dim]levels[/]",
            f"  Unique packages:      [{COLOR_STATS}]{summarize(node)}[/]",
        ]
        return "\n".join(lines)

    def on_tree_node_selected(self, event: Tree.NodeSelected) -> None:
        node = event.node.data
        if node is None:
            return
        if isinstance(node, str):
            self._load_tree(node)
        else:
            self._set_details(self._format_node(node))

    def action_back(self) -> None:
        """Return to the package list (only when viewing a tree)."""
        if self._root_node is None:
            return
        self._root_package = None
        self._root_node = None
        self._search_matches = []
        self._load_package_list()

    def action_expand_all(self) -> None:
        self._tree().root.expand_all()

    def action_collapse_all(self) -> None:
        root = self._tree().root
        root.collapse_all()
        root.expand()

    def action_search(self) -> None:
        self.push_screen(SearchScreen(), self._on_search_done)

    def _on_search_done(self, query: str | None) -> None:
        if not query:
            return
        self._search_matches = []
        self._collect_matches(self._tree().root, query.lower())
        if not self._search_matches:
            self.notify(f"No matches for '{query}'", severity="warning", timeout=2)
            return
        self.notify(f"Found {len(self._search_matches)} match(es) for '{query}'", timeout=2)
        self._goto_match(0)

    def _collect_matches(self, node: TreeNode, query: str) -> None:
        data = node.data
        name = data if isinstance(data, str) else getattr(data, "name", "")
        if name and query in name.lower():
            self._search_matches.append(node)
        for child in node.children:
            self._collect_matches(child, query)

    def _goto_match(self, index: int) -> None:
        if not self._search_matches:
            return
        self._search_index = index % len(self._search_matches)
        match_node = self._search_matches[self._search_index]
        parent = match_node.parent
        while parent is not None:
            parent.expand()
            parent = parent.parent
        tree = self._tree()
        tree.select_node(match_node)
        tree.scroll_to_node(match_node)

    def action_next_match(self) -> None:
        if not self._search_matches:
            self.notify("No active search. Press / to search.", timeout=2)
            return
        self._goto_match(self._search_index + 1)

    def action_prev_match(self) -> None:
        if not self._search_matches:
            self.notify("No active search. Press / to search.", timeout=2)
            return
        self._goto_match(self._search_index - 1)

    def action_quit(self) -> None:
        self.exit()


def main(argv: list[str] | None = None) -> int:
    """Entry point for the pydepth TUI."""
    parser = argparse.ArgumentParser(
        prog="pydepth-tui",
        description="Browse resolved dependency trees interactively.",
    )
    parser.add_argument("package", nargs="?", help="Optional: start with this package's tree")
    parser.add_argument("-g", "--graph", metavar="PATH", help="Graph manifest to resolve against")
    parser.add_argument("--internal", action="store_true", help="Resolve internal packages")
    parser.add_argument("--test", action="store_true", help="Resolve test-only dependencies")
    args = parser.parse_args(argv)

    try:
        resolver = make_resolver(
            Path(args.graph) if args.graph else default_graph_path(),
            resolve_internal=args.internal,
            resolve_test=args.test,
        )
    except ResolutionError as e:
        parser.error(str(e))
    DepTreeApp(resolver, root_package=args.package).run()
    return 0


if __name__ == "__main__":
    main()
