import asyncio
import logging
from typing import Dict, List, Optional, Set

from rich.markup import escape
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import Footer, Header, Input, Label, LoadingIndicator, Tree

from mvntree.__version__ import __version__
from mvntree.cli import node_label
from mvntree.core.model import DependencyNode, node_id
from mvntree.core.search import SearchResult, format_path, search_dependencies
from mvntree.core.summary import TreeStats, calculate_stats, collapse_all, expand_all, reveal
from mvntree.sources import detect_source


class MvnTreeApp(App):
    TITLE = "mvntree"
    SUB_TITLE = f"v{__version__}"

    DEFAULT_CSS = """
    Screen { layout: vertical; }

    #info-bar {
        height: 3;
        dock: top;
        background: $surface;
        border-bottom: solid $primary;
        align: left middle;
        padding: 0 1;
    }

    .info-label {
        width: auto;
        height: 1;
        padding: 0 2;
        color: $text;
    }

    #search-bar { height: 3; margin: 0 1; }
    #search-input { width: 1fr; }
    #search-status { width: auto; max-width: 60%; padding: 1 2; color: $text-muted; }

    #tree-container {
        height: 1fr;
        border: none;
        margin: 0 1;
    }
    Tree { padding: 1; background: $surface; }

    #loading-container { height: 100%; align: center middle; }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("j", "cursor_down", "Down", show=False),
        Binding("k", "cursor_up", "Up", show=False),
        Binding("l", "expand_node", "Expand"),
        Binding("h", "collapse_node", "Collapse"),
        Binding("space", "toggle_node", "Toggle"),
        Binding("e", "expand_all", "Expand all"),
        Binding("c", "collapse_all", "Collapse all"),
        Binding("slash", "focus_search", "Search"),
        Binding("ctrl+f", "focus_search", "Search", show=False),
        Binding("n", "next_match", "Next"),
        Binding("N", "previous_match", "Prev", show=False),
        Binding("escape", "clear_search", "Clear", show=False),
    ]

    def __init__(self, report_path: Optional[str] = None, verbose_maven: bool = False) -> None:
        super().__init__()
        self.report_path = report_path
        self.verbose_maven = verbose_maven

        self.dependency_tree: Optional[DependencyNode] = None
        self.stats = TreeStats()
        self.source_name = "..."

        self.matches: List[SearchResult] = []
        self.match_index = 0
        self.highlighted: Set[str] = set()
        self._tree_nodes: Dict[int, object] = {}

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Horizontal(id="info-bar"):
            yield Label(f"[b]Project:[/b] [cyan]{self.source_name}[/]", id="lbl-project", classes="info-label")
            yield Label("[b]Total:[/b] [blue]0[/]", id="lbl-total", classes="info-label")
            yield Label("[b]Direct:[/b] [green]0[/]", id="lbl-direct", classes="info-label")
            yield Label("[b]Transitive:[/b] [green]0[/]", id="lbl-transitive", classes="info-label")
            yield Label("[b]Omitted:[/b] [yellow]0[/]", id="lbl-omitted", classes="info-label")
            yield Label("[b]Depth:[/b] 0", id="lbl-depth", classes="info-label")

        with Horizontal(id="search-bar"):
            yield Input(placeholder="Search groupId:artifactId ( / )", id="search-input")
            yield Label("", id="search-status")

        with Container(id="main-area"):
            with Container(id="loading-container"):
                yield LoadingIndicator()
                yield Label("Initializing mvntree...", id="status-label")

            with Container(id="tree-container"):
                yield Tree("Root", id="dep-tree")

        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#tree-container").display = False
        self.load_tree()

    # --- ACTIONS ---

    def action_cursor_down(self) -> None:
        self.query_one("#dep-tree", Tree).action_cursor_down()

    def action_cursor_up(self) -> None:
        self.query_one("#dep-tree", Tree).action_cursor_up()

    def action_expand_node(self) -> None:
        tree = self.query_one("#dep-tree", Tree)
        if tree.cursor_node:
            tree.cursor_node.expand()

    def action_collapse_node(self) -> None:
        tree = self.query_one("#dep-tree", Tree)
        node = tree.cursor_node
        if node:
            if node.is_expanded:
                node.collapse()
            elif node.parent:
                tree.select_node(node.parent)
                node.parent.collapse()

    def action_toggle_node(self) -> None:
        tree = self.query_one("#dep-tree", Tree)
        if tree.cursor_node:
            tree.cursor_node.toggle()

    def action_expand_all(self) -> None:
        if not self.dependency_tree:
            return
        expand_all(self.dependency_tree)
        self.render_tree(self.dependency_tree)

    def action_collapse_all(self) -> None:
        if not self.dependency_tree:
            return
        collapse_all(self.dependency_tree)
        self.render_tree(self.dependency_tree)

    def action_focus_search(self) -> None:
        if self.dependency_tree:
            self.query_one("#search-input", Input).focus()

    def action_clear_search(self) -> None:
        search_input = self.query_one("#search-input", Input)
        if search_input.value:
            # Triggers on_input_changed, which resets the matches
            search_input.value = ""
        self.query_one("#dep-tree", Tree).focus()

    def action_next_match(self) -> None:
        if self.matches:
            self.goto_match((self.match_index + 1) % len(self.matches))

    def action_previous_match(self) -> None:
        if self.matches:
            self.goto_match((self.match_index - 1) % len(self.matches))

    # --- EVENTS ---

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search-input":
            self.perform_search(event.value)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search-input" and self.matches:
            self.query_one("#dep-tree", Tree).focus()

    def on_tree_node_expanded(self, event: Tree.NodeExpanded) -> None:
        if event.node.data is not None:
            event.node.data.expanded = True

    def on_tree_node_collapsed(self, event: Tree.NodeCollapsed) -> None:
        if event.node.data is not None:
            event.node.data.expanded = False

    # --- LOGIC ---

    def perform_search(self, query: str) -> None:
        if not self.dependency_tree or not query.strip():
            self.clear_matches()
            return

        self.matches = search_dependencies(self.dependency_tree, query.strip())
        self.highlighted = {node_id(result.node) for result in self.matches}
        logging.debug(f"Search {query!r}: {len(self.matches)} matches")

        if not self.matches:
            self.query_one("#search-status", Label).update("[yellow]No matches found[/]")
            self.render_tree(self.dependency_tree)
            return

        self.goto_match(0)

    def clear_matches(self) -> None:
        had_matches = bool(self.highlighted)
        self.matches = []
        self.match_index = 0
        self.highlighted = set()
        self.query_one("#search-status", Label).update("")
        if had_matches and self.dependency_tree:
            self.render_tree(self.dependency_tree)

    def goto_match(self, index: int) -> None:
        self.match_index = index
        result = self.matches[index]

        reveal(result.path)
        self.render_tree(self.dependency_tree)

        status = f"[b]{index + 1}/{len(self.matches)}[/] {escape(format_path(result.path))}"
        self.query_one("#search-status", Label).update(status)

        tree_node = self._tree_nodes.get(id(result.node))
        if tree_node is not None:
            self.call_after_refresh(self._move_cursor_to, tree_node)

    def _move_cursor_to(self, tree_node) -> None:
        tree = self.query_one("#dep-tree", Tree)
        tree.move_cursor(tree_node)
        tree.scroll_to_node(tree_node)

    def update_status(self, msg: str) -> None:
        self.query_one("#status-label", Label).update(msg)

    def update_dashboard_ui(self) -> None:
        self.query_one("#lbl-project", Label).update(f"[b]Project:[/b] [cyan]{escape(self.source_name)}[/]")
        self.query_one("#lbl-total", Label).update(f"[b]Total:[/b] [blue]{self.stats.total}[/]")
        self.query_one("#lbl-direct", Label).update(f"[b]Direct:[/b] [green]{self.stats.direct}[/]")
        self.query_one("#lbl-transitive", Label).update(f"[b]Transitive:[/b] [green]{self.stats.transitive}[/]")
        self.query_one("#lbl-omitted", Label).update(f"[b]Omitted:[/b] [yellow]{self.stats.omitted}[/]")
        self.query_one("#lbl-depth", Label).update(f"[b]Depth:[/b] {self.stats.max_depth}")

    def show_error(self, message: str) -> None:
        self.query_one("#status-label", Label).update(f"[bold red]Fatal Error:[/]\n{escape(message)}")
        self.query_one(LoadingIndicator).display = False

    @work(exclusive=True)
    async def load_tree(self) -> None:
        try:
            logging.info("Worker started.")
            self.update_status("Detecting project...")

            source = detect_source(self.report_path, verbose=self.verbose_maven)
            if not source:
                raise Exception("No pom.xml or report file found.")

            self.source_name = source.name
            self.update_dashboard_ui()

            logging.info(f"Source: {source.name}")
            self.update_status(f"Reading dependency tree ({source.name})...")

            # mvn can take minutes, keep the event loop free
            root_node = await asyncio.to_thread(source.get_dependencies)
            if root_node is None:
                raise Exception("No dependency:tree output found.")

            self.dependency_tree = root_node
            if not root_node.is_synthetic_root:
                self.source_name = root_node.display_name
            self.stats = calculate_stats(root_node)

            self.update_dashboard_ui()
            self.render_tree(root_node)
            self.query_one("#dep-tree", Tree).focus()

        except Exception as e:
            logging.exception("Fatal error in worker:")
            self.show_error(str(e))

    def tree_label(self, node: DependencyNode) -> str:
        label = node_label(node)

        child_count = len(node.children)
        if child_count > 0:
            label += f" [dim]↳ {child_count}[/]"

        if node_id(node) in self.highlighted:
            label = f"[reverse]{label}[/reverse]"
        return label

    def render_tree(self, root_node: DependencyNode) -> None:
        tree = self.query_one("#dep-tree", Tree)
        tree.clear()
        self._tree_nodes = {}

        tree.root.data = root_node
        tree.root.label = self.tree_label(root_node)
        self._tree_nodes[id(root_node)] = tree.root

        def add_nodes(tree_node, data_node):
            for child in data_node.children:
                if child.children:
                    new_node = tree_node.add(self.tree_label(child), expand=child.expanded, data=child)
                    add_nodes(new_node, child)
                else:
                    new_node = tree_node.add_leaf(self.tree_label(child), data=child)
                self._tree_nodes[id(child)] = new_node

        add_nodes(tree.root, root_node)

        if root_node.expanded:
            tree.root.expand()
        else:
            tree.root.collapse()

        self.query_one("#loading-container").display = False
        self.query_one("#tree-container").display = True
