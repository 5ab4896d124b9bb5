from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from mvntree.core.model import DEFAULT_SCOPE, DependencyNode
from mvntree.core.search import SearchResult, format_path
from mvntree.core.summary import TreeStats


def node_label(node: DependencyNode) -> str:
    safe_name = escape(node.display_name)
    safe_ver = escape(node.version)

    scope_suffix = ""
    if node.scope and node.scope != DEFAULT_SCOPE:
        scope_suffix = f" [magenta]{escape(node.scope)}[/]"

    if node.is_omitted:
        reason = escape(node.omitted_reason)
        return f"[dim strike]{safe_name}[/] [dim]{safe_ver}{scope_suffix} (omitted: {reason})[/]"

    return f"[green]{safe_name}[/] [dim]{safe_ver}[/]{scope_suffix}"


def build_rich_tree(root: DependencyNode) -> Tree:
    tree = Tree(node_label(root), guide_style="dim")

    def add_nodes(branch, data_node):
        for child in data_node.children:
            add_nodes(branch.add(node_label(child)), child)

    add_nodes(tree, root)
    return tree


def print_tree(console: Console, root: DependencyNode) -> None:
    console.print(build_rich_tree(root))


def print_search(console: Console, results: List[SearchResult]) -> None:
    if not results:
        console.print("[yellow]No matches found[/]")
        return

    for result in results:
        console.print(node_label(result.node))
        console.print(f"  [dim]{escape(format_path(result.path))}[/]")

    console.print(f"\n[b]{len(results)}[/] match(es)")


def print_stats(console: Console, stats: TreeStats) -> None:
    table = Table(title="Statistics", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right", style="cyan")

    table.add_row("Total Dependencies", str(stats.total))
    table.add_row("Direct Dependencies", str(stats.direct))
    table.add_row("Transitive Dependencies", str(stats.transitive))
    table.add_row("Max Depth", str(stats.max_depth))
    table.add_row("Omitted Dependencies", str(stats.omitted))
    table.add_row("Scopes", str(len(stats.scopes)))

    for scope, count in stats.sorted_scopes():
        table.add_row(f"  {escape(scope)}", str(count))

    console.print(table)
