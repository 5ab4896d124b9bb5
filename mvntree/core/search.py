from typing import List, NamedTuple, Optional, Sequence

from mvntree.core.model import ROOT_NAME, DependencyNode

PATH_SEPARATOR = " → "


class SearchResult(NamedTuple):
    node: DependencyNode
    path: List[DependencyNode]


def search_dependencies(tree: Optional[DependencyNode], query: str) -> List[SearchResult]:
    """
    Depth-first, pre-order search on `display_name` (case-insensitive).
    Each result carries the nodes from `tree` down to the match, both included.
    """
    if tree is None:
        return []

    results: List[SearchResult] = []
    _search_node(tree, query.lower(), results, [])
    return results


def _search_node(node: DependencyNode, search_term: str, results: List[SearchResult], path: List[DependencyNode]) -> None:
    current_path = path + [node]

    if search_term in node.display_name.lower():
        results.append(SearchResult(node, current_path))

    for child in node.children:
        _search_node(child, search_term, results, current_path)


def format_path(path: Sequence[DependencyNode]) -> str:
    return PATH_SEPARATOR.join(
        node.display_name for node in path if node.display_name != ROOT_NAME
    )
