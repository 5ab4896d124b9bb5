from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from mvntree.core.model import DependencyNode


@dataclass
class TreeStats:
    total: int = 0
    direct: int = 0
    transitive: int = 0
    max_depth: int = 0
    omitted: int = 0
    scopes: Dict[str, int] = field(default_factory=dict)

    def sorted_scopes(self) -> List[Tuple[str, int]]:
        """Scopes ordered by how many dependencies use them."""
        return sorted(self.scopes.items(), key=lambda item: item[1], reverse=True)


def calculate_stats(tree: Optional[DependencyNode]) -> TreeStats:
    stats = TreeStats()
    if tree is not None:
        _collect(tree, 0, stats)
    return stats


def _collect(node: DependencyNode, depth: int, stats: TreeStats) -> None:
    if not node.is_synthetic_root:
        stats.total += 1
        stats.max_depth = max(stats.max_depth, depth)

        if depth == 1:
            stats.direct += 1
        elif depth > 1:
            stats.transitive += 1

        if node.is_omitted:
            stats.omitted += 1

        if node.scope:
            stats.scopes[node.scope] = stats.scopes.get(node.scope, 0) + 1

    for child in node.children:
        _collect(child, depth + 1, stats)


def expand_all(node: DependencyNode) -> None:
    node.expanded = True
    for child in node.children:
        expand_all(child)


def collapse_all(node: DependencyNode) -> None:
    node.expanded = False
    for child in node.children:
        collapse_all(child)


def reveal(path: Iterable[DependencyNode]) -> None:
    # Opens every ancestor so the last node of the path becomes visible
    for node in path:
        if node.children:
            node.expanded = True
