import re
from dataclasses import dataclass, field
from typing import List, Optional

ROOT_NAME = "Root"
DEFAULT_SCOPE = "compile"

_UNSAFE_ID_CHARS = re.compile(r"[^a-zA-Z0-9:-]")


@dataclass
class DependencyNode:
    group_id: str
    artifact_id: str
    type: str = ""
    version: str = ""
    scope: str = DEFAULT_SCOPE
    classifier: str = ""
    full_name: str = ""
    level: int = 0
    children: List['DependencyNode'] = field(default_factory=list)

    # Conflict resolution
    is_omitted: bool = False
    omitted_reason: str = ""

    # UI
    expanded: bool = True

    # Only used to rebuild paths, never for ownership
    parent: Optional['DependencyNode'] = field(default=None, repr=False, compare=False)

    @classmethod
    def synthetic_root(cls) -> 'DependencyNode':
        return cls("", "", scope="", level=-1)

    @property
    def is_synthetic_root(self) -> bool:
        return self.level < 0

    @property
    def display_name(self) -> str:
        if self.is_synthetic_root:
            return ROOT_NAME
        return f"{self.group_id}:{self.artifact_id}"

    def add_child(self, child: 'DependencyNode') -> None:
        child.parent = self
        self.children.append(child)


def node_id(node: DependencyNode) -> str:
    """Stable key used to correlate nodes across re-renders."""
    raw = f"{node.group_id or ''}:{node.artifact_id or ''}:{node.version or ''}:{node.scope or ''}"
    return _UNSAFE_ID_CHARS.sub("_", raw)
