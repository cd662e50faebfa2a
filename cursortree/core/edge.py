"""Edge abstraction for CursorTree.

An Edge records one parent/child relationship. It carries no state beyond the
two endpoints and lives exactly as long as that relationship.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .node import Node


@dataclass(frozen=True, eq=False)
class Edge:
    """Immutable directed link from a parent node to one of its children.

    Edges compare by identity: two edges between the same pair of nodes are
    still distinct relationships.
    """

    parent: 'Node'
    child: 'Node'

    def __repr__(self) -> str:
        return f"Edge({self.parent.value!r} -> {self.child.value!r})"
