"""Core structures for CursorTree.

This package contains the node graph (edges and nodes) and the traversal
strategies that walk it.
"""

from .edge import Edge
from .node import Node
from .traverser import (
    TreeTraverser,
    DepthFirstPreOrderTraverser,
    DepthFirstPostOrderTraverser,
    BreadthFirstTraverser,
    InOrderTraverser,
    create_traverser,
)

__all__ = [
    "Edge",
    "Node",
    "TreeTraverser",
    "DepthFirstPreOrderTraverser",
    "DepthFirstPostOrderTraverser",
    "BreadthFirstTraverser",
    "InOrderTraverser",
    "create_traverser",
]
