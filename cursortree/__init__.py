"""CursorTree - Mutable Tree with a Movable Cursor.

CursorTree provides a general-purpose, in-memory tree: every node holds a
value, one parent and an ordered list of children. A movable ``current``
cursor drives structural changes, and iterators walk the same structure in
pre-order, post-order, breadth-first or (binary trees) in-order.

Quick start:
━━━━━━━━━━━━
    from cursortree import Tree, TraversalOrder

    tree = Tree("A")
    tree.add_all_children(["B", "C"])
    tree.get_child(0)          # cursor moves to "B"
    tree.add_child("D")
    list(tree.tree_iterator(TraversalOrder.POST_ORDER))
━━━━━━━━━━━━
"""

import logging

__version__ = "0.1.0"

from .config import TraversalOrder, TreeConfig, parse_order
from .exceptions import (
    TreeError,
    OutOfRangeError,
    NoSuchElementError,
    NullRejectedError,
    UnsupportedOperationError,
    InvalidConfigError,
)
from .core import Edge, Node
from .tree import AbstractTree, Tree, KaryTree, BinaryTree
from .iterator import TreeIterator, IteratorState
from .api import (
    traverse_tree,
    collect_values,
    count_nodes,
    find_values,
    get_leaf_values,
    get_tree_paths,
    get_tree_stats,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Config
    "TraversalOrder",
    "TreeConfig",
    "parse_order",
    # Errors
    "TreeError",
    "OutOfRangeError",
    "NoSuchElementError",
    "NullRejectedError",
    "UnsupportedOperationError",
    "InvalidConfigError",
    # Structure
    "Edge",
    "Node",
    "AbstractTree",
    "Tree",
    "KaryTree",
    "BinaryTree",
    "TreeIterator",
    "IteratorState",
    # API
    "traverse_tree",
    "collect_values",
    "count_nodes",
    "find_values",
    "get_leaf_values",
    "get_tree_paths",
    "get_tree_stats",
]
