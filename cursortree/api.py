"""High-level API for CursorTree.

This module provides simple, functional interfaces for common read-only
questions about a tree. They wrap TreeIterator so callers do not have to
drive the iterator by hand, and none of them moves the tree's cursor.
"""

from typing import Any, Callable, Dict, Iterator, List, Tuple, Union

from .config import TraversalOrder, parse_order
from .iterator import TreeIterator
from .tree import AbstractTree


def _iterator(tree: AbstractTree,
              order: Union[TraversalOrder, str],
              from_current: bool) -> TreeIterator:
    order = parse_order(order)
    if from_current:
        return tree.tree_iterator_at(order)
    return tree.tree_iterator(order)


def traverse_tree(
    tree: AbstractTree,
    order: Union[TraversalOrder, str] = TraversalOrder.PRE_ORDER,
    from_current: bool = False,
) -> Iterator[Any]:
    """Simple interface for tree traversal.

    Args:
        tree: Tree to walk
        order: Traversal order (pre, post, bfs, in)
        from_current: Walk only the subtree under the tree's cursor

    Yields:
        Node values in traversal order

    Example:
        >>> tree = Tree("A")
        >>> tree.add_all_children(["B", "C"])
        True
        >>> list(traverse_tree(tree, "bfs"))
        ['A', 'B', 'C']
    """
    yield from _iterator(tree, order, from_current)


def collect_values(
    tree: AbstractTree,
    order: Union[TraversalOrder, str] = TraversalOrder.PRE_ORDER,
    from_current: bool = False,
) -> List[Any]:
    """Collect every value into a list, in traversal order."""
    return list(traverse_tree(tree, order, from_current))


def count_nodes(tree: AbstractTree, from_current: bool = False) -> int:
    """Count the nodes of the tree (or of the subtree under the cursor)."""
    return sum(1 for _ in traverse_tree(tree, from_current=from_current))


def find_values(
    tree: AbstractTree,
    predicate: Callable[[Any], bool],
    order: Union[TraversalOrder, str] = TraversalOrder.PRE_ORDER,
) -> List[Any]:
    """Find all values matching a predicate.

    Args:
        tree: Tree to search
        predicate: Function returning True for wanted values
        order: Order in which matches are reported

    Returns:
        Matching values in traversal order
    """
    return [value for value in traverse_tree(tree, order) if predicate(value)]


def get_leaf_values(tree: AbstractTree, from_current: bool = False) -> List[Any]:
    """Get the values of all leaves, left to right."""
    iterator = _iterator(tree, TraversalOrder.PRE_ORDER, from_current)
    leaves = []
    while iterator.has_next():
        value = iterator.next()
        if iterator.is_leaf():
            leaves.append(value)
    return leaves


def get_tree_paths(tree: AbstractTree) -> List[Tuple[Any, ...]]:
    """Get the root-to-node value path of every node, in pre-order.

    Returns:
        One tuple per node, starting with the root value
    """
    iterator = _iterator(tree, TraversalOrder.PRE_ORDER, False)
    paths = []
    path: List[Any] = []
    while iterator.has_next():
        value = iterator.next()
        del path[iterator.depth():]
        path.append(value)
        paths.append(tuple(path))
    return paths


def get_tree_stats(tree: AbstractTree) -> Dict[str, int]:
    """Get statistics about a tree.

    Returns:
        Dictionary with:
        - node_count: Total number of nodes
        - leaf_count: Number of leaves
        - height: Height of the root (0 for a single node)
        - max_depth: Deepest node's depth (equal to height)
        - max_branching: Largest number of children on any node
    """
    iterator = _iterator(tree, TraversalOrder.PRE_ORDER, False)
    stats = {
        'node_count': 0,
        'leaf_count': 0,
        'height': 0,
        'max_depth': 0,
        'max_branching': 0,
    }

    while iterator.has_next():
        iterator.next()
        stats['node_count'] += 1
        children = iterator.get_children_count()
        if children == 0:
            stats['leaf_count'] += 1
        stats['max_branching'] = max(stats['max_branching'], children)
        stats['max_depth'] = max(stats['max_depth'], iterator.depth())

    stats['height'] = stats['max_depth']
    return stats
