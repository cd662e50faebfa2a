"""Test fixtures for CursorTree consumers.

These fixtures build trees from compact literals and give controlled access
to internal structure for assertions, without making node handles part of the
public API.
"""

from typing import Any, List, Optional, Set, Tuple, Type

from ..tree import Tree


def build_tree(shape: Any, tree_class: Type[Tree] = Tree, **kwargs) -> Tree:
    """Build a tree from a nested literal.

    A node is written either as a bare value (a leaf) or as a
    ``(value, [children...])`` tuple.

    Example:
        tree = build_tree(("A", ["B", ("C", ["D", "E"])]))
        # A
        # +- B
        # +- C
        #    +- D
        #    +- E

    Args:
        shape: Nested literal describing the tree
        tree_class: Tree class to instantiate
        **kwargs: Passed to the tree constructor (policies)

    Returns:
        The tree, with its cursor on the root

    Raises:
        ValueError: If a child could not be added (full node, or a duplicate
            that evicted the node it was added under)
        UnsupportedOperationError: If a duplicate would evict the root
    """
    value, children = _split_shape(shape)
    tree = tree_class(value, **kwargs)
    _add_children(tree, children)
    tree.to_root()
    return tree


def _split_shape(shape: Any) -> Tuple[Any, List[Any]]:
    if isinstance(shape, tuple) and len(shape) == 2 and isinstance(shape[1], list):
        return shape[0], shape[1]
    return shape, []


def _add_children(tree: Tree, children: List[Any]) -> None:
    for child in children:
        value, grandchildren = _split_shape(child)
        if not tree.add_child(value):
            raise ValueError(f"Could not add {value!r} under {tree.get()!r}")
        if grandchildren:
            tree.get_child(tree.get_children_count() - 1)
            _add_children(tree, grandchildren)
            tree.get_parent()


class TreeTestHelper:
    """Public test fixture for structural verification.

    Example:
        tree = build_tree(("A", ["B", "C"]))
        helper = TreeTestHelper(tree)

        assert helper.snapshot() == ("A", [("B", []), ("C", [])])
        assert helper.check_invariants() == []
    """

    def __init__(self, tree: Tree):
        """Initialize with the tree under test.

        Args:
            tree: Tree to inspect
        """
        self._tree = tree

    def snapshot(self, from_current: bool = False) -> Tuple[Any, list]:
        """Return the structure as nested ``(value, [children])`` tuples.

        Args:
            from_current: Snapshot the subtree under the cursor instead of
                the whole tree
        """
        start = self._tree._current if from_current else self._tree._root
        return self._snapshot_node(start)

    def _snapshot_node(self, node) -> Tuple[Any, list]:
        return (node.value, [self._snapshot_node(child) for child in node.children])

    def current_path(self) -> Tuple[Any, ...]:
        """Values from the root down to the cursor."""
        path = []
        node = self._tree._current
        while node is not None:
            path.append(node.value)
            node = node.get_parent()
        return tuple(reversed(path))

    def node_count(self) -> int:
        return sum(1 for _ in self._tree._root.iter_subtree())

    def check_invariants(self) -> List[str]:
        """Verify the node graph is a well-formed tree.

        Checks that:
        - the root has no parent
        - every child's parent edge points back at the node listing it
        - every reachable node is marked as attached to the root
        - no node is listed twice
        - the cursor is reachable from the root

        Returns:
            List of problems found (empty if the tree is consistent)
        """
        problems = []
        root = self._tree._root
        if root.get_parent() is not None:
            problems.append("root has a parent")

        seen: Set[int] = set()
        stack = [root]
        while stack:
            node = stack.pop()
            if id(node) in seen:
                problems.append(f"node {node.value!r} is reachable twice")
                continue
            seen.add(id(node))
            for index, child in enumerate(node.children):
                if child.get_parent() is not node:
                    problems.append(f"child {child.value!r} does not point at {node.value!r}")
                elif child.index_in_parent() != index:
                    problems.append(f"child {child.value!r} reports the wrong index")
                elif not child.is_attached(root):
                    problems.append(f"child {child.value!r} is not marked as attached")
                stack.append(child)

        if id(self._tree._current) not in seen:
            problems.append("cursor is not reachable from the root")
        return problems

    def find_path(self, value: Any) -> Optional[Tuple[int, ...]]:
        """Return the child-index path from the root to the first node holding value."""
        stack = [(self._tree._root, ())]
        while stack:
            node, path = stack.pop()
            if node.value == value:
                return path
            children = node.children
            for index in reversed(range(len(children))):
                stack.append((children[index], path + (index,)))
        return None
