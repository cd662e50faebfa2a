"""Node abstraction for CursorTree.

A Node owns the ordered list of edges to its children and keeps a single
non-owning edge back to its parent. The parent edge only answers "who is my
parent" and "where am I among my siblings"; it is not kept consistent when
the node is removed, so a removed node still points at its former parent
while that parent no longer lists it.

Each node also records the root it is currently reachable from. Linking,
removing and re-rooting update that record for the whole moved subtree, so
asking whether a node still belongs to a given tree is a single comparison.
"""

from typing import Any, Iterable, Iterator, List, Optional, Tuple

from ..exceptions import OutOfRangeError
from .edge import Edge


class Node:
    """A single element of a tree: a value plus structural links.

    The child edge list is allocated lazily, leaves created by the tree never
    pay for an empty list.
    """

    __slots__ = ('value', '_parent_edge', '_child_edges', '_tree_root')

    def __init__(self, value: Any, parent: Optional['Node'] = None):
        """Create a node.

        Args:
            value: Data held by the node
            parent: Parent node, recorded as a back-reference only. The parent
                does not list this node until ``parent.add_child`` is called.
        """
        self.value = value
        self._parent_edge: Optional[Edge] = None if parent is None else Edge(parent, self)
        self._child_edges: Optional[List[Edge]] = None
        # Root this node is reachable from; None while not listed by a parent
        self._tree_root: Optional['Node'] = self if parent is None else None

    # Values and links

    def get_value(self) -> Any:
        """Return the data held by this node."""
        return self.value

    @property
    def parent_edge(self) -> Optional[Edge]:
        """Back-reference to the parent, None for a root."""
        return self._parent_edge

    def get_parent(self) -> Optional['Node']:
        """Return the parent node, or None if this node is a root."""
        if self._parent_edge is None:
            return None
        return self._parent_edge.parent

    @property
    def children(self) -> Tuple['Node', ...]:
        """Children in sibling order."""
        if not self._child_edges:
            return ()
        return tuple(edge.child for edge in self._child_edges)

    @property
    def child_count(self) -> int:
        if self._child_edges is None:
            return 0
        return len(self._child_edges)

    def get_child(self, index: int) -> 'Node':
        """Return the child at ``index``.

        Raises:
            OutOfRangeError: If there are no children or index is not in
                ``[0, child_count)``
        """
        self._check_index(index)
        return self._child_edges[index].child

    # Structure

    def add_child(self, child: 'Node') -> None:
        """Append ``child`` as the last child.

        No bound is enforced here; the owning tree applies its policies first.
        """
        self.insert_child(self.child_count, child)

    def add_all_children(self, children: Iterable['Node']) -> None:
        """Append each node in ``children``, in order, after the existing children."""
        if self._child_edges is None:
            self._child_edges = []
        for child in children:
            self.add_child(child)

    def insert_child(self, index: int, child: 'Node') -> None:
        """Insert ``child`` so that it ends up at position ``index``.

        Raises:
            OutOfRangeError: If index is not in ``[0, child_count]``
        """
        if index < 0 or index > self.child_count:
            raise OutOfRangeError(
                f"Insert index {index} out of range for {self.child_count} children"
            )
        if child.index_in_parent() is not None:
            raise ValueError("Node is already listed as a child of another node")
        if self._child_edges is None:
            self._child_edges = []
        edge = Edge(self, child)
        child._parent_edge = edge
        self._child_edges.insert(index, edge)
        child._set_tree_root(self._tree_root)

    def remove_child(self, index: int) -> 'Node':
        """Remove the child at ``index`` together with its whole subtree.

        The removed node keeps its stale parent edge; it is simply no longer
        reachable from this node, and the whole subtree stops being attached.

        Returns:
            The removed child

        Raises:
            OutOfRangeError: Under the same conditions as ``get_child``
        """
        self._check_index(index)
        child = self._child_edges.pop(index).child
        child._set_tree_root(None)
        return child

    def detach(self) -> Optional[int]:
        """Remove this node from its parent's child list, if it is listed there.

        Returns:
            The index the node occupied, or None if it was not attached
        """
        index = self.index_in_parent()
        if index is not None:
            self._parent_edge.parent.remove_child(index)
        return index

    def make_root(self) -> None:
        """Drop the parent back-reference so the node can root a new tree."""
        self._parent_edge = None
        self._set_tree_root(self)

    def _set_tree_root(self, root: Optional['Node']) -> None:
        for node in self.iter_subtree():
            node._tree_root = root

    def _check_index(self, index: int) -> None:
        if self._child_edges is None:
            raise OutOfRangeError(f"Child index {index} out of range: node has no children")
        if index < 0 or index >= len(self._child_edges):
            raise OutOfRangeError(
                f"Child index {index} out of range for {len(self._child_edges)} children"
            )

    # Positional queries

    def index_in_parent(self) -> Optional[int]:
        """Return this node's index among its siblings.

        Returns:
            The index, or None for a root or a node whose parent no longer
            lists it
        """
        edge = self._parent_edge
        if edge is None or edge.parent._child_edges is None:
            return None
        for index, sibling_edge in enumerate(edge.parent._child_edges):
            if sibling_edge is edge:
                return index
        return None

    def is_attached(self, root: Optional['Node'] = None) -> bool:
        """Check whether this node is still reachable from a root.

        Args:
            root: If given, the node must be reachable from this particular
                root rather than from any root

        Returns:
            True if every edge from here up to the root is still listed
        """
        if root is None:
            return self._tree_root is not None
        return self._tree_root is root

    def get_root(self) -> 'Node':
        """Follow parent edges to the topmost node."""
        node = self
        while node._parent_edge is not None:
            node = node._parent_edge.parent
        return node

    def is_root(self) -> bool:
        return self._parent_edge is None

    def is_leaf(self) -> bool:
        return self.child_count == 0

    def depth(self) -> int:
        """Distance from this node up to the root (root = 0)."""
        depth = 0
        node = self
        while node._parent_edge is not None:
            depth += 1
            node = node._parent_edge.parent
        return depth

    def height(self) -> int:
        """Longest distance from this node down to a leaf (leaf = 0)."""
        height = -1
        level = [self]
        while level:
            height += 1
            level = [child for node in level for child in node.children]
        return height

    # Subtree helpers

    def iter_subtree(self) -> Iterator['Node']:
        """Yield this node and all its descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def copy(self) -> 'Node':
        """Return a deep structural copy of the subtree rooted here.

        Values are shared, not copied; the copy's root has no parent.
        """
        root = Node(self.value)
        stack = [(self, root)]
        while stack:
            source, target = stack.pop()
            for child in source.children:
                duplicate = Node(child.value)
                target.add_child(duplicate)
                stack.append((child, duplicate))
        return root

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(value={self.value!r}, children={self.child_count})"
