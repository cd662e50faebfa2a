"""Tree abstractions for CursorTree.

A tree exposes a single movable reference to the ``current`` node. Reads such
as ``get_child``, ``get_parent`` and the sibling moves relocate it; every
structural change is made relative to it. ``split`` also moves it, to the
parent of the node being split off.

The tree enforces its TreeConfig on every write:

- ``accepts_null``: None values raise NullRejectedError
- ``allows_duplicates``: when False, a write of a value already present
  elsewhere in the tree evicts the target node instead: the overwritten
  node for ``set``, the current node for the add family (see
  ``_evict_if_duplicate``)
- ``max_children``: a full node makes add operations return False
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any, Iterable, Optional

from .config import TraversalOrder, TreeConfig
from .core.node import Node
from .exceptions import (
    InvalidConfigError,
    NoSuchElementError,
    NullRejectedError,
    OutOfRangeError,
    UnsupportedOperationError,
)
from .iterator import TreeIterator

logger = logging.getLogger(__name__)


class AbstractTree(ABC):
    """Abstract interface for cursor-based trees.

    Reads and cursor moves must be implemented by every tree. Structural
    changes are optional: the defaults raise UnsupportedOperationError, and
    ``supports_modification`` reports whether a tree overrides them.

    Python collection behaviour (``iter``, ``len``, ``in``) is built on
    ``tree_iterator`` so subclasses only need to provide traversal.
    """

    # Cursor reads

    @abstractmethod
    def get_root(self) -> Any:
        """Return the root's value without moving the cursor."""
        pass

    @abstractmethod
    def get(self) -> Any:
        """Return the current node's value without moving the cursor."""
        pass

    @abstractmethod
    def get_child(self, index: int) -> Any:
        """Move the cursor to the child at ``index`` and return its value."""
        pass

    @abstractmethod
    def get_parent(self) -> Any:
        """Move the cursor to the parent and return its value."""
        pass

    @abstractmethod
    def get_next_sibling(self) -> Any:
        """Move the cursor to the next sibling and return its value."""
        pass

    @abstractmethod
    def get_previous_sibling(self) -> Any:
        """Move the cursor to the previous sibling and return its value."""
        pass

    # Structural queries

    @abstractmethod
    def is_root(self) -> bool:
        pass

    @abstractmethod
    def is_leaf(self) -> bool:
        pass

    @abstractmethod
    def get_children_count(self) -> int:
        pass

    @abstractmethod
    def depth(self) -> int:
        pass

    @abstractmethod
    def height(self) -> int:
        pass

    def level(self) -> int:
        """1-based level of the current node (root = 1)."""
        return self.depth() + 1

    @abstractmethod
    def max_children(self) -> int:
        """Configured child bound, 0 or negative when unbounded."""
        pass

    @abstractmethod
    def subtree(self) -> 'AbstractTree':
        pass

    # Traversal

    @abstractmethod
    def tree_iterator(self, order=None) -> 'TreeIterator':
        """Iterator over the whole tree, starting at the root."""
        pass

    @abstractmethod
    def tree_iterator_at(self, order=None) -> 'TreeIterator':
        """Iterator over the subtree rooted at the current node."""
        pass

    def __iter__(self):
        return self.tree_iterator()

    def __len__(self) -> int:
        return sum(1 for _ in self.tree_iterator())

    def __contains__(self, value: Any) -> bool:
        return any(item == value for item in self.tree_iterator())

    # Capability flags

    def supports_modification(self) -> bool:
        """Check if this tree supports structural changes.

        Returns:
            True if the mutators below are implemented
        """
        return False

    # Structural changes - only required if supports_modification() returns True

    def set(self, value: Any) -> Any:
        raise UnsupportedOperationError(f"{self.__class__.__name__} does not support set")

    def add_child(self, value: Any) -> bool:
        raise UnsupportedOperationError(f"{self.__class__.__name__} does not support add_child")

    def insert_child(self, index: int, value: Any) -> bool:
        raise UnsupportedOperationError(f"{self.__class__.__name__} does not support insert_child")

    def add_all_children(self, values: Iterable[Any]) -> bool:
        raise UnsupportedOperationError(f"{self.__class__.__name__} does not support add_all_children")

    def insert_all_children(self, index: int, values: Iterable[Any]) -> bool:
        raise UnsupportedOperationError(
            f"{self.__class__.__name__} does not support insert_all_children"
        )

    def remove_child(self, value: Any) -> bool:
        raise UnsupportedOperationError(f"{self.__class__.__name__} does not support remove_child")

    def remove_child_at(self, index: int) -> bool:
        raise UnsupportedOperationError(f"{self.__class__.__name__} does not support remove_child_at")

    def remove_all_children(self, values: Iterable[Any]) -> bool:
        raise UnsupportedOperationError(
            f"{self.__class__.__name__} does not support remove_all_children"
        )

    def remove_all_descendants(self, values: Iterable[Any]) -> bool:
        raise UnsupportedOperationError(
            f"{self.__class__.__name__} does not support remove_all_descendants"
        )

    def split(self) -> 'AbstractTree':
        raise UnsupportedOperationError(f"{self.__class__.__name__} does not support split")


class Tree(AbstractTree):
    """General mutable tree backed by a Node graph.

    Any node may have any number of children unless ``max_children`` bounds
    it. The tree owns every node reachable from its root; the cursor is just
    a reference into that graph.

    Not thread-safe. Mutating the tree directly while one of its iterators is
    in use is a precondition violation; changes made through the iterator
    itself are supported.

    Example:
        >>> tree = Tree("A")
        >>> tree.add_child("B")
        True
        >>> tree.add_child("C")
        True
        >>> tree.get_child(1)
        'C'
    """

    def __init__(self,
                 root: Any = None,
                 accepts_null: bool = True,
                 allows_duplicates: bool = True,
                 max_children: int = 0,
                 config: Optional[TreeConfig] = None):
        """Create a tree holding a single root node.

        Args:
            root: Value of the root node
            accepts_null: Whether None may be stored
            allows_duplicates: Whether equal values may coexist
            max_children: Children allowed per node, <= 0 for unbounded
            config: Complete TreeConfig; overrides the three flags above

        Raises:
            InvalidConfigError: If the configuration does not validate
            NullRejectedError: If root is None and nulls are not accepted
        """
        if config is None:
            config = TreeConfig(
                accepts_null=accepts_null,
                allows_duplicates=allows_duplicates,
                max_children=max_children,
            )

        config_errors = config.validate()
        if config_errors:
            raise InvalidConfigError(f"Invalid configuration: {'; '.join(config_errors)}")

        self._config = config
        self._check_value(root)
        self._root = Node(root)
        self._current = self._root

    @classmethod
    def _from_node(cls, node: Node, config: TreeConfig) -> 'Tree':
        """Wrap an existing root node without re-running value checks."""
        tree = cls.__new__(cls)
        tree._config = config
        tree._root = node
        tree._current = node
        return tree

    @property
    def config(self) -> TreeConfig:
        return self._config

    # Cursor reads

    def get_root(self) -> Any:
        return self._root.value

    def get(self) -> Any:
        return self._current.value

    def get_child(self, index: int) -> Any:
        """Move the cursor to the child at ``index``.

        Raises:
            OutOfRangeError: If the current node has no child at ``index``
        """
        self._current = self._current.get_child(index)
        return self._current.value

    def get_parent(self) -> Any:
        """Move the cursor to the parent.

        Raises:
            NoSuchElementError: If the cursor is on the root
        """
        if self._current is self._root:
            raise NoSuchElementError("The root node has no parent")
        self._current = self._current.get_parent()
        return self._current.value

    def get_next_sibling(self) -> Any:
        """Move the cursor to the next sibling.

        Raises:
            NoSuchElementError: If the cursor is on the root or on the last child
        """
        self._current = self._sibling_of(self._current, 1)
        return self._current.value

    def get_previous_sibling(self) -> Any:
        """Move the cursor to the previous sibling.

        Raises:
            NoSuchElementError: If the cursor is on the root or on the first child
        """
        self._current = self._sibling_of(self._current, -1)
        return self._current.value

    def to_root(self) -> Any:
        """Move the cursor back to the root and return its value."""
        self._current = self._root
        return self._root.value

    def _sibling_of(self, node: Node, offset: int) -> Node:
        sibling = self._find_sibling(node, offset)
        if sibling is None:
            direction = "next" if offset > 0 else "previous"
            raise NoSuchElementError(f"Node {node.value!r} has no {direction} sibling")
        return sibling

    def _find_sibling(self, node: Node, offset: int) -> Optional[Node]:
        if node is self._root:
            return None
        parent = node.get_parent()
        index = node.index_in_parent()
        if parent is None or index is None:
            return None
        target = index + offset
        if target < 0 or target >= parent.child_count:
            return None
        return parent.get_child(target)

    # Structural changes

    def supports_modification(self) -> bool:
        return True

    def set(self, value: Any) -> Any:
        """Replace the current node's value.

        With duplicates disallowed and ``value`` already held by another
        node, the current node and its subtree are evicted instead, and the
        cursor moves to the evicted node's parent.

        Returns:
            The previous value of the current node

        Raises:
            NullRejectedError: If value is None and nulls are not accepted
            UnsupportedOperationError: If the eviction would remove the root
        """
        return self._set_at(self._current, value)

    def add_child(self, value: Any) -> bool:
        """Append a child holding ``value`` to the current node.

        See ``insert_child``.
        """
        return self.insert_child(self._current.child_count, value)

    def insert_child(self, index: int, value: Any) -> bool:
        """Insert a child holding ``value`` at ``index`` under the current node.

        With duplicates disallowed and ``value`` already in the tree, nothing
        is added: the current node and its subtree are evicted instead, as
        with ``set``, and the cursor moves to the evicted node's parent.

        Returns:
            True if the child was added; False if the node is full or the
            value is a disallowed duplicate

        Raises:
            NullRejectedError: If value is None and nulls are not accepted
            OutOfRangeError: If index is negative, past the end of the child
                list, or past ``max_children`` on a bounded tree
            UnsupportedOperationError: If the eviction would remove the root
        """
        self._check_value(value)
        self._check_insert_index(index)

        if not self._config.has_room(self._current.child_count):
            logger.debug("Node %r is full (%d children)", self._current.value,
                         self._config.max_children)
            return False

        if self._evict_if_duplicate(value, self._current):
            return False

        self._current.insert_child(index, Node(value))
        logger.debug("Added child %r under %r at %d", value, self._current.value, index)
        return True

    def add_all_children(self, values: Iterable[Any]) -> bool:
        """Append each value as a new child of the current node.

        See ``insert_all_children``.
        """
        return self.insert_all_children(self._current.child_count, values)

    def insert_all_children(self, index: int, values: Iterable[Any]) -> bool:
        """Insert each value as a new child of the current node, from ``index``.

        ``values`` is read once and never modified. A tree argument
        contributes only its root value, as one new child. Every value is
        null-checked before any child is added; each is then added under the
        same rules as ``insert_child``. A duplicate value evicts the current
        node, which ends the call: the remaining values are not added
        anywhere.

        Returns:
            True if at least one value was given and all of them were added

        Raises:
            NullRejectedError: If values is None, or contains None and nulls
                are not accepted
            OutOfRangeError: Under the same conditions as ``insert_child``
            UnsupportedOperationError: If a duplicate would evict the root;
                values before it stay added
        """
        if values is None:
            raise NullRejectedError("values must not be None")

        if isinstance(values, AbstractTree):
            items = [values.get_root()]
        else:
            items = list(values)

        for value in items:
            self._check_value(value)
        self._check_insert_index(index)

        target = self._current
        added_all = bool(items)
        position = index
        for value in items:
            if self.insert_child(position, value):
                position += 1
                continue
            added_all = False
            if self._current is not target:
                # evicted by a duplicate
                break
        return added_all

    def remove_child(self, value: Any) -> bool:
        """Remove the first child of the current node equal to ``value``.

        Returns:
            True if a child (and its subtree) was removed
        """
        for index, child in enumerate(self._current.children):
            if child.value == value:
                self._current.remove_child(index)
                logger.debug("Removed child %r from %r", value, self._current.value)
                return True
        return False

    def remove_child_at(self, index: int) -> bool:
        """Remove the child of the current node at ``index``.

        Returns:
            True if removed, False if there is no child at that index
        """
        if index < 0 or index >= self._current.child_count:
            return False
        removed = self._current.remove_child(index)
        logger.debug("Removed child %r from %r", removed.value, self._current.value)
        return True

    def remove_all_children(self, values: Iterable[Any]) -> bool:
        """Remove every direct child whose value is in ``values``.

        Returns:
            True if any child was removed
        """
        targets = list(values)
        removed = False
        for index in reversed(range(self._current.child_count)):
            if self._current.get_child(index).value in targets:
                self._current.remove_child(index)
                removed = True
        return removed

    def remove_all_descendants(self, values: Iterable[Any]) -> bool:
        """Remove every descendant of the current node whose value is in ``values``.

        The current node itself is never removed. A removed node takes its
        whole subtree with it, so matches below it need no separate removal.

        Returns:
            True if anything was removed
        """
        targets = list(values)
        removed = False
        stack = [self._current]
        while stack:
            node = stack.pop()
            for index in reversed(range(node.child_count)):
                child = node.get_child(index)
                if child.value in targets:
                    node.remove_child(index)
                    logger.debug("Removed descendant %r from %r", child.value, node.value)
                    removed = True
                else:
                    stack.append(child)
        return removed

    # Structural queries

    def is_root(self) -> bool:
        return self._current is self._root

    def is_leaf(self) -> bool:
        return self._current.is_leaf()

    def get_children_count(self) -> int:
        return self._current.child_count

    def depth(self) -> int:
        """Distance from the current node to the root (root = 0)."""
        return self._current.depth()

    def height(self) -> int:
        """Longest distance from the current node to a leaf (leaf = 0)."""
        return self._current.height()

    def max_children(self) -> int:
        return self._config.max_children

    # Extraction

    def subtree(self) -> 'Tree':
        """Copy the subtree rooted at the current node into a new tree.

        The copy uses the same policies and leaves this tree untouched.
        """
        return self._subtree_at(self._current)

    def split(self) -> 'Tree':
        """Move the subtree rooted at the current node into a new tree.

        The subtree is removed from this tree and the cursor moves to the
        former current node's parent.

        Raises:
            UnsupportedOperationError: If the cursor is on the root
        """
        return self._split_at(self._current)

    # Traversal

    def tree_iterator(self, order=None) -> 'TreeIterator':
        """Return an iterator over the whole tree.

        Args:
            order: TraversalOrder or alias, defaults to config.default_order
        """
        return TreeIterator(self, order or self._config.default_order, self._root)

    def tree_iterator_at(self, order=None) -> 'TreeIterator':
        """Return an iterator over the subtree rooted at the current node."""
        return TreeIterator(self, order or self._config.default_order, self._current)

    def __len__(self) -> int:
        return sum(1 for _ in self._root.iter_subtree())

    def __contains__(self, value: Any) -> bool:
        return self._find_value(value) is not None

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(root={self._root.value!r}, "
                f"current={self._current.value!r}, size={len(self)})")

    # Operations shared with TreeIterator, applied to an arbitrary node

    def _set_at(self, node: Node, value: Any) -> Any:
        self._check_value(value)
        previous = node.value
        if self._evict_if_duplicate(value, node, exclude=node):
            return previous
        node.value = value
        return previous

    def _subtree_at(self, node: Node) -> 'Tree':
        copy = node.copy()
        logger.debug("Copied subtree at %r", node.value)
        return self._from_node(copy, replace(self._config))

    def _split_at(self, node: Node) -> 'Tree':
        if node is self._root:
            raise UnsupportedOperationError("Cannot split the root off its own tree")
        parent = node.get_parent()
        self._detach(node)
        node.make_root()
        logger.debug("Split subtree at %r off %r", node.value, parent.value)
        return self._from_node(node, replace(self._config))

    def _evict_if_duplicate(self, value: Any, node: Node,
                            exclude: Optional[Node] = None) -> bool:
        """Apply the no-duplicates policy to a write of ``value`` at ``node``.

        This is the only place duplicates are handled. When duplicates are
        disallowed and some node already holds an equal value, the write is
        absorbed by evicting ``node``, the node the write targets: it and its
        subtree are removed from the tree. For ``set`` that is the node being
        overwritten; for the add family it is the node receiving the child.

        Args:
            value: Value about to be written
            node: Node the write targets
            exclude: Node whose own value does not count as a duplicate

        Returns:
            True if the write was absorbed by an eviction

        Raises:
            UnsupportedOperationError: If the node to evict is the root
        """
        if self._config.allows_duplicates:
            return False

        if self._find_value(value, exclude=exclude) is None:
            return False

        if node is self._root:
            raise UnsupportedOperationError(
                f"Value {value!r} already exists; evicting the root is not possible"
            )

        logger.debug("Duplicate value %r evicts node %r", value, node.value)
        self._detach(node)
        return True

    def _detach(self, node: Node) -> None:
        """Remove ``node`` from its parent, keeping the cursor inside the tree."""
        parent = node.get_parent()
        node.detach()
        if not self._is_live(self._current):
            self._current = parent

    def _find_value(self, value: Any, exclude: Optional[Node] = None) -> Optional[Node]:
        for node in self._root.iter_subtree():
            if node is not exclude and node.value == value:
                return node
        return None

    def _check_value(self, value: Any) -> None:
        if value is None and not self._config.accepts_null:
            raise NullRejectedError(f"{self.__class__.__name__} does not accept None values")

    def _check_insert_index(self, index: int) -> None:
        count = self._current.child_count
        bound = self._config.max_children
        if index < 0 or index > count or (self._config.is_bounded and index > bound):
            raise OutOfRangeError(
                f"Insert index {index} out of range for {count} children"
            )

    def _is_live(self, node: Node) -> bool:
        """True if ``node`` is still reachable from this tree's root."""
        return node.is_attached(self._root)


class KaryTree(Tree):
    """Tree whose nodes hold at most ``k`` children.

    Adding to a full node returns False rather than raising.
    """

    def __init__(self,
                 root: Any = None,
                 k: int = 2,
                 accepts_null: bool = True,
                 allows_duplicates: bool = True):
        if isinstance(k, bool) or not isinstance(k, int) or k <= 0:
            raise InvalidConfigError(f"k must be a positive int, got {k!r}")
        super().__init__(root, config=TreeConfig(
            accepts_null=accepts_null,
            allows_duplicates=allows_duplicates,
            max_children=k,
        ))


class BinaryTree(KaryTree):
    """Tree whose nodes hold at most two children.

    Child 0 is the left child and child 1 the right child. Binary trees are
    the only trees that can be walked in ``TraversalOrder.IN_ORDER``.
    """

    def __init__(self,
                 root: Any = None,
                 accepts_null: bool = True,
                 allows_duplicates: bool = True):
        super().__init__(root, 2, accepts_null, allows_duplicates)

    def in_order(self) -> 'TreeIterator':
        """Iterator over the whole tree in left, node, right order."""
        return self.tree_iterator(TraversalOrder.IN_ORDER)
