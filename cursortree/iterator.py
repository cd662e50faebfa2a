"""TreeIterator for CursorTree.

A TreeIterator walks one tree in a fixed TraversalOrder and, on top of the
usual pull protocol, keeps a position: the node its last ``next()`` returned.
Cursor-style moves (siblings, parent, first child), ``set``, ``subtree`` and
``split`` act on that position.

The iterator's position is independent of the tree's own cursor. Moving one
never moves the other; the only coupling is that removing the subtree holding
the tree's cursor (through ``set`` eviction or ``split``) moves the tree's
cursor up to the removed node's parent, exactly as when the removal is made
through the tree.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional, TYPE_CHECKING

from .config import TraversalOrder, parse_order
from .core.node import Node
from .core.traverser import create_traverser
from .exceptions import NoSuchElementError, NullRejectedError, UnsupportedOperationError

if TYPE_CHECKING:
    from .tree import Tree

logger = logging.getLogger(__name__)


class IteratorState(Enum):
    """Lifecycle of a TreeIterator."""
    NOT_STARTED = "not_started"
    ITERATING = "iterating"
    EXHAUSTED = "exhausted"


class TreeIterator:
    """Stateful traversal bound to a single tree.

    Usable as a plain Python iterator:

        >>> tree = Tree("A")
        >>> tree.add_all_children(["B", "C"])
        True
        >>> list(tree.tree_iterator(TraversalOrder.POST_ORDER))
        ['B', 'C', 'A']

    The traversal order is fixed at construction. Moves made with
    ``next_sibling``, ``previous_sibling``, ``parent`` and ``next_child``
    reposition the iterator but do not change which values ``next()`` still
    has to produce. Nodes removed through the iterator are not visited and
    are never descended into.
    """

    def __init__(self, tree: 'Tree', order, start: Node):
        """Initialize iterator.

        Args:
            tree: Tree being walked
            order: TraversalOrder or alias
            start: Root of the walked subtree (the tree root or its cursor)

        Raises:
            UnsupportedOperationError: If IN_ORDER is requested on a tree
                that is not binary
        """
        self._order = parse_order(order)
        if self._order == TraversalOrder.IN_ORDER and tree.max_children() != 2:
            raise UnsupportedOperationError(
                "IN_ORDER traversal requires a binary tree (max_children == 2)"
            )

        self._tree = tree
        self._traverser = create_traverser(self._order, start, tree._is_live)
        self._lookahead: Optional[Node] = None
        self._position: Optional[Node] = None
        self._state = IteratorState.NOT_STARTED

    @property
    def tree(self) -> 'Tree':
        return self._tree

    @property
    def state(self) -> IteratorState:
        return self._state

    def get_traversal_order(self) -> TraversalOrder:
        return self._order

    # Pull protocol

    def has_next(self) -> bool:
        """Check whether ``next()`` would return a value. Never consumes one."""
        return self._peek() is not None

    def next(self) -> Any:
        """Return the next value in traversal order.

        Raises:
            NoSuchElementError: Once the traversal is exhausted, on this call
                and every later one
        """
        node = self._peek()
        if node is None:
            if self._state is not IteratorState.EXHAUSTED:
                logger.debug("%s traversal exhausted", self._order.name)
            self._state = IteratorState.EXHAUSTED
            raise NoSuchElementError("Traversal is exhausted")

        self._lookahead = None
        self._position = node
        self._state = IteratorState.ITERATING
        return node.value

    def for_each_remaining(self, action: Callable[[Any], None]) -> None:
        """Call ``action`` on every remaining value, in order."""
        if action is None:
            raise NullRejectedError("action must not be None")
        while self.has_next():
            action(self.next())

    def __iter__(self) -> 'TreeIterator':
        return self

    def __next__(self) -> Any:
        try:
            return self.next()
        except NoSuchElementError:
            raise StopIteration from None

    def _peek(self) -> Optional[Node]:
        if self._state is IteratorState.EXHAUSTED:
            return None
        # A node looked ahead at may have been removed since
        if self._lookahead is not None and not self._tree._is_live(self._lookahead):
            self._lookahead = None
        if self._lookahead is None:
            self._lookahead = self._traverser.advance()
        return self._lookahead

    # Existence checks

    def has_next_sibling(self) -> bool:
        return (self._position is not None
                and self._tree._find_sibling(self._position, 1) is not None)

    def has_previous_sibling(self) -> bool:
        return (self._position is not None
                and self._tree._find_sibling(self._position, -1) is not None)

    def has_parent(self) -> bool:
        return self._position is not None and self._position is not self._tree._root

    def has_children(self) -> bool:
        return self._position is not None and not self._position.is_leaf()

    # Moves

    def next_sibling(self) -> Any:
        """Move to the next sibling of the position.

        Raises:
            NoSuchElementError: If ``has_next_sibling()`` is False
        """
        node = self._require_position()
        self._position = self._tree._sibling_of(node, 1)
        return self._position.value

    def previous_sibling(self) -> Any:
        """Move to the previous sibling of the position.

        Raises:
            NoSuchElementError: If ``has_previous_sibling()`` is False
        """
        node = self._require_position()
        self._position = self._tree._sibling_of(node, -1)
        return self._position.value

    def parent(self) -> Any:
        """Move to the parent of the position.

        Raises:
            NoSuchElementError: If ``has_parent()`` is False
        """
        if not self.has_parent():
            raise NoSuchElementError("Iterator position has no parent")
        self._position = self._position.get_parent()
        return self._position.value

    def next_child(self) -> Any:
        """Move to the first child of the position.

        Raises:
            NoSuchElementError: If ``has_children()`` is False
        """
        if not self.has_children():
            raise NoSuchElementError("Iterator position has no children")
        self._position = self._position.get_child(0)
        return self._position.value

    # Operations at the position

    def set(self, value: Any) -> Any:
        """Replace the value at the position, with the tree's policies.

        If the write is absorbed by a duplicate eviction, the position moves
        to the evicted node's parent and the evicted subtree is skipped by
        the rest of the traversal.

        Returns:
            The previous value
        """
        node = self._require_position()
        parent = node.get_parent()
        previous = self._tree._set_at(node, value)
        if not self._tree._is_live(node):
            self._position = parent
        return previous

    def is_root(self) -> bool:
        return self._require_position() is self._tree._root

    def is_leaf(self) -> bool:
        return self._require_position().is_leaf()

    def get_children_count(self) -> int:
        return self._require_position().child_count

    def depth(self) -> int:
        return self._require_position().depth()

    def height(self) -> int:
        return self._require_position().height()

    def level(self) -> int:
        return self.depth() + 1

    def subtree(self) -> 'Tree':
        """Copy the subtree rooted at the position into a new tree."""
        return self._tree._subtree_at(self._require_position())

    def split(self) -> 'Tree':
        """Move the subtree rooted at the position into a new tree.

        The position moves to the split node's parent; the split nodes are
        not visited by the rest of the traversal.
        """
        node = self._require_position()
        parent = node.get_parent()
        result = self._tree._split_at(node)
        self._position = parent
        return result

    def _require_position(self) -> Node:
        if self._position is None:
            raise NoSuchElementError("Iteration has not started; call next() first")
        return self._position

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(order={self._order.name}, state={self._state.name})"
