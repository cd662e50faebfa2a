"""Tree traversal strategies for CursorTree.

Traversers hold the pending-visit state of one walk over a node graph and
hand out nodes one at a time. Unlike a generator they can be paused between
steps while the structure is edited through an iterator: children are read
only when a node is expanded, and any pending node that has been removed in
the meantime is skipped instead of visited.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, List, Optional, Tuple

from ..config import TraversalOrder, parse_order
from .node import Node

LivenessCheck = Callable[[Node], bool]


def _always_live(node: Node) -> bool:
    return True


class TreeTraverser(ABC):
    """Abstract base class for traversal strategies.

    Subclasses implement ``advance`` for one visiting order. A traverser walks
    the subtree rooted at ``start`` exactly once; it is not restartable.
    """

    order: TraversalOrder

    def __init__(self, start: Node, is_live: Optional[LivenessCheck] = None):
        """Initialize traverser.

        Args:
            start: Root of the subtree to walk
            is_live: Predicate telling whether a pending node is still part of
                the structure being walked. Nodes failing it are skipped and
                never expanded. Defaults to treating every node as live.
        """
        self.start = start
        self.is_live = is_live or _always_live

    @abstractmethod
    def advance(self) -> Optional[Node]:
        """Return the next node in order, or None once the walk is complete."""
        pass

    def __iter__(self):
        return self

    def __next__(self) -> Node:
        node = self.advance()
        if node is None:
            raise StopIteration
        return node

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(order={self.order.name}, start={self.start.value!r})"


class DepthFirstPreOrderTraverser(TreeTraverser):
    """Depth-first pre-order: a node, then its children left to right.

    The node returned last is expanded on the following step, so a node that
    is removed right after being visited is never descended into.
    """

    order = TraversalOrder.PRE_ORDER

    def __init__(self, start: Node, is_live: Optional[LivenessCheck] = None):
        super().__init__(start, is_live)
        self._stack: List[Node] = [start]
        self._last: Optional[Node] = None

    def advance(self) -> Optional[Node]:
        if self._last is not None and self.is_live(self._last):
            self._stack.extend(reversed(self._last.children))
        self._last = None

        while self._stack:
            node = self._stack.pop()
            if self.is_live(node):
                self._last = node
                return node
        return None


class BreadthFirstTraverser(TreeTraverser):
    """Breadth-first traversal: level by level, left to right.

    Uses a queue; the last visited node is expanded lazily as in pre-order.
    """

    order = TraversalOrder.BREADTH_FIRST

    def __init__(self, start: Node, is_live: Optional[LivenessCheck] = None):
        super().__init__(start, is_live)
        self._queue: Deque[Node] = deque([start])
        self._last: Optional[Node] = None

    def advance(self) -> Optional[Node]:
        if self._last is not None and self.is_live(self._last):
            self._queue.extend(self._last.children)
        self._last = None

        while self._queue:
            node = self._queue.popleft()
            if self.is_live(node):
                self._last = node
                return node
        return None


class _EmitStackTraverser(TreeTraverser):
    """Shared machinery for orders that emit a node after some of its children.

    The stack holds ``(node, emit)`` pairs: ``emit`` False means the node still
    has to be expanded, True means it is ready to be returned.
    """

    def __init__(self, start: Node, is_live: Optional[LivenessCheck] = None):
        super().__init__(start, is_live)
        self._stack: List[Tuple[Node, bool]] = [(start, False)]

    @abstractmethod
    def _expand(self, node: Node) -> None:
        """Push the entries that replace an unexpanded ``node``."""
        pass

    def advance(self) -> Optional[Node]:
        while self._stack:
            node, emit = self._stack.pop()
            if not self.is_live(node):
                continue
            if emit:
                return node
            self._expand(node)
        return None


class DepthFirstPostOrderTraverser(_EmitStackTraverser):
    """Depth-first post-order: children left to right, then the node."""

    order = TraversalOrder.POST_ORDER

    def _expand(self, node: Node) -> None:
        self._stack.append((node, True))
        for child in reversed(node.children):
            self._stack.append((child, False))


class InOrderTraverser(_EmitStackTraverser):
    """In-order traversal: first child subtree, the node, then the rest.

    For a binary tree this is the classic left, node, right order.
    """

    order = TraversalOrder.IN_ORDER

    def _expand(self, node: Node) -> None:
        children = node.children
        for child in reversed(children[1:]):
            self._stack.append((child, False))
        self._stack.append((node, True))
        if children:
            self._stack.append((children[0], False))


_TRAVERSERS = {
    TraversalOrder.PRE_ORDER: DepthFirstPreOrderTraverser,
    TraversalOrder.POST_ORDER: DepthFirstPostOrderTraverser,
    TraversalOrder.BREADTH_FIRST: BreadthFirstTraverser,
    TraversalOrder.IN_ORDER: InOrderTraverser,
}


def create_traverser(order, start: Node,
                     is_live: Optional[LivenessCheck] = None) -> TreeTraverser:
    """Create a traverser instance for an order.

    Args:
        order: TraversalOrder member or string alias (pre, post, bfs, in)
        start: Root of the subtree to walk
        is_live: Optional liveness predicate, see TreeTraverser

    Returns:
        TreeTraverser instance

    Raises:
        ValueError: If the order name is not recognized
    """
    return _TRAVERSERS[parse_order(order)](start, is_live)
