"""Configuration system for CursorTree.

This module defines the policies a tree enforces on every mutation (null
acceptance, duplicate handling, child bound) and the traversal orders an
iterator can follow.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List


class TraversalOrder(Enum):
    """How a TreeIterator walks the tree.

    Siblings are always visited left to right, i.e. in child-index order.
    """
    PRE_ORDER = "pre"           # Node before its children
    POST_ORDER = "post"         # Children before their node
    BREADTH_FIRST = "bfs"       # Level by level
    IN_ORDER = "in"             # First child, node, remaining children (binary trees only)


# String aliases accepted wherever an order can be given by name
ORDER_ALIASES = {
    'pre': TraversalOrder.PRE_ORDER,
    'pre_order': TraversalOrder.PRE_ORDER,
    'preorder': TraversalOrder.PRE_ORDER,
    'dfs_pre': TraversalOrder.PRE_ORDER,
    'post': TraversalOrder.POST_ORDER,
    'post_order': TraversalOrder.POST_ORDER,
    'postorder': TraversalOrder.POST_ORDER,
    'dfs_post': TraversalOrder.POST_ORDER,
    'bfs': TraversalOrder.BREADTH_FIRST,
    'breadth_first': TraversalOrder.BREADTH_FIRST,
    'level': TraversalOrder.BREADTH_FIRST,
    'level_order': TraversalOrder.BREADTH_FIRST,
    'in': TraversalOrder.IN_ORDER,
    'in_order': TraversalOrder.IN_ORDER,
    'inorder': TraversalOrder.IN_ORDER,
}


def parse_order(order) -> TraversalOrder:
    """Resolve a TraversalOrder from an enum member or a string alias.

    Args:
        order: TraversalOrder member or alias such as "pre" or "bfs"

    Returns:
        The matching TraversalOrder

    Raises:
        ValueError: If the alias is not recognized
    """
    if isinstance(order, TraversalOrder):
        return order

    key = str(order).lower()
    if key not in ORDER_ALIASES:
        raise ValueError(
            f"Unknown traversal order: {order}. "
            f"Choose from: {', '.join(ORDER_ALIASES.keys())}"
        )
    return ORDER_ALIASES[key]


@dataclass
class TreeConfig:
    """Policies a tree applies to every structural change.

    The same config is carried over to trees produced by ``subtree()`` and
    ``split()``, so derived trees enforce the same rules as their source.
    """

    accepts_null: bool = True          # Allow None as a node value
    allows_duplicates: bool = True     # False: a duplicate write evicts its target node
    max_children: int = 0              # Children per node, <= 0 means unbounded
    default_order: TraversalOrder = TraversalOrder.PRE_ORDER  # Order used by iter(tree)

    @property
    def is_bounded(self) -> bool:
        """True when nodes have a fixed maximum number of children."""
        return self.max_children > 0

    def has_room(self, child_count: int) -> bool:
        """Check whether a node with ``child_count`` children can take one more.

        Args:
            child_count: Current number of children of the node

        Returns:
            True if unbounded or below the bound
        """
        if not self.is_bounded:
            return True
        return child_count < self.max_children

    # Convenience constructors for common configurations

    @classmethod
    def unbounded(cls) -> 'TreeConfig':
        """Create config for a general tree with no policies."""
        return cls()

    @classmethod
    def unique(cls, accepts_null: bool = False) -> 'TreeConfig':
        """Create config for a tree whose values must all be distinct.

        Args:
            accepts_null: Whether None may still be stored (once)

        Returns:
            TreeConfig with duplicates disallowed
        """
        return cls(accepts_null=accepts_null, allows_duplicates=False)

    @classmethod
    def kary(cls, k: int) -> 'TreeConfig':
        """Create config for a k-ary tree.

        Args:
            k: Maximum number of children per node

        Returns:
            TreeConfig bounded to k children
        """
        return cls(max_children=k)

    @classmethod
    def binary(cls) -> 'TreeConfig':
        """Create config for a binary tree."""
        return cls.kary(2)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.accepts_null, bool):
            errors.append("accepts_null must be a bool")

        if not isinstance(self.allows_duplicates, bool):
            errors.append("allows_duplicates must be a bool")

        # bool is an int subclass, but True as a bound is certainly a mistake
        if isinstance(self.max_children, bool) or not isinstance(self.max_children, int):
            errors.append("max_children must be an int")

        if not isinstance(self.default_order, TraversalOrder):
            errors.append("default_order must be a TraversalOrder")
        elif (self.default_order == TraversalOrder.IN_ORDER
              and self.max_children != 2):
            errors.append("IN_ORDER default_order requires max_children == 2")

        return errors
