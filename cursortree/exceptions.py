"""Exceptions raised by CursorTree.

Every error derives from ``TreeError`` and from the built-in exception of the
same family, so callers can catch either ``OutOfRangeError`` or a plain
``IndexError``.

Capacity exhaustion (a node already holding ``max_children`` children) is not
an error: add operations report it by returning ``False``.
"""


class TreeError(Exception):
    """Base exception for tree operations."""


class OutOfRangeError(TreeError, IndexError):
    """An index argument is outside the valid child range."""


class NoSuchElementError(TreeError, LookupError):
    """The requested sibling, parent, child or next value does not exist."""


class NullRejectedError(TreeError, ValueError):
    """``None`` was supplied to a tree that does not accept null values."""


class UnsupportedOperationError(TreeError, NotImplementedError):
    """The operation is not supported by this tree variant."""


class InvalidConfigError(TreeError, ValueError):
    """A TreeConfig failed validation."""
