"""Testing utilities for CursorTree consumers."""

from .fixtures import TreeTestHelper, build_tree

__all__ = ["TreeTestHelper", "build_tree"]
