"""Unit tests for the Edge and Node layer.

Tests child ordering, index errors, lazy child allocation and the
non-owning parent back-reference.
"""

import unittest
import sys
from dataclasses import FrozenInstanceError
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from cursortree import Edge, Node, OutOfRangeError


class TestEdge(unittest.TestCase):
    """Test the immutable parent/child link."""

    def test_edge_records_endpoints(self):
        """Edge exposes the parent and child it links."""
        parent = Node("P")
        child = Node("C")
        edge = Edge(parent, child)
        self.assertIs(edge.parent, parent)
        self.assertIs(edge.child, child)

    def test_edge_is_immutable(self):
        """Edge fields cannot be reassigned."""
        edge = Edge(Node("P"), Node("C"))
        with self.assertRaises(FrozenInstanceError):
            edge.child = Node("X")

    def test_edges_compare_by_identity(self):
        """Two edges between the same nodes are distinct relationships."""
        parent, child = Node("P"), Node("C")
        self.assertNotEqual(Edge(parent, child), Edge(parent, child))


class TestNodeChildren(unittest.TestCase):
    """Test child list management."""

    def setUp(self):
        self.node = Node("root")

    def test_new_node_has_no_children(self):
        """A fresh node is a leaf with no child list allocated."""
        self.assertTrue(self.node.is_leaf())
        self.assertEqual(self.node.child_count, 0)
        self.assertEqual(self.node.children, ())

    def test_value_access(self):
        """get_value returns the stored value."""
        self.assertEqual(self.node.get_value(), "root")
        self.assertEqual(self.node.value, "root")

    def test_add_child_appends_in_order(self):
        """Children keep insertion order."""
        for value in ("a", "b", "c"):
            self.node.add_child(Node(value))
        self.assertEqual([c.value for c in self.node.children], ["a", "b", "c"])
        self.assertEqual(self.node.get_child(1).value, "b")

    def test_insert_child_at_index(self):
        """insert_child shifts later siblings right."""
        self.node.add_child(Node("a"))
        self.node.add_child(Node("c"))
        self.node.insert_child(1, Node("b"))
        self.assertEqual([c.value for c in self.node.children], ["a", "b", "c"])

    def test_insert_child_out_of_range(self):
        """Inserting past the end or at a negative index fails."""
        with self.assertRaises(OutOfRangeError):
            self.node.insert_child(1, Node("x"))
        with self.assertRaises(OutOfRangeError):
            self.node.insert_child(-1, Node("x"))

    def test_get_child_without_children(self):
        """get_child on a leaf raises OutOfRangeError."""
        with self.assertRaises(OutOfRangeError):
            self.node.get_child(0)

    def test_get_child_index_too_large(self):
        """get_child at index >= count raises OutOfRangeError."""
        self.node.add_child(Node("a"))
        with self.assertRaises(OutOfRangeError):
            self.node.get_child(1)

    def test_out_of_range_is_an_index_error(self):
        """OutOfRangeError can be caught as IndexError."""
        with self.assertRaises(IndexError):
            self.node.get_child(5)

    def test_remove_child_returns_whole_subtree(self):
        """Removing a child removes it with its descendants."""
        child = Node("a")
        grandchild = Node("a1")
        self.node.add_child(child)
        child.add_child(grandchild)

        removed = self.node.remove_child(0)

        self.assertIs(removed, child)
        self.assertTrue(self.node.is_leaf())
        self.assertIs(removed.get_child(0), grandchild)

    def test_remove_child_out_of_range(self):
        """remove_child fails like get_child."""
        with self.assertRaises(OutOfRangeError):
            self.node.remove_child(0)
        self.node.add_child(Node("a"))
        with self.assertRaises(OutOfRangeError):
            self.node.remove_child(1)

    def test_add_all_children_appends_in_order(self):
        """add_all_children appends after existing children, in input order."""
        first = Node("a")
        self.node.add_child(first)
        rest = [Node("b"), Node("c")]
        self.node.add_all_children(rest)
        self.assertEqual([c.value for c in self.node.children], ["a", "b", "c"])
        self.assertTrue(all(c.get_parent() is self.node for c in rest))

    def test_add_all_children_allocates_child_list(self):
        self.node.add_all_children([])
        self.assertEqual(self.node.child_count, 0)
        self.assertEqual(self.node.children, ())

    def test_node_cannot_have_two_parents(self):
        """A node listed under one parent cannot be added to another."""
        child = Node("a")
        self.node.add_child(child)
        with self.assertRaises(ValueError):
            Node("other").add_child(child)


class TestNodeBackReference(unittest.TestCase):
    """Test the parent edge and positional queries."""

    def setUp(self):
        self.root = Node("root")
        self.first = Node("first")
        self.second = Node("second")
        self.root.add_child(self.first)
        self.root.add_child(self.second)

    def test_parent_of_root_is_none(self):
        self.assertIsNone(self.root.get_parent())
        self.assertTrue(self.root.is_root())

    def test_parent_and_index(self):
        """Children know their parent and sibling index."""
        self.assertIs(self.second.get_parent(), self.root)
        self.assertEqual(self.first.index_in_parent(), 0)
        self.assertEqual(self.second.index_in_parent(), 1)

    def test_constructor_parent_is_back_reference_only(self):
        """Passing a parent records the link without listing the node."""
        orphan = Node("orphan", parent=self.root)
        self.assertIs(orphan.get_parent(), self.root)
        self.assertIsNone(orphan.index_in_parent())
        self.assertEqual(self.root.child_count, 2)

    def test_removed_node_keeps_dangling_reference(self):
        """A removed node still points at its old parent but is detached."""
        removed = self.root.remove_child(0)
        self.assertIs(removed.get_parent(), self.root)
        self.assertIsNone(removed.index_in_parent())
        self.assertFalse(removed.is_attached())
        self.assertEqual(self.second.index_in_parent(), 0)

    def test_descendant_of_removed_node_is_detached(self):
        """Detachment is seen from anywhere inside the removed subtree."""
        leaf = Node("leaf")
        self.first.add_child(leaf)
        self.assertTrue(leaf.is_attached())
        self.root.remove_child(0)
        self.assertFalse(leaf.is_attached())

    def test_detach_and_make_root(self):
        """detach removes the node from its parent; make_root clears the link."""
        self.assertEqual(self.second.detach(), 1)
        self.assertIsNone(self.second.detach())
        self.second.make_root()
        self.assertTrue(self.second.is_root())
        self.assertTrue(self.second.is_attached())

    def test_attached_to_specific_root(self):
        """is_attached(root) tells which tree a node currently belongs to."""
        leaf = Node("leaf")
        self.first.add_child(leaf)
        self.assertTrue(leaf.is_attached(self.root))
        self.assertFalse(leaf.is_attached(self.first))

        self.first.detach()
        self.first.make_root()
        self.assertTrue(leaf.is_attached(self.first))
        self.assertFalse(leaf.is_attached(self.root))

    def test_reattached_subtree_joins_new_root(self):
        other = Node("other")
        removed = self.root.remove_child(0)
        removed.add_child(Node("leaf"))
        self.assertFalse(removed.get_child(0).is_attached())

        removed.make_root()
        other.add_child(removed)
        self.assertTrue(removed.get_child(0).is_attached(other))

    def test_depth_and_height(self):
        """Depth counts edges up, height counts edges down."""
        leaf = Node("leaf")
        self.first.add_child(leaf)
        self.assertEqual(self.root.depth(), 0)
        self.assertEqual(leaf.depth(), 2)
        self.assertEqual(self.root.height(), 2)
        self.assertEqual(self.second.height(), 0)
        self.assertIs(leaf.get_root(), self.root)


class TestNodeCopy(unittest.TestCase):
    """Test subtree iteration and copying."""

    def test_iter_subtree_is_pre_order(self):
        root = Node("A")
        b, c, d = Node("B"), Node("C"), Node("D")
        root.add_child(b)
        root.add_child(c)
        b.add_child(d)
        self.assertEqual([n.value for n in root.iter_subtree()], ["A", "B", "D", "C"])

    def test_copy_is_independent(self):
        """A copy has the same shape but shares no nodes."""
        root = Node("A")
        child = Node("B")
        root.add_child(child)
        child.add_child(Node("C"))

        duplicate = child.copy()

        self.assertIsNone(duplicate.get_parent())
        self.assertEqual([n.value for n in duplicate.iter_subtree()], ["B", "C"])
        duplicate.remove_child(0)
        self.assertEqual(child.child_count, 1)


if __name__ == "__main__":
    unittest.main()
