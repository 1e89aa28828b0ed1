"""
Tests for the node model: rotations, cloning and traversal.
"""

import pytest

from rbplay.node import (BLACK, RED, TreeNode, clone_tree, find, inorder,
                         replace_child, rotate_left, rotate_right, to_tuple)
from rbplay.stats import check_parent_links
from tests.helpers import all_nodes, attach, small_tree


class TestTreeNode:
    """Node creation and ids."""

    def test_ids_are_unique(self):
        a, b = TreeNode(1), TreeNode(1)
        assert a.id != b.id

    def test_explicit_id_is_kept(self):
        n = TreeNode(5, BLACK, "rb-custom")
        assert n.id == "rb-custom"
        assert n.color == BLACK
        assert n.parent is None and n.left is None and n.right is None

    def test_new_nodes_default_to_red(self):
        assert TreeNode(3).color == RED


class TestRotations:
    """Left / right rotation primitives."""

    def _left_heavy_pivot(self):
        # x(10) with left 5 and right y(20) whose left is 15
        x = TreeNode(10, BLACK)
        a = attach(x, TreeNode(5), "left")
        y = attach(x, TreeNode(20), "right")
        beta = attach(y, TreeNode(15), "left")
        return x, a, y, beta

    def test_rotate_left_rewires_three_nodes(self):
        x, a, y, beta = self._left_heavy_pivot()
        new_root = rotate_left(x)

        assert new_root is y
        assert y.left is x and x.parent is y
        assert x.right is beta and beta.parent is x
        assert x.left is a
        assert y.parent is None
        assert check_parent_links(y)
        assert inorder(y) == [5, 10, 15, 20]

    def test_rotate_right_is_mirror(self):
        y = TreeNode(20, BLACK)
        x = attach(y, TreeNode(10), "left")
        beta = attach(x, TreeNode(15), "right")
        attach(y, TreeNode(30), "right")

        new_root = rotate_right(y)
        assert new_root is x
        assert x.right is y and y.parent is x
        assert y.left is beta and beta.parent is y
        assert check_parent_links(x)
        assert inorder(x) == [10, 15, 20, 30]

    def test_rotation_then_replace_child_reattaches_subtree(self):
        root = TreeNode(50, BLACK)
        x, _, y, _ = self._left_heavy_pivot()
        attach(root, x, "left")

        sub = rotate_left(x)
        assert sub.parent is root          # inherits the former parent link
        assert root.left is x              # ...but the slot is the caller's job

        new_root = replace_child(root, x, sub, root)
        assert new_root is root
        assert root.left is y
        assert check_parent_links(root)

    def test_replace_child_at_root_returns_new_root(self):
        x, _, y, _ = self._left_heavy_pivot()
        sub = rotate_left(x)
        assert replace_child(None, x, sub, x) is y
        assert y.parent is None

    def test_rotate_left_without_right_child_raises(self):
        with pytest.raises(ValueError):
            rotate_left(TreeNode(1))

    def test_rotate_right_without_left_child_raises(self):
        with pytest.raises(ValueError):
            rotate_right(TreeNode(1))

    def test_rotation_preserves_ids(self):
        x, a, y, beta = self._left_heavy_pivot()
        before = {n.value: n.id for n in all_nodes(x)}
        after = {n.value: n.id for n in all_nodes(rotate_left(x))}
        assert before == after


class TestCloneTree:
    """Deep copies used for snapshots."""

    def test_clone_of_empty_tree(self):
        assert clone_tree(None) is None

    def test_clone_keeps_ids_values_and_colors(self):
        root = small_tree()
        copy = clone_tree(root)
        assert to_tuple(copy) == to_tuple(root)

    def test_clone_shares_no_instances(self):
        root = small_tree()
        copy = clone_tree(root)
        originals = {id(n) for n in all_nodes(root)}
        assert not originals & {id(n) for n in all_nodes(copy)}

    def test_clone_rebuilds_parent_links(self):
        root = small_tree()
        # a stale parent pointer on the source must not leak into the copy
        root.parent = TreeNode(999)
        copy = clone_tree(root)
        assert copy.parent is None
        assert check_parent_links(copy)

    def test_mutating_clone_does_not_touch_original(self):
        root = small_tree()
        snapshot = to_tuple(root)
        copy = clone_tree(root)
        copy.color = RED
        copy.left.value = -1
        copy.right = None
        assert to_tuple(root) == snapshot


class TestTraversal:
    """In-order keys and lookup."""

    def test_inorder_is_ascending(self):
        assert inorder(small_tree()) == [10, 20, 25, 30]

    def test_inorder_of_empty_tree(self):
        assert inorder(None) == []

    def test_find(self):
        root = small_tree()
        assert find(root, 25).value == 25
        assert find(root, 26) is None
        assert find(None, 1) is None
