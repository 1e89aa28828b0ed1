"""Shared tree builders and invariant checks for the test suite."""

from rbplay.node import BLACK, RED, TreeNode
from rbplay.stats import check_parent_links, validate_bst, validate_rb


def attach(parent, child, side):
    setattr(parent, side, child)
    child.parent = parent
    return child


def small_tree():
    """20(B) with children 10(R) and 30(R); 30 has left child 25(B)."""
    root = TreeNode(20, BLACK)
    attach(root, TreeNode(10, RED), "left")
    right = attach(root, TreeNode(30, RED), "right")
    attach(right, TreeNode(25, BLACK), "left")
    return root


def assert_committed(root):
    """All five structural invariants of a committed tree."""
    ok, errors = validate_bst(root)
    assert ok, errors
    ok, _, errors = validate_rb(root)
    assert ok, errors
    assert check_parent_links(root)


def shape(node):
    """(value, color, left, right) tuple ignoring ids."""
    if node is None:
        return None
    return (node.value, node.color, shape(node.left), shape(node.right))


def all_nodes(node):
    if node is None:
        return []
    return [node] + all_nodes(node.left) + all_nodes(node.right)
