"""
Tree statistics and red-black validation over snapshots.

Used for:
  • the viewer's stats line (height, node count, black-height, …)
  • the PDF summary page
  • checking the red-black properties in the test suite

None of this runs inside the mutation algorithms.
"""

from .node import BLACK, RED


def tree_height(node) -> int:
    """Height of a snapshot (0 for an empty tree, 1 for a single node)."""
    if node is None:
        return 0
    return 1 + max(tree_height(node.left), tree_height(node.right))


def count_nodes(node) -> int:
    """Count total nodes in a snapshot."""
    if node is None:
        return 0
    return 1 + count_nodes(node.left) + count_nodes(node.right)


def black_height(node) -> int:
    """
    Number of BLACK nodes on the left spine.

    Only meaningful when the tree has uniform black-height; use
    validate_rb() to check that first.
    """
    if node is None:
        return 0
    return black_height(node.left) + (1 if node.color == BLACK else 0)


def count_colors(node) -> tuple:
    """
    Count BLACK and RED nodes.

    Returns:
        tuple[int, int]: (black_count, red_count).
    """
    if node is None:
        return 0, 0
    bl, rl = count_colors(node.left)
    br, rr = count_colors(node.right)
    if node.color == RED:
        return bl + br, rl + rr + 1
    return bl + br + 1, rl + rr


def validate_bst(node, lo=None, hi=None) -> tuple:
    """
    Check strict BST ordering: every key lies strictly between the
    bounds inherited from its ancestors.

    Returns:
        tuple[bool, list[str]]: (is_valid, error messages).
    """
    if node is None:
        return True, []
    errors = []
    if (lo is not None and not lo < node.value) or \
       (hi is not None and not node.value < hi):
        errors.append(f"BST violation at {node.value!r}: outside ({lo!r}, {hi!r})")
    _, left_err  = validate_bst(node.left, lo, node.value)
    _, right_err = validate_bst(node.right, node.value, hi)
    errors.extend(left_err)
    errors.extend(right_err)
    return not errors, errors


def _check_rb(node, parent_color):
    if node is None:
        return 1, []                    # null leaves count as BLACK
    errors = []
    if node.color == RED and parent_color == RED:
        errors.append(f"Red violation: {node.value!r} and its parent are both RED")
    left_bh, left_err   = _check_rb(node.left, node.color)
    right_bh, right_err = _check_rb(node.right, node.color)
    errors.extend(left_err)
    errors.extend(right_err)
    if left_bh != right_bh:
        errors.append(f"Black-height violation at {node.value!r}: "
                      f"left={left_bh}, right={right_bh}")
    return left_bh + (1 if node.color == BLACK else 0), errors


def validate_rb(root) -> tuple:
    """
    Validate the red-black colour properties of a committed tree.

    Checks:
        • root is BLACK (or the tree is empty)
        • no RED node has a RED child
        • every root-to-null path has the same number of BLACK nodes

    Returns:
        tuple[bool, int, list[str]]: (is_valid, black_height, errors),
        where black_height counts the null leaf.
    """
    errors = []
    if root is not None and root.color != BLACK:
        errors.append(f"Root {root.value!r} is not BLACK")
    bh, rb_errors = _check_rb(root, None)
    errors.extend(rb_errors)
    return not errors, bh, errors


def check_parent_links(root) -> bool:
    """True if every ``parent`` pointer is the inverse of left/right."""
    if root is None:
        return True
    if root.parent is not None:
        return False
    stack = [root]
    while stack:
        n = stack.pop()
        for child in (n.left, n.right):
            if child is None:
                continue
            if child.parent is not n:
                return False
            stack.append(child)
    return True
