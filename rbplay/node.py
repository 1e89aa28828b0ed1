"""
╔══════════════════════════════════════════════════════════════════╗
║             rbplay  —  NODE MODEL                                ║
║                                                                  ║
║  The balanced-tree node type and the pure structural helpers     ║
║  every other module builds on:                                   ║
║                                                                  ║
║    • TreeNode         — value, colour, children, parent, id      ║
║    • rotate_left()    — local left rotation                      ║
║    • rotate_right()   — local right rotation (mirror)            ║
║    • replace_child()  — re-attach a rotated subtree              ║
║    • clone_tree()     — deep copy, parents rebuilt structurally  ║
║    • inorder()        — ascending key sequence                   ║
║                                                                  ║
║  No knowledge of step recording or drawing lives here.           ║
╚══════════════════════════════════════════════════════════════════╝
"""

import itertools

# ═════════════════════════════════════════════════════════════════
#  GLOBAL CONSTANTS
# ═════════════════════════════════════════════════════════════════
RED   = True          # RB-Tree color constant: RED   = True
BLACK = False         # RB-Tree color constant: BLACK = False

_ids = itertools.count(1)


def new_node_id() -> str:
    """Return a fresh opaque node id (``"rb-<n>"``)."""
    return f"rb-{next(_ids)}"


def color_name(color) -> str:
    return "RED" if color == RED else "BLACK"


# ═════════════════════════════════════════════════════════════════
#  TREE NODE
#
#  Each node stores six fields:
#    value  : comparable – the key (no duplicates in a tree)
#    color  : bool       – RED (True) or BLACK (False)
#    left   : TreeNode?  – owned left child
#    right  : TreeNode?  – owned right child
#    parent : TreeNode?  – back-reference, never owns (None for root)
#    id     : str        – stable across clones and rotations
#
#  Empty children are plain ``None`` (no shared NIL sentinel), so a
#  snapshot never shares a node instance with another snapshot.
# ═════════════════════════════════════════════════════════════════
class TreeNode:
    """
    A single node in the red-black tree.

    Attributes:
        value  (any)      : Node key; must be totally ordered.
        color  (bool)     : RED (True) or BLACK (False).
        left   (TreeNode) : Left child or None.
        right  (TreeNode) : Right child or None.
        parent (TreeNode) : Parent pointer (None for root).
        id     (str)      : Opaque identifier used for highlighting only.
    """
    __slots__ = ('value', 'color', 'left', 'right', 'parent', 'id')

    def __init__(self, value, color=RED, node_id=None):
        self.value  = value
        self.color  = color
        self.left   = None
        self.right  = None
        self.parent = None
        self.id     = node_id if node_id is not None else new_node_id()

    def __repr__(self):
        return f"TreeNode({self.value!r}, {color_name(self.color)}, id={self.id!r})"


# ═════════════════════════════════════════════════════════════════
#  ROTATIONS
#
#  Both rotations touch exactly three nodes (pivot, its child and
#  the grandchild that changes sides).  The new local root takes
#  over the pivot's parent link, but the caller still has to point
#  that parent's left/right slot at it (see replace_child()).
# ═════════════════════════════════════════════════════════════════

def rotate_left(x):
    """
    Left-rotate the subtree rooted at x.

    Before:       After:
        x           y
       / \\         / \\
      α   y       x   γ
         / \\     / \\
        β   γ   α   β

    Args:
        x (TreeNode): Pivot node; ``x.right`` must not be None.

    Returns:
        TreeNode: y, the new root of this subtree.
    """
    y = x.right
    if y is None:
        raise ValueError(f"rotate_left({x.value!r}) needs a right child")

    beta     = y.left
    x.right  = beta            # Turn y's left subtree into x's right
    if beta is not None:
        beta.parent = x

    y.parent = x.parent        # y takes over x's parent link
    y.left   = x               # Put x on y's left
    x.parent = y
    return y


def rotate_right(y):
    """
    Right-rotate the subtree rooted at y  (mirror of rotate_left).

    Before:       After:
        y           x
       / \\         / \\
      x   γ       α   y
     / \\             / \\
    α   β           β   γ

    Args:
        y (TreeNode): Pivot node; ``y.left`` must not be None.

    Returns:
        TreeNode: x, the new root of this subtree.
    """
    x = y.left
    if x is None:
        raise ValueError(f"rotate_right({y.value!r}) needs a left child")

    beta     = x.right
    y.left   = beta            # Turn x's right subtree into y's left
    if beta is not None:
        beta.parent = y

    x.parent = y.parent
    x.right  = y               # Put y on x's right
    y.parent = x
    return x


def replace_child(parent, old, new, root):
    """
    Point ``parent``'s slot that held ``old`` at ``new``.

    Args:
        parent (TreeNode|None): Former parent of ``old`` (None if root).
        old    (TreeNode)     : Subtree root that was rotated away.
        new    (TreeNode)     : Subtree root that replaces it.
        root   (TreeNode)     : Current tree root.

    Returns:
        TreeNode: The (possibly new) tree root.
    """
    new.parent = parent
    if parent is None:
        return new
    if parent.left is old:
        parent.left = new
    else:
        parent.right = new
    return root


# ═════════════════════════════════════════════════════════════════
#  CLONING & TRAVERSAL
# ═════════════════════════════════════════════════════════════════

def clone_tree(root):
    """
    Deep-copy a tree, keeping ids and colours.

    Parent links of the copy are rebuilt from the copy's own
    left/right links; the source's ``parent`` fields are never read,
    so a clone cannot point back into another snapshot.

    Args:
        root (TreeNode|None): Tree to copy.

    Returns:
        TreeNode|None: Independent copy (None for an empty tree).
    """
    if root is None:
        return None
    n = TreeNode(root.value, root.color, root.id)
    n.left  = clone_tree(root.left)
    n.right = clone_tree(root.right)
    if n.left is not None:
        n.left.parent = n
    if n.right is not None:
        n.right.parent = n
    return n


def inorder(root) -> list:
    """
    In-order traversal collecting every key.

    Returns:
        list: Keys in ascending order.
    """
    keys = []

    def _in(n):
        if n is None:
            return
        _in(n.left); keys.append(n.value); _in(n.right)

    _in(root)
    return keys


def find(root, value):
    """Standard BST search; returns the matching node or None."""
    node = root
    while node is not None and value != node.value:
        node = node.left if value < node.value else node.right
    return node


def to_tuple(node) -> tuple:
    """
    Convert a tree to a nested tuple for structural comparison.

    Format: (id, value, color, left_tuple, right_tuple); None for
    an empty subtree.  Two snapshots with equal tuples have the same
    shape, colours and node ids.
    """
    if node is None:
        return None
    return (node.id, node.value, node.color,
            to_tuple(node.left), to_tuple(node.right))
