"""
╔══════════════════════════════════════════════════════════════════╗
║             rbplay  —  LAYOUT CALCULATOR                         ║
║                                                                  ║
║  Maps a snapshot to drawing coordinates:                         ║
║    x  = in-order slot  (0, 1, 2, … left to right)                ║
║    y  = depth          (0 = root)                                ║
║                                                                  ║
║  Only BST order and parent/child consistency are assumed, so     ║
║  any snapshot from the middle of a fix-up can be laid out.       ║
╚══════════════════════════════════════════════════════════════════╝
"""

from collections import namedtuple

# ═════════════════════════════════════════════════════════════════
#  CANVAS CONSTANTS (pixels)
# ═════════════════════════════════════════════════════════════════
NODE_RADIUS      = 24
VERTICAL_GAP     = 90
HORIZONTAL_GAP   = 32
MIN_CANVAS_WIDTH = 700

LayoutNode = namedtuple("LayoutNode", ["id", "value", "color", "x", "y"])
LayoutEdge = namedtuple("LayoutEdge", ["parent_id", "child_id"])
Layout     = namedtuple("Layout", ["nodes", "edges"])


def compute_layout(snapshot) -> Layout:
    """
    Lay out a snapshot on an integer grid.

    Args:
        snapshot (TreeNode|None): Tree to lay out (not modified).

    Returns:
        Layout: ``nodes`` in in-order (left to right) and ``edges``
                as (parent_id, child_id) pairs in pre-order.
    """
    nodes, edges = [], []
    slot = 0

    def dfs(n, depth):
        nonlocal slot
        if n is None:
            return
        dfs(n.left, depth + 1)
        nodes.append(LayoutNode(n.id, n.value, n.color, slot, depth))
        slot += 1
        dfs(n.right, depth + 1)

    def walk_edges(n):
        if n is None:
            return
        for child in (n.left, n.right):
            if child is not None:
                edges.append(LayoutEdge(n.id, child.id))
        walk_edges(n.left)
        walk_edges(n.right)

    dfs(snapshot, 0)
    walk_edges(snapshot)
    return Layout(nodes, edges)


def canvas_width(layout, radius=NODE_RADIUS, gap=HORIZONTAL_GAP) -> int:
    """Pixel width needed to draw ``layout`` (never below MIN_CANVAS_WIDTH)."""
    return max(MIN_CANVAS_WIDTH, len(layout.nodes) * (radius * 2 + gap) + 80)


def canvas_height(layout, radius=NODE_RADIUS, vgap=VERTICAL_GAP) -> int:
    depth = max((n.y for n in layout.nodes), default=0)
    return depth * vgap + 2 * radius + 60


def to_canvas(layout, radius=NODE_RADIUS, gap=HORIZONTAL_GAP,
              vgap=VERTICAL_GAP) -> dict:
    """
    Convert grid coordinates to pixel centres.

    Args:
        layout (Layout): Output of compute_layout().
        radius (int)   : Node circle radius.
        gap    (int)   : Horizontal gap between neighbouring slots.
        vgap   (int)   : Vertical distance between depth tiers.

    Returns:
        dict: node id → (px, py).
    """
    step = radius * 2 + gap
    return {n.id: (n.x * step + radius + 32, n.y * vgap + radius + 20)
            for n in layout.nodes}
