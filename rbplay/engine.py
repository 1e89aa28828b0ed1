"""
╔══════════════════════════════════════════════════════════════════╗
║             rbplay  —  MUTATION ALGORITHMS                       ║
║                                                                  ║
║  Red-black INSERT with recolour / rotation fix-up, DELETE as an  ║
║  explained rebuild, UPDATE as delete + insert, and bulk BUILD.   ║
║                                                                  ║
║  Every public function takes a committed root (or None), works   ║
║  on its own private clone, and returns the full list of Steps.   ║
║  The root passed in is never touched.                            ║
║                                                                  ║
║  Data Flow                                                       ║
║  ─────────                                                       ║
║  committed root ──clone──► working tree ──push()──► StepRecorder ║
║                                                  │               ║
║                              list[Step] ◄────────┘               ║
║                              (last snapshot = new committed root)║
╚══════════════════════════════════════════════════════════════════╝
"""

from .log import get_logger
from .node import (BLACK, RED, TreeNode, clone_tree, find, inorder,
                   replace_child, rotate_left, rotate_right)
from .recorder import (COMPLETE, CREATE, NOOP, RECOLOR, ROTATE, START,
                       StepRecorder)

logger = get_logger(__name__)


def _emit(recorder, root, highlight_ids, explanation, kind):
    # Instant mode (recorder is None) skips the clone entirely.
    if recorder is not None:
        recorder.push(root, highlight_ids, explanation, kind)


# ═════════════════════════════════════════════════════════════════
#  INSERT
#
#  1. Empty tree        → new BLACK root, one step, done
#  2. BST walk          → duplicate key is a recorded no-op
#  3. Attach RED leaf
#  4. Fix-up loop while parent is RED:
#       uncle RED       → recolour P, U black and GP red; go up
#       zig-zag shape   → rotate at P to straighten  (LR / RL)
#       straight line   → rotate at GP, new local root BLACK,
#                         its children RED; loop ends (LL / RR)
#  5. Force root BLACK  → final "complete" step
# ═════════════════════════════════════════════════════════════════

def _insert(root, value, recorder=None):
    """
    Insert ``value`` into the working tree ``root`` in place.

    Args:
        root     (TreeNode|None)    : Private working tree (mutated).
        value    (any)              : Key to insert.
        recorder (StepRecorder|None): Sink for steps; None = instant.

    Returns:
        TreeNode: The root of the working tree after insertion.
    """
    if root is None:
        n = TreeNode(value, BLACK)
        _emit(recorder, n, [n.id], f"Inserted {value} as root (black).", CREATE)
        return n

    # ── BST walk to the insertion parent ──
    cur, parent = root, None
    while cur is not None:
        parent = cur
        if value < cur.value:
            cur = cur.left
        elif value > cur.value:
            cur = cur.right
        else:
            _emit(recorder, root, [cur.id],
                  f"Value {value} already exists - no insertion.", NOOP)
            return root

    z = TreeNode(value, RED)
    z.parent = parent
    if value < parent.value:
        parent.left = z
        side = "left"
    else:
        parent.right = z
        side = "right"
    _emit(recorder, root, [z.id],
          f"Inserted {value} as red {side} child of {parent.value}.", CREATE)

    # ── Fix-up: resolve red-red violations ──
    while z.parent is not None and z.parent.color == RED:
        p  = z.parent
        gp = p.parent
        if gp is None:
            break
        p_is_left = p is gp.left
        uncle = gp.right if p_is_left else gp.left

        if uncle is not None and uncle.color == RED:
            p.color     = BLACK
            uncle.color = BLACK
            gp.color    = RED
            _emit(recorder, root, [p.id, uncle.id, gp.id],
                  f"Recolor: parent {p.value} black, uncle {uncle.value} "
                  f"black, grandparent {gp.value} red.", RECOLOR)
            z = gp                      # violation may move up
            continue

        # Uncle BLACK or absent: straighten a zig-zag first
        if p_is_left and z is p.right:
            sub = rotate_left(p)
            gp.left = sub
            _emit(recorder, root, [p.id, z.id],
                  f"Left-rotate at {p.value} (LR preparation).", ROTATE)
            z, p = p, sub
        elif not p_is_left and z is p.left:
            sub = rotate_right(p)
            gp.right = sub
            _emit(recorder, root, [p.id, z.id],
                  f"Right-rotate at {p.value} (RL preparation).", ROTATE)
            z, p = p, sub

        # Straight line: rotate at grandparent and recolour
        gpp = gp.parent
        if p_is_left:
            sub, direction, shape = rotate_right(gp), "Right", "LL"
        else:
            sub, direction, shape = rotate_left(gp), "Left", "RR"
        root = replace_child(gpp, gp, sub, root)
        sub.color = BLACK
        if sub.left is not None:
            sub.left.color = RED
        if sub.right is not None:
            sub.right.color = RED
        _emit(recorder, root, [sub.id, gp.id],
              f"{direction}-rotate at {gp.value} to fix {shape} case; "
              f"recolor {sub.value} black, children red.", ROTATE)
        break

    # ── Root is always BLACK ──
    if root.color == RED:
        root.color = BLACK
        text = f"Recolor root {root.value} black; insertion of {value} complete."
    else:
        text = f"Root {root.value} is black; insertion of {value} complete."
    _emit(recorder, root, [root.id], text, COMPLETE)
    return root


def insert(root, value):
    """
    Record the insertion of ``value`` into the committed tree ``root``.

    Returns:
        list[Step]: One step for an empty tree or a duplicate key,
                    otherwise leaf + fix-up steps + a final step.
    """
    recorder = StepRecorder()
    _insert(clone_tree(root), value, recorder)
    steps = recorder.get_steps()
    logger.debug("insert %r: %d steps", value, len(steps))
    return steps


# ═════════════════════════════════════════════════════════════════
#  DELETE  (rebuild)
#
#  Remove the key from the in-order sequence and replay INSERT for
#  every remaining key onto an empty tree.  The result satisfies
#  all red-black properties, though its shape may differ from an
#  in-place deletion of the same key.
# ═════════════════════════════════════════════════════════════════

def delete(root, value):
    """
    Record the deletion of ``value`` from the committed tree ``root``.

    Returns:
        list[Step]: A single "noop" step if ``value`` is absent,
                    otherwise header steps, the replayed inserts and
                    a final step holding the rebuilt tree.
    """
    recorder = StepRecorder()
    working  = clone_tree(root)
    target   = find(working, value)

    if target is None:
        recorder.push(working, (), f"{value} not found in the tree.", NOOP)
        logger.debug("delete %r: not found", value)
        return recorder.get_steps()

    recorder.push(working, [target.id],
                  f"Removing {value} and rebuilding to keep red-black "
                  f"properties.", START)

    remaining = [k for k in inorder(working) if k != value]
    recorder.push(None, (),
                  f"Removed {value} logically; rebuilding from "
                  f"{len(remaining)} remaining keys.", START)

    cur = None
    for key in remaining:
        steps = insert(cur, key)
        recorder.extend(steps)
        cur = steps[-1].snapshot

    recorder.push(cur, (), f"Rebuild complete after deleting {value}.", COMPLETE)
    steps = recorder.get_steps()
    logger.debug("delete %r: %d steps", value, len(steps))
    return steps


def update(root, old_value, new_value):
    """
    Record ``delete(old_value)`` followed by ``insert(new_value)``.

    Returns:
        list[Step]: The delete steps then the insert steps; just the
                    single "noop" step when ``old_value`` is absent.
    """
    steps = delete(root, old_value)
    if len(steps) == 1 and steps[0].kind == NOOP:
        return steps
    return steps + insert(steps[-1].snapshot, new_value)


# ═════════════════════════════════════════════════════════════════
#  BULK BUILD
# ═════════════════════════════════════════════════════════════════

def build_from_sequence(values):
    """
    Record repeated inserts of ``values`` starting from an empty tree.

    Duplicates inside ``values`` show up as "noop" steps.
    """
    values   = list(values)
    recorder = StepRecorder()
    recorder.push(None, (), f"Start building with {len(values)} values.", START)

    cur = None
    for v in values:
        steps = insert(cur, v)
        recorder.extend(steps)
        cur = steps[-1].snapshot

    recorder.push(cur, (), "Build complete.", COMPLETE)
    return recorder.get_steps()


def load_instant(values):
    """Build a tree from ``values`` without recording any steps."""
    root = None
    for v in values:
        root = _insert(root, v)
    return root


def committed_root(steps):
    """The tree an operation committed: its last step's snapshot."""
    return steps[-1].snapshot if steps else None
