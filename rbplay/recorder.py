"""
╔══════════════════════════════════════════════════════════════════╗
║             rbplay  —  STEP RECORDER                             ║
║                                                                  ║
║  A thin sink for animation steps.  Every call site in the        ║
║  engine decides *when* a step happens; the recorder only         ║
║  freezes the tree at that instant and keeps the list.            ║
║                                                                  ║
║  Step Schema                                                     ║
║  ───────────                                                     ║
║  Step(snapshot      : TreeNode|None  # deep copy of whole tree   ║
║       highlight_ids : frozenset[str] # ids to ring in the UI     ║
║       explanation   : str            # human-readable text       ║
║       kind          : str)           # start/create/recolor/…    ║
╚══════════════════════════════════════════════════════════════════╝
"""

from collections import namedtuple

from .node import clone_tree

# ── Step kinds (one per granularity boundary) ────────────────────
START    = "start"       # operation header (build / delete)
CREATE   = "create"      # a node was created and attached
RECOLOR  = "recolor"     # one recolour group
ROTATE   = "rotate"      # one rotation (with its recolour, if any)
COMPLETE = "complete"    # operation finished, tree committed
NOOP     = "noop"        # duplicate insert / missing delete

STEP_KINDS = (START, CREATE, RECOLOR, ROTATE, COMPLETE, NOOP)

Step = namedtuple("Step", ["snapshot", "highlight_ids", "explanation", "kind"])
Step.__doc__ = "One frozen moment of an operation (never mutated after creation)."


class StepRecorder:
    """
    Collects Steps for one user-level operation.

    Attributes:
        _steps (list[Step]): Recorded steps, oldest first.
    """

    def __init__(self):
        self._steps = []

    def __len__(self):
        return len(self._steps)

    def push(self, root, highlight_ids=(), explanation="", kind=COMPLETE):
        """
        Freeze ``root`` and append one step.

        Args:
            root          (TreeNode|None): Live working tree.
            highlight_ids (iterable)     : Node ids relevant to this step;
                                           None entries are dropped.
            explanation   (str)          : Text shown next to the tree.
            kind          (str)          : One of STEP_KINDS.
        """
        if kind not in STEP_KINDS:
            raise ValueError(f"unknown step kind {kind!r}")
        ids = frozenset(i for i in highlight_ids if i is not None)
        self._steps.append(Step(clone_tree(root), ids, explanation, kind))

    def extend(self, steps):
        """Append steps recorded elsewhere (they are immutable, no re-clone)."""
        self._steps.extend(steps)

    def get_steps(self):
        """Return a new list holding the recorded steps."""
        return list(self._steps)

    def last_snapshot(self):
        """Snapshot of the newest step, or None if nothing was recorded."""
        return self._steps[-1].snapshot if self._steps else None
