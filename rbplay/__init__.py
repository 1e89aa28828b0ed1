"""
rbplay — red-black tree mutation engine with deterministic step
recording and playback.

    from rbplay import build_from_sequence, PlaybackController, ManualScheduler

    steps = build_from_sequence([10, 20, 30])
    player = PlaybackController(ManualScheduler())
    player.load_steps(steps)
    player.step_forward()
"""

from .engine import (build_from_sequence, committed_root, delete, insert,
                     load_instant, update)
from .errors import ExportError, PlaybackError, RBPlayError
from .layout import Layout, LayoutEdge, LayoutNode, compute_layout, to_canvas
from .node import (BLACK, RED, TreeNode, clone_tree, inorder, rotate_left,
                   rotate_right)
from .playback import (IDLE, PAUSED, PLAYING, ManualScheduler,
                       PlaybackController, PlaybackView)
from .recorder import Step, StepRecorder
from .session import TreeSession, parse_values
from .settings import Settings

__version__ = "1.0.0"
