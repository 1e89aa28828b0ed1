"""
╔══════════════════════════════════════════════════════════════════╗
║             rbplay  —  TREE SESSION (command surface)            ║
║                                                                  ║
║  The object a UI talks to.  It owns the committed tree and one   ║
║  PlaybackController, and turns each command into:                ║
║                                                                  ║
║    1. stop any in-flight playback                                ║
║    2. run the mutation algorithm on the committed tree           ║
║    3. load the new steps into the controller                     ║
║    4. commit the last snapshot                                   ║
║    5. optionally start playback (Settings.autoplay)              ║
║                                                                  ║
║  The algorithms never see the controller's current tree, so two  ║
║  operations can never interleave on the same logical tree.       ║
╚══════════════════════════════════════════════════════════════════╝
"""

from . import engine
from .log import get_logger
from .node import inorder
from .playback import PlaybackController
from .recorder import COMPLETE, Step
from .settings import Settings

logger = get_logger(__name__)


def parse_values(text):
    """Parse a string of comma/space separated numbers.

    Accepts integers and floats.  Invalid tokens are skipped.

    Args:
        text (str): Raw input text, e.g. "7, 3, 18, abc, 10.5"

    Returns:
        list[int | float]: Parsed numeric values, e.g. [7, 3, 18, 10.5]
    """
    result = []
    for token in text.replace(",", " ").split():
        try:
            result.append(int(token))          # try integer first
        except ValueError:
            try:
                value = float(token)
            except ValueError:
                continue                       # non-numeric token
            if value == value:                 # drop "nan"
                result.append(value)
    return result


class TreeSession:
    """
    Commands + committed tree + playback for one visualizer.

    Args:
        scheduler: ``after``/``after_cancel`` provider for playback.
        settings (Settings|None): Speed / autoplay preferences;
                                  defaults are used when omitted.

    Attributes:
        root       (TreeNode|None)     : Committed tree.
        controller (PlaybackController): Active step player.
    """

    def __init__(self, scheduler, settings=None):
        self.settings   = settings if settings is not None else Settings(load=False)
        self.controller = PlaybackController(scheduler, self.settings.anim_speed)
        self.root       = None
        self.last_steps = []

    # ── Helpers ─────────────────────────────────────────────────
    def keys(self):
        """Ascending keys of the committed tree."""
        return inorder(self.root)

    def _run(self, label, steps):
        self.controller.stop()
        self.last_steps = steps
        self.root = engine.committed_root(steps)
        self.controller.load_steps(steps)
        logger.info("%s: %d steps, %d keys", label, len(steps), len(self.keys()))
        if self.settings.autoplay:
            self.controller.play(self.settings.anim_speed)
        return steps

    # ── Mutating commands ───────────────────────────────────────
    def insert(self, value):
        return self._run(f"insert {value}", engine.insert(self.root, value))

    def delete(self, value):
        return self._run(f"delete {value}", engine.delete(self.root, value))

    def update(self, old_value, new_value):
        return self._run(f"update {old_value}->{new_value}",
                         engine.update(self.root, old_value, new_value))

    def build_animated(self, values):
        values = list(values)
        return self._run(f"build {len(values)} values",
                         engine.build_from_sequence(values))

    def load_instant(self, values):
        """Replace the tree without animation; one step shows the result."""
        self.controller.stop()
        self.root = engine.load_instant(values)
        text = "Loaded tree (instant)." if self.root is not None else "Loaded empty tree."
        self.last_steps = [Step(self.root, frozenset(), text, COMPLETE)]
        self.controller.load_steps(self.last_steps)
        self.controller.step_forward()
        logger.info("load_instant: %d keys", len(self.keys()))
        return self.last_steps

    # ── Playback commands ───────────────────────────────────────
    def play(self, speed_ms=None):
        if speed_ms is not None:
            self.settings.set_speed(speed_ms)
        self.controller.play(self.settings.anim_speed)

    def set_speed(self, speed_ms):
        self.settings.set_speed(speed_ms)
        self.controller.set_speed(self.settings.anim_speed)

    def pause(self):
        self.controller.pause()

    def step_forward(self):
        return self.controller.step_forward()

    def step_back(self):
        return self.controller.step_back()

    def seek(self, index):
        return self.controller.seek(index)

    def stop(self):
        self.controller.stop()
