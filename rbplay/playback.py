"""
╔══════════════════════════════════════════════════════════════════╗
║             rbplay  —  PLAYBACK CONTROLLER                       ║
║                                                                  ║
║  Holds the active list of Steps and the single authoritative     ║
║  ``current_index``.  The "current tree" is always exactly one    ║
║  recorded snapshot; steps are applied strictly in order.         ║
║                                                                  ║
║  State machine                                                   ║
║  ─────────────                                                   ║
║          play()             last step applied                    ║
║   IDLE ──────────► PLAYING ──────────────────► IDLE              ║
║    ▲                │   ▲                                        ║
║    │ stop()  pause()│   │ play()                                 ║
║    │                ▼   │                                        ║
║    └──────────── PAUSED ┘                                        ║
║                                                                  ║
║  Auto-advance is cooperative: the controller asks a scheduler    ║
║  for ``after(ms, callback)`` exactly like a tkinter widget       ║
║  does, so pause/stop only ever take effect between steps.        ║
╚══════════════════════════════════════════════════════════════════╝
"""

import heapq
import itertools
from collections import namedtuple

from .errors import PlaybackError
from .log import get_logger

logger = get_logger(__name__)

IDLE    = "idle"
PLAYING = "playing"
PAUSED  = "paused"

DEFAULT_SPEED_MS = 600

PlaybackView = namedtuple("PlaybackView", [
    "current_tree",      # TreeNode|None – snapshot currently shown
    "highlight_ids",     # frozenset[str]
    "explanation",       # str
    "step_index",        # int, -1 before the first step is applied
    "total_steps",       # int
    "state",             # IDLE / PLAYING / PAUSED
])


# ═════════════════════════════════════════════════════════════════
#  MANUAL SCHEDULER
#
#  A deterministic stand-in for a GUI event loop.  Time only moves
#  when advance() / run_all() is called, which makes playback fully
#  reproducible in tests and headless exports.
# ═════════════════════════════════════════════════════════════════
class ManualScheduler:
    """
    In-process timer queue with tkinter's ``after`` interface.

    Attributes:
        now (int): Virtual clock in milliseconds.
    """

    def __init__(self):
        self.now        = 0
        self._queue     = []                # heap of (due, token, callback)
        self._tokens    = itertools.count()
        self._cancelled = set()

    def after(self, ms, callback):
        token = next(self._tokens)
        heapq.heappush(self._queue, (self.now + int(ms), token, callback))
        return token

    def after_cancel(self, token):
        self._cancelled.add(token)

    def pending(self) -> int:
        """Number of callbacks still waiting to fire."""
        return sum(1 for _, t, _ in self._queue if t not in self._cancelled)

    def _pop_next(self, until=None):
        while self._queue:
            due, token, callback = self._queue[0]
            if until is not None and due > until:
                return None
            heapq.heappop(self._queue)
            if token in self._cancelled:
                self._cancelled.discard(token)
                continue
            self.now = due
            return callback
        return None

    def advance(self, ms):
        """Move the clock forward ``ms`` and fire everything now due."""
        target = self.now + int(ms)
        callback = self._pop_next(target)
        while callback is not None:
            callback()
            callback = self._pop_next(target)
        self.now = target

    def run_all(self):
        """Fire callbacks in due order until the queue is empty."""
        callback = self._pop_next()
        while callback is not None:
            callback()
            callback = self._pop_next()


# ═════════════════════════════════════════════════════════════════
#  PLAYBACK CONTROLLER
# ═════════════════════════════════════════════════════════════════
class PlaybackController:
    """
    Step-by-step player for one operation's ``list[Step]``.

    Args:
        scheduler: Object with ``after(ms, cb)`` / ``after_cancel(id)``
                   (a tkinter widget or a ManualScheduler).
        speed_ms (int): Default delay between automatic steps.

    Attributes:
        state         (str): IDLE, PLAYING or PAUSED.
        current_index (int): Index of the applied step, -1 if none.
        speed_ms      (int): Delay used for the next scheduled tick.
    """

    def __init__(self, scheduler, speed_ms=DEFAULT_SPEED_MS):
        self.scheduler     = scheduler
        self.speed_ms      = DEFAULT_SPEED_MS
        self.set_speed(speed_ms)
        self._steps        = []
        self.current_index = -1
        self.state         = IDLE
        self._after_id     = None
        self._observers    = []

    # ── Read-only views ─────────────────────────────────────────
    @property
    def steps(self):
        return list(self._steps)

    @property
    def total_steps(self) -> int:
        return len(self._steps)

    @property
    def current_step(self):
        if 0 <= self.current_index < len(self._steps):
            return self._steps[self.current_index]
        return None

    @property
    def current_tree(self):
        step = self.current_step
        return step.snapshot if step is not None else None

    def view(self) -> PlaybackView:
        step = self.current_step
        if step is None:
            return PlaybackView(None, frozenset(), "", self.current_index,
                                len(self._steps), self.state)
        return PlaybackView(step.snapshot, step.highlight_ids, step.explanation,
                            self.current_index, len(self._steps), self.state)

    # ── Observers ───────────────────────────────────────────────
    def subscribe(self, callback):
        """
        Register ``callback(PlaybackView)`` for every state change.

        Returns:
            callable: Call it to unsubscribe.
        """
        self._observers.append(callback)

        def unsubscribe():
            if callback in self._observers:
                self._observers.remove(callback)
        return unsubscribe

    def _notify(self):
        v = self.view()
        for callback in list(self._observers):
            callback(v)

    # ── Timer plumbing ──────────────────────────────────────────
    def _cancel_tick(self):
        if self._after_id is not None:
            self.scheduler.after_cancel(self._after_id)
            self._after_id = None

    def _tick(self):
        self._after_id = None
        if self.state != PLAYING:
            return                      # paused / stopped in between
        self.current_index += 1
        if self.current_index >= len(self._steps) - 1:
            self.state = IDLE           # last step reached
        else:
            self._after_id = self.scheduler.after(self.speed_ms, self._tick)
        self._notify()

    # ── Commands ────────────────────────────────────────────────
    def set_speed(self, ms):
        """Delay between automatic steps; takes effect on the next tick."""
        ms = int(ms)
        if ms <= 0:
            raise ValueError(f"playback speed must be positive, got {ms}")
        self.speed_ms = ms

    def load_steps(self, steps):
        """Replace the active sequence; nothing is applied yet."""
        self._cancel_tick()
        self._steps        = list(steps)
        self.current_index = -1
        self.state         = IDLE
        logger.debug("loaded %d steps", len(self._steps))
        self._notify()

    def play(self, interval_ms=None):
        """
        Start (or resume) automatic advancement.

        The next step is applied immediately, then one more every
        ``speed_ms`` until the last step.  At the last step already,
        playback restarts from the first step.
        """
        if self.state == PLAYING:
            return
        if not self._steps:
            logger.info("play: no recorded steps")
            return
        if interval_ms is not None:
            self.set_speed(interval_ms)
        if self.current_index >= len(self._steps) - 1:
            self.current_index = -1
        self.state = PLAYING
        self._tick()

    def pause(self):
        if self.state != PLAYING:
            return
        self._cancel_tick()
        self.state = PAUSED
        self._notify()

    def seek(self, index):
        """
        Jump to ``index`` (clamped to the valid range) and apply it.

        Raises:
            PlaybackError: while playing.
        """
        if self.state == PLAYING:
            raise PlaybackError("pause playback before moving manually")
        if not self._steps:
            return None
        self.current_index = max(0, min(len(self._steps) - 1, int(index)))
        self._notify()
        return self.current_step

    def step_forward(self):
        return self.seek(self.current_index + 1)

    def step_back(self):
        return self.seek(self.current_index - 1)

    def stop(self):
        """Drop the active sequence; the current tree becomes empty."""
        self._cancel_tick()
        self._steps        = []
        self.current_index = -1
        self.state         = IDLE
        self._notify()
