"""Exception types raised by rbplay.

Expected user-level outcomes (duplicate insert, deleting a missing
value) are *not* errors: they come back as a single "noop" step.
Only misuse of the API and export failures raise.
"""


class RBPlayError(Exception):
    """Base class for all rbplay errors."""


class PlaybackError(RBPlayError):
    """Illegal playback command for the controller's current state."""


class ExportError(RBPlayError):
    """An export backend is missing or failed to write its output."""
