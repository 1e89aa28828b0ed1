"""
╔══════════════════════════════════════════════════════════════════╗
║             rbplay  —  SETTINGS                                  ║
║                                                                  ║
║  Persisted user preferences (JSON in the home directory) plus    ║
║  the two built-in Catppuccin-inspired colour palettes used by    ║
║  the viewer and the image/PDF/video exporters.                   ║
║                                                                  ║
║  Only preferences live here; tree state is never persisted.      ║
╚══════════════════════════════════════════════════════════════════╝
"""

import json
import os

from .log import get_logger

logger = get_logger(__name__)

MIN_SPEED_MS = 100
MAX_SPEED_MS = 2500

# ═════════════════════════════════════════════════════════════════
#  THEME DEFINITIONS
#  Each key maps to a hex colour used throughout the UI.
# ═════════════════════════════════════════════════════════════════
THEMES = {
    # ── Dark theme (Catppuccin Mocha) ────────────────────────────
    "dark": {
        "BG": "#1e1e2e",           # Main window background
        "BG2": "#2a2a3d",          # Secondary panels
        "FG": "#cdd6f4",           # Primary foreground text
        "ACCENT": "#89b4fa",       # Buttons, headings
        "GREEN_C": "#a6e3a1",      # Success / play
        "RED_C": "#f38ba8",        # Error / pause
        "BTN_BG": "#45475a",       # Button face colour
        "CANVAS_BG": "#1e1e2e",    # Tree-drawing canvas
        "NODE_RED_FILL": "#f38ba8",    # Fill for RED nodes
        "NODE_BLACK_FILL": "#585b70",  # Fill for BLACK nodes
        "NODE_TEXT": "#ffffff",    # Text inside nodes
        "EDGE": "#585b70",         # Lines connecting nodes
        "HIGHLIGHT": "#f9e2af",    # Node highlight ring colour
        "CASE_BG": "#313244",      # Explanation box fill
    },
    # ── Light theme (Catppuccin Latte) ───────────────────────────
    "light": {
        "BG": "#eff1f5",
        "BG2": "#dce0e8",
        "FG": "#4c4f69",
        "ACCENT": "#1e66f5",
        "GREEN_C": "#40a02b",
        "RED_C": "#d20f39",
        "BTN_BG": "#ccd0da",
        "CANVAS_BG": "#e6e9ef",
        "NODE_RED_FILL": "#d20f39",
        "NODE_BLACK_FILL": "#4c4f69",
        "NODE_TEXT": "#ffffff",
        "EDGE": "#8c8fa1",
        "HIGHLIGHT": "#df8e1d",
        "CASE_BG": "#bcc0cc",
    },
}


class Settings:
    """
    Persistent user preferences manager.

    Attributes:
        theme         (str) : Active theme name ("dark" / "light").
        anim_speed    (int) : Milliseconds per animation step.
        autoplay      (bool): Start playback right after each command.
        custom_colors (dict): Key→hex overrides on top of the theme.

    File location:  ~/.rbplay.json  (override with ``path``)
    """
    DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".rbplay.json")

    def __init__(self, path=None, load=True):
        self.path          = path or self.DEFAULT_PATH
        self.theme         = "dark"
        self.anim_speed    = 600
        self.autoplay      = False
        self.custom_colors = {}
        if load:
            self._load()

    # ── Load from disk ──────────────────────────────────────────
    def _load(self):
        """Read the settings JSON; unreadable files keep the defaults."""
        if not os.path.exists(self.path):
            return
        try:
            with open(self.path) as f:
                d = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, e)
            return
        if not isinstance(d, dict):
            logger.warning("Ignoring settings file %s: not a JSON object", self.path)
            return
        theme = d.get("theme", "dark")
        self.theme = theme if theme in THEMES else "dark"
        self.set_speed(d.get("anim_speed", 600))
        self.autoplay = bool(d.get("autoplay", False))
        colors = d.get("custom_colors", {})
        self.custom_colors = dict(colors) if isinstance(colors, dict) else {}

    # ── Save to disk ────────────────────────────────────────────
    def save(self) -> bool:
        try:
            with open(self.path, "w") as f:
                json.dump({"theme": self.theme,
                           "anim_speed": self.anim_speed,
                           "autoplay": self.autoplay,
                           "custom_colors": self.custom_colors}, f)
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", self.path, e)
            return False
        return True

    def set_speed(self, ms):
        """Store ``ms`` clamped to the slider range (100 – 2500)."""
        try:
            ms = int(ms)
        except (TypeError, ValueError):
            ms = 600
        self.anim_speed = max(MIN_SPEED_MS, min(MAX_SPEED_MS, ms))

    # ── Colour lookup ───────────────────────────────────────────
    def get(self, key):
        """
        Resolve a colour key to its hex value.

        Priority: custom_colors[key]  →  THEMES[theme][key]  →  "#ffffff"
        """
        if key in self.custom_colors:
            return self.custom_colors[key]
        return THEMES[self.theme].get(key, "#ffffff")
