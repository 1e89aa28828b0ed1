"""
╔══════════════════════════════════════════════════════════════════╗
║             rbplay  —  VIEWER WINDOW                             ║
║                                                                  ║
║  ┌─────────────────────────────────────────────────────────────┐ ║
║  │ INPUT  [________] [Insert][Delete][Update][Build][Load]     │ ║
║  ├─────────────────────────────────────────────────────────────┤ ║
║  │                       Canvas (tree)                         │ ║
║  ├─────────────────────────────────────────────────────────────┤ ║
║  │ explanation text                         Step 3 / 12        │ ║
║  │ [◀Prev][▶Play][Next▶][■Stop]  Speed:[====]  [PNG][PDF][MP4]│ ║
║  │ stats: nodes / height / black-height / valid                │ ║
║  └─────────────────────────────────────────────────────────────┘ ║
║                                                                  ║
║  The window is the playback scheduler (Tk ``after``) and only    ║
║  draws what the PlaybackController pushes to it.                 ║
╚══════════════════════════════════════════════════════════════════╝
"""

from tkinter import (Tk, Frame, Canvas, Label, Entry, Button, Scale, StringVar,
                     LEFT, RIGHT, TOP, BOTTOM, BOTH, X, HORIZONTAL,
                     messagebox, filedialog)

from .errors import ExportError
from .export import PDFExporter, VideoExporter, export_png
from .layout import NODE_RADIUS, canvas_height, canvas_width, compute_layout, to_canvas
from .log import get_logger
from .node import RED
from .playback import PLAYING
from .session import TreeSession, parse_values
from .settings import MAX_SPEED_MS, MIN_SPEED_MS, Settings
from .stats import black_height, count_colors, count_nodes, tree_height, validate_rb

logger = get_logger(__name__)


class ViewerWindow(Frame):
    """
    Main window: relays commands to a TreeSession and redraws on
    every PlaybackView pushed by its controller.

    Args:
        master   (Tk)      : Root window (also the playback scheduler).
        settings (Settings): Theme / speed / autoplay preferences.
    """

    def __init__(self, master, settings):
        super().__init__(master, bg=settings.get("BG"))
        self.settings = settings
        self.session  = TreeSession(master, settings)
        self.input_var = StringVar()
        self._build_ui()
        self.session.controller.subscribe(self._on_view)
        self.pack(fill=BOTH, expand=True)
        self._on_view(self.session.controller.view())

    # ═══════════════════════════════════════════════════════════════
    #  UI CONSTRUCTION
    # ═══════════════════════════════════════════════════════════════
    def _btn(self, parent, text, cmd, color_key="BTN_BG"):
        b = Button(parent, text=text, command=cmd, bg=self.settings.get(color_key),
                   fg=self.settings.get("FG"), relief="flat", padx=8)
        b.pack(side=LEFT, padx=3, pady=4)
        return b

    def _build_ui(self):
        s = self.settings

        # ── Input bar ──
        top = Frame(self, bg=s.get("BG2"))
        top.pack(side=TOP, fill=X)
        Label(top, text="Values:", bg=s.get("BG2"), fg=s.get("FG")).pack(side=LEFT, padx=6)
        entry = Entry(top, textvariable=self.input_var, width=30)
        entry.pack(side=LEFT, padx=4)
        entry.bind("<Return>", lambda e: self._insert())
        self._btn(top, "+ Insert", self._insert, "GREEN_C")
        self._btn(top, "- Delete", self._delete, "RED_C")
        self._btn(top, "Update", self._update)
        self._btn(top, "Build", self._build)
        self._btn(top, "Load", self._load)

        # ── Bottom bars (packed before the canvas so they keep their size) ──
        stats = Frame(self, bg=s.get("BG2"))
        stats.pack(side=BOTTOM, fill=X)
        self.stats_label = Label(stats, text="", bg=s.get("BG2"), fg=s.get("FG"),
                                 anchor="w")
        self.stats_label.pack(side=LEFT, padx=6)

        controls = Frame(self, bg=s.get("BG2"))
        controls.pack(side=BOTTOM, fill=X)
        self._btn(controls, "◀ Prev", self._prev)
        self.play_btn = self._btn(controls, "▶ Play", self._toggle_play, "GREEN_C")
        self._btn(controls, "Next ▶", self._next)
        self._btn(controls, "■ Stop", self.session.stop)
        self.speed_scale = Scale(controls, from_=MIN_SPEED_MS, to=MAX_SPEED_MS,
                                 orient=HORIZONTAL, label="Speed (ms)",
                                 command=lambda v: self.session.set_speed(int(float(v))),
                                 bg=s.get("BG2"), fg=s.get("FG"), highlightthickness=0)
        self.speed_scale.set(s.anim_speed)
        self.speed_scale.pack(side=LEFT, padx=10)
        self._btn(controls, "PNG", self._export_png)
        self._btn(controls, "PDF", self._export_pdf)
        self._btn(controls, "MP4", self._export_video)

        info = Frame(self, bg=s.get("BG"))
        info.pack(side=BOTTOM, fill=X)
        self.step_desc = Label(info, text="", bg=s.get("BG"), fg=s.get("FG"),
                               anchor="w", wraplength=700, justify=LEFT)
        self.step_desc.pack(side=LEFT, padx=6, pady=4)
        self.step_label = Label(info, text="", bg=s.get("BG"), fg=s.get("ACCENT"))
        self.step_label.pack(side=RIGHT, padx=6)

        # ── Canvas ──
        self.canvas = Canvas(self, bg=s.get("CANVAS_BG"), highlightthickness=0,
                             width=900, height=480)
        self.canvas.pack(side=TOP, fill=BOTH, expand=True)

    # ═══════════════════════════════════════════════════════════════
    #  COMMANDS
    # ═══════════════════════════════════════════════════════════════
    def _values(self, need=1):
        vals = parse_values(self.input_var.get())
        if len(vals) < need:
            messagebox.showwarning("Warning", f"Enter at least {need} number(s).")
            return None
        return vals

    def _insert(self):
        vals = self._values()
        if vals:
            self.session.insert(vals[0])
            self.input_var.set("")

    def _delete(self):
        vals = self._values()
        if vals:
            self.session.delete(vals[0])
            self.input_var.set("")

    def _update(self):
        vals = self._values(2)
        if vals:
            self.session.update(vals[0], vals[1])

    def _build(self):
        vals = self._values()
        if vals:
            self.session.build_animated(vals)

    def _load(self):
        vals = self._values()
        if vals:
            self.session.load_instant(vals)

    def _toggle_play(self):
        if self.session.controller.state == PLAYING:
            self.session.pause()
        else:
            self.session.play(self.speed_scale.get())

    def _next(self):
        if self.session.controller.state != PLAYING:
            self.session.step_forward()

    def _prev(self):
        if self.session.controller.state != PLAYING:
            self.session.step_back()

    # ═══════════════════════════════════════════════════════════════
    #  DRAWING
    # ═══════════════════════════════════════════════════════════════
    def _on_view(self, view):
        playing = view.state == PLAYING
        self.play_btn.config(text="⏸ Pause" if playing else "▶ Play",
                             bg=self.settings.get("RED_C" if playing else "GREEN_C"))
        self.step_label.config(text=f"Step {view.step_index + 1} / {view.total_steps}")
        self.step_desc.config(text=view.explanation or "Ready - enter values above.")
        self._render_tree(view.current_tree, view.highlight_ids)
        self._update_stats(view.current_tree)

    def _render_tree(self, tree, highlight):
        s, c = self.settings, self.canvas
        c.delete("all")
        if tree is None:
            c.create_text(450, 200, text="Empty Tree", fill=s.get("FG"))
            return
        layout = compute_layout(tree)
        pos = to_canvas(layout)
        c.config(scrollregion=(0, 0, canvas_width(layout), canvas_height(layout)))
        for e in layout.edges:
            (x1, y1), (x2, y2) = pos[e.parent_id], pos[e.child_id]
            c.create_line(x1, y1, x2, y2, fill=s.get("EDGE"), width=2)
        r = NODE_RADIUS
        for n in layout.nodes:
            x, y = pos[n.id]
            lit = n.id in highlight
            c.create_oval(x - r, y - r, x + r, y + r,
                          fill=s.get("NODE_RED_FILL" if n.color == RED else "NODE_BLACK_FILL"),
                          outline=s.get("HIGHLIGHT") if lit else "white",
                          width=3 if lit else 1)
            c.create_text(x, y, text=str(n.value), fill=s.get("NODE_TEXT"))

    def _update_stats(self, root):
        if root is None:
            self.stats_label.config(text="Nodes: 0")
            return
        ok, _, _ = validate_rb(root)
        bc, rc = count_colors(root)
        self.stats_label.config(
            text=f"Nodes: {count_nodes(root)}   Height: {tree_height(root)}   "
                 f"Black-height: {black_height(root)}   Black/Red: {bc}/{rc}   "
                 f"Valid RB: {'yes' if ok else 'no'}")

    # ═══════════════════════════════════════════════════════════════
    #  EXPORT
    # ═══════════════════════════════════════════════════════════════
    def _export(self, ext, write):
        fn = filedialog.asksaveasfilename(defaultextension=ext,
                                          filetypes=[(ext.upper(), f"*{ext}")])
        if not fn:
            return
        try:
            write(fn)
        except ExportError as e:
            logger.warning("Export failed: %s", e)
            messagebox.showerror("Export Error", str(e))
            return
        messagebox.showinfo("Export", f"Saved {fn}")

    def _export_png(self):
        step = self.session.controller.current_step
        if step is None:
            messagebox.showinfo("Info", "Nothing to export yet.")
            return
        self._export(".png", lambda fn: export_png(step, fn, self.settings))

    def _export_pdf(self):
        steps = self.session.last_steps
        if not steps:
            messagebox.showinfo("Info", "Run an operation first.")
            return
        self._export(".pdf", lambda fn: PDFExporter(self.settings).export(steps, fn))

    def _export_video(self):
        steps = self.session.last_steps
        if not steps:
            messagebox.showinfo("Info", "Run an operation first.")
            return
        self._export(".mp4", lambda fn: VideoExporter(self.settings).export(steps, fn))


def main():
    """Open the viewer; closing the window saves the settings."""
    settings = Settings()
    root = Tk()
    root.title("rbplay - Red-Black Tree Playback")
    root.configure(bg=settings.get("BG"))
    ViewerWindow(root, settings)

    def on_close():
        settings.save()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", on_close)
    root.mainloop()
