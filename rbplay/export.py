"""
╔══════════════════════════════════════════════════════════════════╗
║             rbplay  —  EXPORT                                    ║
║                                                                  ║
║  Turns recorded steps into files:                                ║
║    • TreeImageRenderer — one step → Pillow image                 ║
║    • export_png()      — single frame                            ║
║    • PDFExporter       — one page per step + summary page        ║
║    • VideoExporter     — MP4 via OpenCV, imageio as fallback     ║
║                                                                  ║
║  Dependencies                                                    ║
║  ────────────                                                    ║
║  Pillow    → all image rendering                                 ║
║  reportlab → PDF walkthrough                                     ║
║  numpy + opencv-python / imageio → video frames and writer       ║
║                                                                  ║
║  Missing libraries raise ExportError when an export is asked     ║
║  for, so the rest of the package imports without them.           ║
╚══════════════════════════════════════════════════════════════════╝
"""

import os
import shutil
import tempfile
from datetime import datetime

from .errors import ExportError
from .layout import compute_layout
from .log import get_logger
from .node import RED
from .recorder import RECOLOR, ROTATE, Step
from .settings import Settings
from .stats import count_nodes, tree_height, validate_rb

logger = get_logger(__name__)

# ─── Pillow: image rendering for PNG / PDF / video frames ───────
try:
    from PIL import Image, ImageDraw, ImageFont
    HAS_PIL = True
except ImportError:
    HAS_PIL = False

# ─── NumPy: frame arrays for the video writers ──────────────────
try:
    import numpy as np
    HAS_NUMPY = True
except ImportError:
    HAS_NUMPY = False

# ─── OpenCV: preferred MP4 writer ───────────────────────────────
try:
    import cv2
    HAS_CV2 = True
except ImportError:
    HAS_CV2 = False

# ─── imageio: fallback video writer ─────────────────────────────
try:
    import imageio
    HAS_IMAGEIO = True
except ImportError:
    HAS_IMAGEIO = False

# ─── ReportLab: PDF walkthrough ─────────────────────────────────
try:
    from reportlab.lib.pagesizes import A4, landscape
    from reportlab.pdfgen import canvas as pdf_canvas
    HAS_REPORTLAB = True
except ImportError:
    HAS_REPORTLAB = False


def _require(flag, what):
    if not flag:
        raise ExportError(f"{what} required for this export (pip install rbplay)")


def _as_step(step_or_snapshot):
    if isinstance(step_or_snapshot, Step):
        return step_or_snapshot
    return Step(step_or_snapshot, frozenset(), "", "complete")


# ═════════════════════════════════════════════════════════════════
#  TREE IMAGE RENDERER
# ═════════════════════════════════════════════════════════════════
class TreeImageRenderer:
    """
    Off-screen tree renderer using Pillow.

    Layout: title at top, tree in the middle, explanation box at the
    bottom.  Highlighted node ids get a thick coloured ring.

    Args:
        settings (Settings): For colour lookups.
        width    (int)     : Image width in pixels.
        height   (int)     : Image height in pixels.
    """

    def __init__(self, settings=None, width=800, height=500):
        self.settings    = settings if settings is not None else Settings(load=False)
        self.width       = width
        self.height      = height
        self.node_radius = 22
        self.padding     = 50

    @staticmethod
    def _load_fonts():
        """
        Try a few common monospace fonts; fall back to Pillow's
        built-in bitmap font.

        Returns:
            tuple: (normal_14pt, small_11pt, title_16pt)
        """
        candidates = [
            "consola.ttf",                                         # Windows
            "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf", # Debian/Ubuntu
            "/usr/share/fonts/TTF/DejaVuSansMono.ttf",             # Arch
            "/System/Library/Fonts/Menlo.ttc",                     # macOS
        ]
        for p in candidates:
            try:
                return (ImageFont.truetype(p, 14), ImageFont.truetype(p, 11),
                        ImageFont.truetype(p, 16))
            except OSError:
                continue
        font = ImageFont.load_default()
        return font, font, font

    def render(self, step, title=""):
        """
        Render one step (or a bare snapshot) to a Pillow Image.

        Args:
            step  (Step|TreeNode|None): What to draw.
            title (str)               : Text drawn at the top.

        Returns:
            PIL.Image.Image: RGB image of ``width`` × ``height``.
        """
        _require(HAS_PIL, "Pillow")
        step = _as_step(step)
        s = self.settings

        img  = Image.new("RGB", (self.width, self.height), s.get("CANVAS_BG"))
        draw = ImageDraw.Draw(img)
        font, font_s, font_t = self._load_fonts()

        if title:
            draw.text((10, 8), title, fill=s.get("ACCENT"), font=font_t)

        if step.explanation:
            y0 = self.height - 80
            draw.rectangle([5, y0, self.width - 5, self.height - 5],
                           fill=s.get("CASE_BG"))
            for i, ln in enumerate(step.explanation.split("\n")[:3]):
                draw.text((10, y0 + 5 + i * 16), ln[:90],
                          fill=s.get("FG"), font=font_s)

        if step.snapshot is None:
            draw.text((self.width // 2 - 40, self.height // 2),
                      "Empty Tree", fill=s.get("FG"), font=font)
            return img

        layout = compute_layout(step.snapshot)
        slots  = max(len(layout.nodes) - 1, 1)
        th     = max(tree_height(step.snapshot) - 1, 1)
        pad    = self.padding
        tree_h = self.height - 140

        # Grid coordinates → pixels (a single node sits in the middle)
        def px(n):
            x = 0.5 if len(layout.nodes) == 1 else n.x / slots
            return int(pad + x * (self.width - 2 * pad)), int(60 + n.y * tree_h / th)

        pos = {n.id: px(n) for n in layout.nodes}

        # ── Edges first so nodes are drawn on top ──
        for e in layout.edges:
            draw.line([pos[e.parent_id], pos[e.child_id]],
                      fill=s.get("EDGE"), width=2)

        r = self.node_radius
        for n in layout.nodes:
            x, y = pos[n.id]
            lit     = n.id in step.highlight_ids
            fill    = s.get("NODE_RED_FILL") if n.color == RED else s.get("NODE_BLACK_FILL")
            outline = s.get("HIGHLIGHT") if lit else "white"
            draw.ellipse([x - r, y - r, x + r, y + r],
                         fill=fill, outline=outline, width=3 if lit else 1)
            txt = str(n.value)
            bb  = draw.textbbox((0, 0), txt, font=font)
            tw, tth = bb[2] - bb[0], bb[3] - bb[1]
            draw.text((x - tw // 2, y - tth // 2), txt,
                      fill=s.get("NODE_TEXT"), font=font)
        return img


def export_png(step, filename, settings=None, width=1200, height=800):
    """Export a single step as a PNG image file."""
    img = TreeImageRenderer(settings, width, height).render(step)
    try:
        img.save(filename, "PNG")
    except OSError as e:
        raise ExportError(f"could not write {filename}: {e}") from e
    logger.info("PNG written to %s", filename)
    return filename


# ═════════════════════════════════════════════════════════════════
#  PDF EXPORTER
#
#  Page 1      : title page
#  Pages 2..N  : one page per step (tree image + explanation)
#  Final page  : summary (steps, rotations, recolours, validity)
# ═════════════════════════════════════════════════════════════════
class PDFExporter:
    """
    Export a step sequence as a landscape-A4 PDF walkthrough.

    Attributes:
        settings (Settings)          : For colour/theme lookups.
        renderer (TreeImageRenderer) : Renders tree snapshots to images.
    """

    def __init__(self, settings=None):
        self.settings = settings if settings is not None else Settings(load=False)
        self.renderer = TreeImageRenderer(self.settings, 700, 400)

    def export(self, steps, filename, title="Red-Black Tree Walkthrough"):
        """
        Write ``steps`` to ``filename``.

        Raises:
            ExportError: reportlab/Pillow missing or the write failed.
        """
        _require(HAS_REPORTLAB, "reportlab")
        _require(HAS_PIL, "Pillow")
        steps = list(steps)

        pw, ph = landscape(A4)
        c = pdf_canvas.Canvas(filename, pagesize=landscape(A4))

        # ── Title page ──
        c.setFont("Helvetica-Bold", 28)
        c.drawCentredString(pw / 2, ph - 100, title)
        c.setFont("Helvetica", 16)
        c.drawCentredString(pw / 2, ph - 140, "Step-by-Step Walkthrough")
        c.setFont("Helvetica", 12)
        c.drawCentredString(pw / 2, ph - 180,
            f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M')}")
        c.drawCentredString(pw / 2, ph - 200, f"Total Steps: {len(steps)}")
        c.showPage()

        tmp = tempfile.mkdtemp(prefix="rbplay_")
        try:
            for i, st in enumerate(steps):
                img = self.renderer.render(st, f"Step {i + 1}: {st.kind}")
                ip = os.path.join(tmp, f"s{i:04d}.png")
                img.save(ip)

                c.setFont("Helvetica-Bold", 14)
                c.drawString(30, ph - 30, f"Step {i + 1} of {len(steps)}")
                c.drawImage(ip, 30, ph - 450, width=700, height=400,
                            preserveAspectRatio=True)
                c.setFont("Helvetica", 12)
                c.drawString(30, ph - 480, st.explanation[:110])
                c.showPage()

            # ── Summary page ──
            final = steps[-1].snapshot if steps else None
            ok, _, _ = validate_rb(final)
            c.setFont("Helvetica-Bold", 20)
            c.drawCentredString(pw / 2, ph - 100, "Summary")
            c.setFont("Helvetica", 12)
            y = ph - 150
            for line in [f"Total Steps: {len(steps)}",
                         f"Rotations: {sum(1 for s in steps if s.kind == ROTATE)}",
                         f"Recolorings: {sum(1 for s in steps if s.kind == RECOLOR)}",
                         f"Final nodes: {count_nodes(final)}",
                         f"Final tree valid: {'yes' if ok else 'no'}"]:
                c.drawString(100, y, line)
                y -= 22
            c.showPage()
            c.save()
        except OSError as e:
            raise ExportError(f"could not write {filename}: {e}") from e
        finally:
            shutil.rmtree(tmp, ignore_errors=True)
        logger.info("PDF with %d steps written to %s", len(steps), filename)
        return filename


# ═════════════════════════════════════════════════════════════════
#  VIDEO EXPORTER
#
#  Backends (tried in order):
#    1. OpenCV  (cv2.VideoWriter)
#    2. imageio (imageio.mimwrite)
#  Each step is held for ``fps`` frames, i.e. one second.
# ═════════════════════════════════════════════════════════════════
class VideoExporter:
    """
    Export a step sequence as an MP4 video.

    Args:
        settings (Settings): For colour/theme lookups.
        backend  (str|None): "cv2", "imageio" or None (auto).
    """

    def __init__(self, settings=None, backend=None, width=1280, height=720):
        self.settings = settings if settings is not None else Settings(load=False)
        self.backend  = backend
        self.size     = (width, height)
        self.renderer = TreeImageRenderer(self.settings, width, height)

    def render_frames(self, steps):
        """One RGB numpy array per step."""
        _require(HAS_NUMPY, "numpy")
        return [np.array(self.renderer.render(st, f"Step {i + 1}: {st.explanation[:50]}"))
                for i, st in enumerate(steps)]

    def _pick_backend(self):
        if self.backend == "cv2" or (self.backend is None and HAS_CV2):
            _require(HAS_CV2, "opencv-python")
            return "cv2"
        _require(HAS_IMAGEIO, "imageio")
        return "imageio"

    def export(self, steps, filename, fps=2):
        frames  = self.render_frames(steps)
        backend = self._pick_backend()
        try:
            if backend == "cv2":
                fourcc = cv2.VideoWriter_fourcc(*"mp4v")
                out = cv2.VideoWriter(filename, fourcc, fps, self.size)
                for frame in frames:
                    bgr = cv2.cvtColor(frame, cv2.COLOR_RGB2BGR)
                    for _ in range(max(1, fps)):    # hold each step
                        out.write(bgr)
                out.release()
            else:
                held = [f for f in frames for _ in range(max(1, fps))]
                imageio.mimwrite(filename, held, fps=fps)
        except (OSError, ValueError, RuntimeError) as e:
            raise ExportError(f"video export via {backend} failed: {e}") from e
        logger.info("Video (%s, %d frames) written to %s", backend, len(frames), filename)
        return filename
