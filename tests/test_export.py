"""
Tests for PNG / PDF / video-frame export.

Skipped automatically when the optional rendering libraries are
not installed.
"""

import pytest

from rbplay import export
from rbplay.engine import build_from_sequence
from rbplay.errors import ExportError

pytestmark = pytest.mark.export


@pytest.fixture
def steps():
    return build_from_sequence([10, 20, 30, 5])


class TestTreeImageRenderer:
    """Off-screen rendering with Pillow."""

    def test_render_step_size(self, steps):
        pytest.importorskip("PIL")
        img = export.TreeImageRenderer(width=640, height=360).render(steps[-1], "final")
        assert img.size == (640, 360)
        assert img.mode == "RGB"

    def test_render_empty_tree(self, steps):
        pytest.importorskip("PIL")
        img = export.TreeImageRenderer().render(steps[0])
        assert img.size == (800, 500)

    def test_render_bare_snapshot(self, steps):
        pytest.importorskip("PIL")
        img = export.TreeImageRenderer().render(steps[-1].snapshot)
        assert img.size == (800, 500)

    def test_render_without_pillow_raises(self, steps, monkeypatch):
        monkeypatch.setattr(export, "HAS_PIL", False)
        with pytest.raises(ExportError):
            export.TreeImageRenderer().render(steps[-1])


class TestFileExports:
    """PNG and PDF files."""

    def test_export_png(self, steps, tmp_path):
        pytest.importorskip("PIL")
        out = tmp_path / "step.png"
        export.export_png(steps[-1], str(out), width=400, height=300)
        assert out.read_bytes().startswith(b"\x89PNG")

    def test_export_pdf(self, steps, tmp_path):
        pytest.importorskip("PIL")
        pytest.importorskip("reportlab")
        out = tmp_path / "walkthrough.pdf"
        export.PDFExporter().export(steps, str(out))
        assert out.read_bytes().startswith(b"%PDF")

    def test_pdf_without_reportlab_raises(self, steps, tmp_path, monkeypatch):
        monkeypatch.setattr(export, "HAS_REPORTLAB", False)
        with pytest.raises(ExportError):
            export.PDFExporter().export(steps, str(tmp_path / "x.pdf"))


class TestVideoExporter:
    """Frame generation and backend selection."""

    def test_render_frames_one_per_step(self, steps):
        pytest.importorskip("PIL")
        pytest.importorskip("numpy")
        frames = export.VideoExporter(width=320, height=240).render_frames(steps)
        assert len(frames) == len(steps)
        assert frames[0].shape == (240, 320, 3)

    def test_missing_backends_raise(self, monkeypatch):
        monkeypatch.setattr(export, "HAS_CV2", False)
        monkeypatch.setattr(export, "HAS_IMAGEIO", False)
        with pytest.raises(ExportError):
            export.VideoExporter()._pick_backend()

    def test_falls_back_to_imageio(self, monkeypatch):
        monkeypatch.setattr(export, "HAS_CV2", False)
        monkeypatch.setattr(export, "HAS_IMAGEIO", True)
        assert export.VideoExporter()._pick_backend() == "imageio"

    def test_explicit_cv2_backend_requires_opencv(self, monkeypatch):
        monkeypatch.setattr(export, "HAS_CV2", False)
        with pytest.raises(ExportError):
            export.VideoExporter(backend="cv2")._pick_backend()
