"""Tests for PNG export and the preview window.

Tests cover:
- Saving a RenderTarget as RGBA PNG
- Saving raw float arrays as RGB PNG
- NaN and out-of-range handling in the NumPy conversion
- Preview title formatting and figure creation
"""

import math

import numpy as np
from PIL import Image


class TestImageConversion:
    """Tests for image_to_uint8."""

    def test_clamps_and_rounds(self):
        """Test clamping to [0, 255] and round-to-nearest."""
        from src.spheretrace.preview.export import image_to_uint8

        image = np.array([[[-10.0, 12.4, 300.0], [math.nan, 127.6, 255.0]]], dtype=np.float32)
        result = image_to_uint8(image)

        assert result.dtype == np.uint8
        assert result.tolist() == [[[0, 12, 255], [0, 128, 255]]]

    def test_infinities(self):
        """Test that infinities clamp to the ends of the range."""
        from src.spheretrace.preview.export import image_to_uint8

        image = np.array([[[math.inf, -math.inf, 0.0]]], dtype=np.float32)
        assert image_to_uint8(image).tolist() == [[[255, 0, 0]]]


class TestPNGExport:
    """Tests for PNG writing through Pillow."""

    def test_save_png_from_target(self, tmp_path):
        """Test that a RenderTarget round-trips through a PNG file."""
        from src.spheretrace.core.color import Color
        from src.spheretrace.core.target import RenderTarget
        from src.spheretrace.preview.export import save_png

        target = RenderTarget(2, 2)
        target.write_row(0, [Color(255.0, 0.0, 0.0), Color(0.0, 255.0, 0.0)])
        target.write_row(1, [Color(0.0, 0.0, 255.0), Color(400.0, -1.0, 64.0)])

        path = save_png(target, tmp_path / "out.png")
        assert path.exists()

        with Image.open(path) as reopened:
            assert reopened.mode == "RGBA"
            assert reopened.size == (2, 2)
            pixels = np.asarray(reopened)

        assert pixels[0, 0].tolist() == [255, 0, 0, 255]
        assert pixels[0, 1].tolist() == [0, 255, 0, 255]
        assert pixels[1, 0].tolist() == [0, 0, 255, 255]
        assert pixels[1, 1].tolist() == [255, 0, 64, 255]

    def test_save_png_accepts_strings(self, tmp_path):
        """Test that string paths are accepted and returned as Path."""
        from src.spheretrace.core.target import RenderTarget
        from src.spheretrace.preview.export import save_png

        path = save_png(RenderTarget(1, 1), str(tmp_path / "black.png"))
        assert path.name == "black.png"
        assert path.exists()

    def test_save_png_from_array(self, tmp_path):
        """Test saving a raw float array as RGB."""
        from src.spheretrace.preview.export import save_png_from_array

        image = np.full((3, 4, 3), 128.0, dtype=np.float32)
        path = save_png_from_array(image, tmp_path / "grey.png")

        with Image.open(path) as reopened:
            assert reopened.mode == "RGB"
            assert reopened.size == (4, 3)
            assert np.all(np.asarray(reopened) == 128)


class TestPreview:
    """Tests for the Matplotlib preview."""

    def test_format_title(self):
        """Test the title with and without a cast count."""
        from src.spheretrace.preview.display import format_title

        assert format_title("spheres") == "spheres"
        assert format_title("spheres", 1234567) == "spheres (1,234,567 casts)"

    def test_show_preview_builds_figure(self, monkeypatch):
        """Test that the preview draws the image without opening a window."""
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        from src.spheretrace.core.target import RenderTarget
        from src.spheretrace.preview.display import show_preview

        monkeypatch.setattr(plt, "show", lambda block=True: None)

        fig = show_preview(RenderTarget(4, 3), title="test", cast_count=12, block=False)
        try:
            ax = fig.axes[0]
            assert ax.get_title() == "test (12 casts)"
            assert ax.images[0].get_array().shape == (3, 4, 4)
        finally:
            plt.close(fig)
