"""
Tests for StaticFrame construction and failure handling.
"""

import dataclasses
from unittest.mock import patch

import numpy as np
import PIL.Image
import pytest

from termstag import (
    AnsiSurface,
    Color,
    FrameNotLoadedError,
    MEMORY_SOURCE,
    PixelBuffer,
    StaticFrame,
    TerminalCompositor,
    TileGrid,
)

from conftest import BLUE, GREEN, RED, WHITE


class TestStaticFrameLoad:
    """Tests for StaticFrame.load"""

    def test_load_relative(self, quadrant_png, test_settings):
        frame = StaticFrame.load("quadrants.png", 2, 2, settings=test_settings)
        assert frame.loaded
        assert frame.error is None
        assert frame.source == str(quadrant_png.absolute())
        assert frame.size == (2, 2)
        grid = frame.require_grid()
        assert grid.color_at(0, 0) == Color.from_rgba(*RED)
        assert grid.color_at(1, 0) == Color.from_rgba(*GREEN)
        assert grid.color_at(0, 1) == Color.from_rgba(*BLUE)
        assert grid.color_at(1, 1) == Color.from_rgba(*WHITE)

    def test_load_full_path(self, quadrant_png):
        frame = StaticFrame.load(str(quadrant_png), 1, 1, full_dir=True)
        assert frame.loaded
        assert frame.source == str(quadrant_png)

    def test_load_url(self, quadrant_png):
        from test_source import _mock_response

        data = quadrant_png.read_bytes()
        with patch("termstag.source.urlopen", return_value=_mock_response(data)):
            frame = StaticFrame.load("https://example.com/q.png", 2, 2, url=True)
        assert frame.loaded
        assert frame.source == "https://example.com/q.png"

    def test_load_with_crop(self, quadrant_png, test_settings):
        frame = StaticFrame.load(
            "quadrants.png", 1, 1, crop=(0, 2, 2, 2), settings=test_settings
        )
        assert frame.require_grid().color_at(0, 0) == Color.from_rgba(*BLUE)

    def test_missing_file(self, images_dir, test_settings):
        """A missing file results in a frame without grid, not an exception."""
        frame = StaticFrame.load("missing.png", 10, 10, settings=test_settings)
        assert not frame.loaded
        assert frame.grid is None
        assert frame.source == str((images_dir / "missing.png").absolute())
        assert "missing.png" in frame.error
        assert frame.size == (10, 10)
        with pytest.raises(FrameNotLoadedError, match="missing.png"):
            frame.require_grid()

    def test_missing_file_draw_reports_path(self, images_dir, test_settings):
        frame = StaticFrame.load("missing.png", 10, 10, settings=test_settings)
        surface = AnsiSurface()
        assert not TerminalCompositor(surface).draw(frame, 3, 4)
        output = surface.getvalue()
        assert str(images_dir / "missing.png") in output
        assert "\033" not in output

    def test_damaged_file(self, images_dir, test_settings):
        (images_dir / "broken.png").write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 20)
        frame = StaticFrame.load("broken.png", 4, 4, settings=test_settings)
        assert not frame.loaded
        assert frame.error

    def test_image_exceeding_pixel_limit(self, quadrant_png, test_settings, monkeypatch):
        """Pillow's decompression bomb check results in a failed frame."""
        monkeypatch.setattr(PIL.Image, "MAX_IMAGE_PIXELS", 5)
        frame = StaticFrame.load("quadrants.png", 2, 2, settings=test_settings)
        assert not frame.loaded
        assert frame.error

    def test_truncated_gif_first_frame(self, truncated_gif, test_settings):
        """A still frame only needs the first frame of a damaged GIF."""
        frame = StaticFrame.load("truncated.gif", 4, 4, settings=test_settings)
        assert frame.loaded


class TestStaticFrameInMemory:
    """Tests for the in-memory construction paths"""

    def test_from_buffer(self, quadrant_pixels):
        frame = StaticFrame.from_buffer(PixelBuffer.from_array(quadrant_pixels), 2, 2)
        assert frame.loaded
        assert frame.source == MEMORY_SOURCE
        assert frame.grid.color_at(1, 1) == Color.from_rgba(*WHITE)

    def test_from_image(self, quadrant_pixels):
        image = PIL.Image.fromarray(quadrant_pixels, "RGBA")
        frame = StaticFrame.from_image(image, 4, 4)
        assert frame.size == (4, 4)
        assert frame.grid.color_at(3, 0) == Color.from_rgba(*GREEN)

    def test_grid_size_must_match(self):
        grid = TileGrid.from_array(np.zeros((2, 2, 4), dtype=np.uint8))
        with pytest.raises(ValueError):
            StaticFrame(3, 2, grid=grid)

    def test_grid_or_error(self):
        with pytest.raises(ValueError):
            StaticFrame(2, 2)
        grid = TileGrid.from_array(np.zeros((2, 2, 4), dtype=np.uint8))
        with pytest.raises(ValueError):
            StaticFrame(2, 2, grid=grid, error="both")

    def test_frozen(self, quadrant_pixels):
        frame = StaticFrame.from_buffer(PixelBuffer.from_array(quadrant_pixels), 2, 2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            # noinspection PyDataclass
            frame.width_tiles = 5

    def test_display(self, quadrant_pixels, surface):
        frame = StaticFrame.from_buffer(PixelBuffer.from_array(quadrant_pixels), 2, 2)
        assert frame.display(1, 1, compositor=TerminalCompositor(surface))
        assert surface.ops[0] == ("move", 2, 1)
        assert len(surface.of_kind("paint")) == 4
