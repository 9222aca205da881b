"""
Pytest fixtures for termstag tests
"""

import io

import numpy as np
import PIL.Image
import pytest

from termstag import Settings

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)
WHITE = (255, 255, 255, 255)

GIF_COLORS = [(200, 30, 30), (30, 200, 30), (30, 30, 200)]
GIF_DURATION = 80


class RecordingSurface:
    """Terminal surface which records every call instead of drawing."""

    def __init__(self, background=(1, 2, 3)):
        self.background = background
        self.ops = []

    def move(self, column, row):
        self.ops.append(("move", column, row))

    def paint(self, text, rgb):
        self.ops.append(("paint", text, tuple(rgb)))

    def skip(self, columns):
        self.ops.append(("skip", columns))

    def background_rgb(self):
        return self.background

    def notice(self, message):
        self.ops.append(("notice", message))

    def flush(self):
        self.ops.append(("flush",))

    def of_kind(self, kind):
        return [op for op in self.ops if op[0] == kind]


@pytest.fixture
def surface() -> RecordingSurface:
    """A surface recording all draw operations."""
    return RecordingSurface()


@pytest.fixture
def images_dir(tmp_path):
    """An empty images directory."""
    path = tmp_path / "images"
    path.mkdir()
    return path


@pytest.fixture
def test_settings(images_dir) -> Settings:
    """Settings resolving bare filenames below the temporary images directory."""
    return Settings(IMAGES_DIR=images_dir)


@pytest.fixture
def quadrant_pixels() -> np.ndarray:
    """
    A 4x4 RGBA image with a solid color per 2x2 quadrant.

    Top left red, top right green, bottom left blue, bottom right white.
    """
    pixels = np.zeros((4, 4, 4), dtype=np.uint8)
    pixels[:2, :2] = RED
    pixels[:2, 2:] = GREEN
    pixels[2:, :2] = BLUE
    pixels[2:, 2:] = WHITE
    return pixels


@pytest.fixture
def quadrant_png(images_dir, quadrant_pixels):
    """The quadrant image stored as PNG in the images directory."""
    path = images_dir / "quadrants.png"
    PIL.Image.fromarray(quadrant_pixels, "RGBA").save(path)
    return path


@pytest.fixture
def animated_gif(images_dir):
    """A three frame 8x8 GIF, one solid color per frame."""
    path = images_dir / "anim.gif"
    frames = [PIL.Image.new("RGB", (8, 8), color) for color in GIF_COLORS]
    frames[0].save(
        path,
        save_all=True,
        append_images=frames[1:],
        duration=GIF_DURATION,
        loop=0,
    )
    return path


@pytest.fixture
def truncated_gif(images_dir):
    """
    A three frame 64x64 noise GIF cut off within its last frame.

    The first frame still decodes, counting or seeking the frames fails.
    """
    rng = np.random.default_rng(11)
    frames = [
        PIL.Image.fromarray(rng.integers(0, 256, size=(64, 64, 3), dtype=np.uint8), "RGB")
        for _ in range(3)
    ]
    buffer = io.BytesIO()
    frames[0].save(buffer, format="GIF", save_all=True, append_images=frames[1:], duration=50)
    data = buffer.getvalue()
    path = images_dir / "truncated.gif"
    path.write_bytes(data[: int(len(data) * 0.7)])
    return path
