"""
Implements :class:`.PixelBuffer`, the decoded, addressable pixel source the
sampler reads from. Decoding itself is done by PILLOW, this class only exposes
the few operations the sampler and the animation loader need.
"""

from __future__ import annotations

import io

import PIL.Image
import numpy as np

from .color import Color
from .exceptions import DecodeError


class PixelBuffer:
    """
    A decoded, possibly multi-frame image.

    Multi-frame containers such as animated GIFs expose their frames through
    :attr:`frame_count` and :meth:`select_frame`, all pixel accessors refer
    to the currently selected frame.
    """

    def __init__(self, image: PIL.Image.Image):
        """
        :param image: The PILLOW image. It is referenced, not copied.
        """
        self._pil_handle = image
        self._frame_index = 0
        self._argb: np.ndarray | None = None

    @classmethod
    def from_bytes(cls, data: bytes) -> PixelBuffer:
        """
        Decodes an encoded image such as a PNG, JPEG or GIF.

        :param data: The encoded image data
        :return: The buffer

        Raises a DecodeError if PILLOW can not read the data
        """
        try:
            handle = PIL.Image.open(io.BytesIO(data))
            handle.load()
        except (
            PIL.UnidentifiedImageError,
            PIL.Image.DecompressionBombError,
            OSError,
            ValueError,
        ) as e:
            raise DecodeError(f"Invalid or damaged image data: {e}") from e
        return cls(handle)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> PixelBuffer:
        """
        Creates a single frame buffer from a uint8 numpy array.

        :param pixels: Array of shape (height, width) for grayscale,
            (height, width, 3) for RGB or (height, width, 4) for RGBA data.
        :return: The buffer
        """
        if pixels.dtype != np.uint8:
            raise ValueError("Unsupported array source, expected uint8 data")
        return cls(PIL.Image.fromarray(pixels))

    @property
    def width(self) -> int:
        """Width of the current frame in pixels."""
        return self._pil_handle.width

    @property
    def height(self) -> int:
        """Height of the current frame in pixels."""
        return self._pil_handle.height

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) in pixels."""
        return self.width, self.height

    @property
    def frame_count(self) -> int:
        """
        Number of frames, 1 for still images.

        Counting the frames of a GIF walks the whole file, so truncated or
        damaged containers raise a DecodeError here.
        """
        try:
            return getattr(self._pil_handle, "n_frames", 1)
        except (IndexError, OSError, EOFError, ValueError) as e:
            raise DecodeError(f"Frame count could not be determined: {e}") from e

    @property
    def frame_index(self) -> int:
        """Index of the currently selected frame."""
        return self._frame_index

    @property
    def frame_duration(self) -> int | None:
        """Display duration of the current frame in milliseconds, if the container stores one."""
        duration = self._pil_handle.info.get("duration")
        return int(duration) if duration is not None else None

    def select_frame(self, index: int) -> None:
        """
        Selects the frame all following pixel reads refer to.

        :param index: The zero based frame index
        """
        if not 0 <= index < self.frame_count:
            raise IndexError(f"Frame {index} out of range (0..{self.frame_count - 1})")
        if index == self._frame_index and self._argb is not None:
            return
        try:
            self._pil_handle.seek(index)
        except (EOFError, OSError, IndexError, ValueError) as e:
            raise DecodeError(f"Frame {index} could not be decoded: {e}") from e
        self._frame_index = index
        self._argb = None

    def to_argb_array(self) -> np.ndarray:
        """
        Returns the current frame as uint8 array of shape (height, width, 4)
        in ARGB channel order.
        """
        if self._argb is None:
            try:
                rgba = np.asarray(self._pil_handle.convert("RGBA"), dtype=np.uint8)
            except (OSError, ValueError) as e:
                raise DecodeError(f"Frame {self._frame_index} could not be decoded: {e}") from e
            self._argb = np.ascontiguousarray(rgba[:, :, [3, 0, 1, 2]])
        return self._argb

    def get_pixel(self, x: int, y: int) -> Color:
        """
        Returns the color of a single pixel of the current frame.

        :param x: The column
        :param y: The row
        """
        a, r, g, b = self.to_argb_array()[y, x]
        return Color(int(a), int(r), int(g), int(b))

    def cropped(self, box: tuple[int, int, int, int]) -> PixelBuffer:
        """
        Returns a single frame copy of a region of the current frame.

        :param box: (x, y, width, height) in pixels, has to lie within the image
        :return: The cropped buffer
        """
        x, y, width, height = box
        if x < 0 or y < 0 or width < 1 or height < 1:
            raise ValueError("Invalid crop region")
        if x + width > self.width or y + height > self.height:
            raise ValueError("Crop region out of image bounds")
        return PixelBuffer(self._pil_handle.convert("RGBA").crop((x, y, x + width, y + height)))

    def __repr__(self):
        return f"PixelBuffer({self.width}x{self.height}, frames={self.frame_count})"
