"""
Downsampling of decoded images into tile grids.

Each tile's color is the plain average of the ARGB channels of its sample
window, the block of source pixels it covers::

    sample_w = source_width // width_tiles
    sample_h = source_height // height_tiles

Tile (tx, ty) averages the window starting at (tx * sample_w, ty * sample_h).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Union

import numpy as np

from .tile_grid import TileGrid

if TYPE_CHECKING:
    from .pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CropRect:
    """A crop region in source pixels."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def to_tuple(self) -> tuple[int, int, int, int]:
        """Return (x, y, width, height) tuple."""
        return self.x, self.y, self.width, self.height

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_tuple())


CropTypes = Union[CropRect, tuple[int, int, int, int]]
"Crop regions can be passed as CropRect or as (x, y, width, height) tuple"


def clamp_crop(crop: CropTypes, width: int, height: int) -> CropRect:
    """
    Moves a crop region inside the bounds of an image.

    A negative origin is moved to 0. If origin + extent reaches or exceeds the
    image dimension the extent is shortened so the region ends at the image's
    last row or column.

    :param crop: The requested region
    :param width: The image width in pixels
    :param height: The image height in pixels
    :return: The clamped region
    """
    x, y, crop_w, crop_h = (int(value) for value in crop)
    x = min(max(x, 0), width - 1)
    y = min(max(y, 0), height - 1)
    if x + crop_w >= width:
        crop_w = width - x
    if y + crop_h >= height:
        crop_h = height - y
    return CropRect(x, y, max(crop_w, 1), max(crop_h, 1))


class PixelSampler:
    """
    Averages blocks of source pixels into a :class:`.TileGrid`.

    The sampler is stateless and deterministic, one instance can be shared by
    any number of frames.
    """

    @staticmethod
    def sample_size(
        source_width: int, source_height: int, width_tiles: int, height_tiles: int
    ) -> tuple[int, int]:
        """
        Computes the sample window size.

        Requesting more tiles than the source has pixels would result in an
        empty window, the size is raised to one pixel in that case.

        :return: (sample_w, sample_h) in pixels
        """
        return (
            max(source_width // width_tiles, 1),
            max(source_height // height_tiles, 1),
        )

    def sample(
        self,
        buffer: "PixelBuffer",
        width_tiles: int,
        height_tiles: int,
        crop: CropTypes | None = None,
    ) -> TileGrid:
        """
        Samples the current frame of a buffer.

        :param buffer: The decoded image
        :param width_tiles: Grid width in tiles
        :param height_tiles: Grid height in tiles
        :param crop: Optional source region to sample, clamped to the image
        :return: The grid with height_tiles rows of width_tiles colors
        """
        if width_tiles < 1 or height_tiles < 1:
            raise ValueError(
                f"Invalid tile grid size {width_tiles}x{height_tiles}"
            )
        if crop is not None:
            region = clamp_crop(crop, buffer.width, buffer.height)
            buffer = buffer.cropped(region.to_tuple())
        pixels = buffer.to_argb_array()
        source_height, source_width = pixels.shape[:2]
        sample_w, sample_h = self.sample_size(
            source_width, source_height, width_tiles, height_tiles
        )
        if source_width < width_tiles or source_height < height_tiles:
            logger.debug(
                "Grid %dx%d exceeds source %dx%d, sampling single pixels",
                width_tiles,
                height_tiles,
                source_width,
                source_height,
            )
        # window coordinates per tile, clamped to the last valid row / column
        cols = np.minimum(
            np.arange(width_tiles)[:, None] * sample_w + np.arange(sample_w)[None, :],
            source_width - 1,
        )
        rows = np.minimum(
            np.arange(height_tiles)[:, None] * sample_h + np.arange(sample_h)[None, :],
            source_height - 1,
        )
        # gather rows then columns in uint8, widen only for the window sums
        windows = pixels.take(rows.ravel(), axis=0).take(cols.ravel(), axis=1)
        windows = windows.reshape(height_tiles, sample_h, width_tiles, sample_w, 4)
        averages = windows.sum(axis=(1, 3), dtype=np.uint32) // (sample_w * sample_h)
        return TileGrid.from_array(averages.astype(np.uint8))
