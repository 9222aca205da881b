"""
Implements :class:`.StaticFrame`, a single image sampled into tiles and ready
to be drawn to a terminal.

Example:
    from termstag import StaticFrame

    frame = StaticFrame.load("room.png", 60, 40)
    frame.display()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import PIL.Image

from .config import Settings, settings as default_settings
from .exceptions import AcquisitionError, DecodeError, FrameNotLoadedError
from .pixel_buffer import PixelBuffer
from .sampler import CropTypes, PixelSampler
from .source import decode_bytes, fetch_bytes, resolve_source
from .tile_grid import TileGrid

if TYPE_CHECKING:
    from .compositor import TerminalCompositor

logger = logging.getLogger(__name__)

MEMORY_SOURCE = "<memory>"
"Source descriptor of frames created from in-memory images"


@dataclass(frozen=True)
class StaticFrame:
    """
    A still image sampled into a grid of tiles.

    A frame either holds a :class:`.TileGrid` or, if its source could not be
    read or decoded, no grid and the reason of the failure. Frames which
    failed to load can still be passed to the compositor which reports the
    failure instead of drawing.

    :ivar width_tiles: Width in tiles
    :ivar height_tiles: Height in tiles
    :ivar grid: The sampled tiles, None if loading failed
    :ivar source: Resolved path or URL the frame was loaded from
    :ivar error: Description of the failure if the grid is missing
    """

    width_tiles: int
    height_tiles: int
    grid: TileGrid | None = None
    source: str = MEMORY_SOURCE
    error: str | None = None

    def __post_init__(self):
        if self.grid is None and self.error is None:
            raise ValueError("A frame without tile grid requires an error reason")
        if self.grid is not None:
            if self.error is not None:
                raise ValueError("A loaded frame can not carry an error")
            if self.grid.size != (self.width_tiles, self.height_tiles):
                raise ValueError(
                    f"Grid size {self.grid.size} does not match "
                    f"{self.width_tiles}x{self.height_tiles} tiles"
                )

    @classmethod
    def load(
        cls,
        source: str,
        width_tiles: int,
        height_tiles: int,
        full_dir: bool = False,
        url: bool = False,
        crop: CropTypes | None = None,
        settings: Settings | None = None,
    ) -> StaticFrame:
        """
        Loads and samples an image file or URL.

        Read and decode errors do not raise, they result in a frame without
        grid, see :attr:`loaded` and :attr:`error`.

        :param source: Filename below the images directory, full path or URL
        :param width_tiles: Width in tiles
        :param height_tiles: Height in tiles
        :param full_dir: Set to True if source is a full path
        :param url: Set to True if source is a URL
        :param crop: Optional (x, y, width, height) region of the source in pixels
        :param settings: The settings to use, the module settings by default
        :return: The frame
        """
        settings = settings or default_settings
        mode, descriptor = resolve_source(
            source, full_dir=full_dir, url=url, settings=settings
        )
        try:
            data = fetch_bytes(descriptor, mode, timeout=settings.FETCH_TIMEOUT)
            buffer = decode_bytes(data)
            return cls.from_buffer(
                buffer, width_tiles, height_tiles, crop=crop, source=descriptor
            )
        except (AcquisitionError, DecodeError) as e:
            logger.warning("Image at %s gave error of %s", descriptor, e)
            return cls.failed(descriptor, width_tiles, height_tiles, str(e))

    @classmethod
    def from_buffer(
        cls,
        buffer: PixelBuffer,
        width_tiles: int,
        height_tiles: int,
        crop: CropTypes | None = None,
        source: str = MEMORY_SOURCE,
    ) -> StaticFrame:
        """
        Samples the currently selected frame of a decoded buffer.

        :param buffer: The decoded image
        :param width_tiles: Width in tiles
        :param height_tiles: Height in tiles
        :param crop: Optional (x, y, width, height) region of the source in pixels
        :param source: Descriptor stored for diagnostics
        :return: The frame
        """
        grid = PixelSampler().sample(buffer, width_tiles, height_tiles, crop=crop)
        return cls(width_tiles, height_tiles, grid=grid, source=source)

    @classmethod
    def from_image(
        cls,
        image: PIL.Image.Image,
        width_tiles: int,
        height_tiles: int,
        crop: CropTypes | None = None,
    ) -> StaticFrame:
        """Samples the current frame of a PILLOW image."""
        return cls.from_buffer(PixelBuffer(image), width_tiles, height_tiles, crop=crop)

    @classmethod
    def failed(
        cls, source: str, width_tiles: int, height_tiles: int, reason: str
    ) -> StaticFrame:
        """Creates a frame representing a source which could not be loaded."""
        return cls(width_tiles, height_tiles, grid=None, source=source, error=reason)

    @property
    def loaded(self) -> bool:
        """True if the frame holds a tile grid."""
        return self.grid is not None

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) in tiles."""
        return self.width_tiles, self.height_tiles

    def require_grid(self) -> TileGrid:
        """
        Returns the tile grid.

        Raises a FrameNotLoadedError if the frame failed to load
        """
        if self.grid is None:
            raise FrameNotLoadedError(f"Image at {self.source} is not loaded: {self.error}")
        return self.grid

    def display(
        self,
        x: int = 0,
        y: int = 0,
        transparent_animation: bool = False,
        compositor: "TerminalCompositor | None" = None,
    ) -> bool:
        """
        Draws the frame to the terminal.

        :param x: Column of the top left tile, in tiles
        :param y: Row of the top left tile, in tiles
        :param transparent_animation: Paint transparent tiles in the background
            color instead of skipping them
        :param compositor: The compositor to use, one writing to stdout by default
        :return: True if the frame was drawn, False if it failed to load
        """
        from .compositor import TerminalCompositor

        compositor = compositor or TerminalCompositor()
        return compositor.draw(self, x, y, transparent_animation=transparent_animation)
