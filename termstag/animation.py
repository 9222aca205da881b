"""
Implements :class:`.AnimationSequence`, the frames of an animated image such as
a GIF, each sampled into its own tile grid, plus the playback delay.

Example:
    from termstag import AnimationSequence

    anim = AnimationSequence.load("nums.gif", 15, 15, frame_delay=100)
    anim.play(loop_count=3)
    anim.frame_delay = 50  # Affects following playbacks and waits
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator, Sequence

import PIL.Image

from .config import Settings, settings as default_settings
from .exceptions import AcquisitionError, DecodeError, EmptyAnimationError
from .frame import MEMORY_SOURCE, StaticFrame
from .pixel_buffer import PixelBuffer
from .sampler import CropTypes
from .source import decode_bytes, fetch_bytes, resolve_source

if TYPE_CHECKING:
    from .compositor import TerminalCompositor

logger = logging.getLogger(__name__)


class AnimationSequence:
    """
    An ordered, fixed list of equally sized frames and their playback delay.

    The frame list can not be modified after construction, the
    :attr:`frame_delay` can be changed at any time and is picked up by the
    compositor before each wait.
    """

    def __init__(
        self,
        frames: Sequence[StaticFrame],
        frame_delay: int = 0,
        source: str = MEMORY_SOURCE,
    ):
        """
        :param frames: The frames, at least one, all of the same tile size
        :param frame_delay: Delay between two frames in milliseconds
        :param source: Descriptor of the source the frames were loaded from
        """
        frames = tuple(frames)
        if not frames:
            raise EmptyAnimationError(f"Animation {source} has no frames")
        sizes = {frame.size for frame in frames}
        if len(sizes) != 1:
            raise ValueError(f"All frames need to have the same tile size, got {sorted(sizes)}")
        self._frames = frames
        self._source = source
        self._frame_delay = 0
        self.frame_delay = frame_delay

    @classmethod
    def load(
        cls,
        source: str,
        width_tiles: int,
        height_tiles: int,
        full_dir: bool = False,
        url: bool = False,
        frame_delay: int | None = None,
        crop: CropTypes | None = None,
        settings: Settings | None = None,
    ) -> AnimationSequence:
        """
        Loads and samples every frame of an image file or URL.

        If the source can not be read or decoded the sequence consists of a
        single frame without grid which reports the failure when drawn.

        :param source: Filename below the images directory, full path or URL
        :param width_tiles: Width in tiles
        :param height_tiles: Height in tiles
        :param full_dir: Set to True if source is a full path
        :param url: Set to True if source is a URL
        :param frame_delay: Delay between frames in milliseconds. By default
            the duration stored in the image or the configured default.
        :param crop: Optional (x, y, width, height) region applied to every frame
        :param settings: The settings to use, the module settings by default
        :return: The sequence

        Raises an EmptyAnimationError if the decoder reports no frames
        """
        settings = settings or default_settings
        mode, descriptor = resolve_source(
            source, full_dir=full_dir, url=url, settings=settings
        )
        try:
            buffer = decode_bytes(
                fetch_bytes(descriptor, mode, timeout=settings.FETCH_TIMEOUT)
            )
            return cls.from_buffer(
                buffer,
                width_tiles,
                height_tiles,
                frame_delay=frame_delay,
                crop=crop,
                source=descriptor,
                settings=settings,
            )
        except (AcquisitionError, DecodeError) as e:
            logger.warning("Image at %s gave error of %s", descriptor, e)
            failed = StaticFrame.failed(descriptor, width_tiles, height_tiles, str(e))
            if frame_delay is None:
                frame_delay = settings.DEFAULT_FRAME_DELAY
            return cls([failed], frame_delay=frame_delay, source=descriptor)

    @classmethod
    def from_buffer(
        cls,
        buffer: PixelBuffer,
        width_tiles: int,
        height_tiles: int,
        frame_delay: int | None = None,
        crop: CropTypes | None = None,
        source: str = MEMORY_SOURCE,
        settings: Settings | None = None,
    ) -> AnimationSequence:
        """
        Samples every frame of a decoded buffer.

        The same tile size and crop region is used for all frames.

        :param buffer: The decoded, possibly multi-frame image
        :param width_tiles: Width in tiles
        :param height_tiles: Height in tiles
        :param frame_delay: Delay between frames in milliseconds, see :meth:`load`
        :param crop: Optional (x, y, width, height) region applied to every frame
        :param source: Descriptor stored for diagnostics
        :param settings: The settings to use, the module settings by default
        :return: The sequence
        """
        settings = settings or default_settings
        frame_count = buffer.frame_count
        if frame_count < 1:
            raise EmptyAnimationError(f"Image at {source} contains no frames")
        frames = []
        for index in range(frame_count):
            buffer.select_frame(index)
            if index == 0 and frame_delay is None:
                frame_delay = buffer.frame_duration
            frames.append(
                StaticFrame.from_buffer(
                    buffer, width_tiles, height_tiles, crop=crop, source=source
                )
            )
        if frame_delay is None:
            frame_delay = settings.DEFAULT_FRAME_DELAY
        logger.debug("Sampled %d frames of %s", frame_count, source)
        return cls(frames, frame_delay=frame_delay, source=source)

    @classmethod
    def from_image(
        cls,
        image: PIL.Image.Image,
        width_tiles: int,
        height_tiles: int,
        frame_delay: int | None = None,
        crop: CropTypes | None = None,
    ) -> AnimationSequence:
        """Samples every frame of a PILLOW image, e.g. an opened GIF."""
        return cls.from_buffer(
            PixelBuffer(image),
            width_tiles,
            height_tiles,
            frame_delay=frame_delay,
            crop=crop,
        )

    @property
    def frames(self) -> tuple[StaticFrame, ...]:
        """The frames in playback order."""
        return self._frames

    @property
    def frame_count(self) -> int:
        """Number of frames."""
        return len(self._frames)

    @property
    def width_tiles(self) -> int:
        """Width of every frame in tiles."""
        return self._frames[0].width_tiles

    @property
    def height_tiles(self) -> int:
        """Height of every frame in tiles."""
        return self._frames[0].height_tiles

    @property
    def source(self) -> str:
        """Resolved path or URL the frames were loaded from."""
        return self._source

    @property
    def loaded(self) -> bool:
        """True if every frame holds a tile grid."""
        return all(frame.loaded for frame in self._frames)

    @property
    def frame_delay(self) -> int:
        """Delay between two frames in milliseconds."""
        return self._frame_delay

    @frame_delay.setter
    def frame_delay(self, value: int) -> None:
        value = int(value)
        if value < 0:
            raise ValueError(f"Frame delay can not be negative: {value}")
        self._frame_delay = value

    def play(
        self,
        x: int = 0,
        y: int = 0,
        loop_count: int = 1,
        start_frame: int = 0,
        end_frame: int = 999,
        transparent: bool = False,
        compositor: "TerminalCompositor | None" = None,
    ) -> int:
        """
        Plays the animation in the terminal, blocking until it finished.

        :param x: Column of the top left tile, in tiles
        :param y: Row of the top left tile, in tiles
        :param loop_count: How often the frame range is played
        :param start_frame: First frame to play
        :param end_frame: Frame to stop before
        :param transparent: Paint transparent tiles in the background color
            to avoid trails of previous frames
        :param compositor: The compositor to use, one writing to stdout by default
        :return: The number of frames drawn
        """
        from .compositor import TerminalCompositor

        compositor = compositor or TerminalCompositor()
        return compositor.draw_animation(
            self,
            x,
            y,
            loop_count=loop_count,
            start_frame=start_frame,
            end_frame=end_frame,
            transparent=transparent,
        )

    def display_frame(
        self,
        index: int,
        x: int = 0,
        y: int = 0,
        opaque: bool = False,
        compositor: "TerminalCompositor | None" = None,
    ) -> bool:
        """
        Draws a single frame, the index is clamped to the valid range.

        :param index: The zero based frame index
        :param x: Column of the top left tile, in tiles
        :param y: Row of the top left tile, in tiles
        :param opaque: Paint transparent tiles in the background color
        :param compositor: The compositor to use, one writing to stdout by default
        :return: True if the frame was drawn
        """
        from .compositor import TerminalCompositor

        compositor = compositor or TerminalCompositor()
        return compositor.draw_frame(self, index, x, y, opaque=opaque)

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[StaticFrame]:
        return iter(self._frames)

    def __getitem__(self, index: int) -> StaticFrame:
        return self._frames[index]

    def __repr__(self):
        return (
            f"AnimationSequence({self.source}, frames={self.frame_count}, "
            f"{self.width_tiles}x{self.height_tiles}, delay={self.frame_delay}ms)"
        )
