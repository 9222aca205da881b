"""
Terminal compositor - paints sampled frames as colored block art.

Every tile is drawn as two full block characters so tiles come out roughly
square. Transparent tiles are either skipped, leaving whatever is already on
screen visible, or painted in the background color, which erases the previous
frame of a transparent animation.

Example:
    from termstag import StaticFrame, TerminalCompositor

    compositor = TerminalCompositor()
    compositor.draw(StaticFrame.load("room.png", 60, 40))
    compositor.draw(StaticFrame.load("door.png", 15, 15), 23, 8)
"""

from __future__ import annotations

import logging
import sys
import time
from typing import TYPE_CHECKING, Callable

from .config import Settings, settings as default_settings
from .surface import AnsiSurface, TerminalSurface

if TYPE_CHECKING:
    from .animation import AnimationSequence
    from .frame import StaticFrame

logger = logging.getLogger(__name__)

FULL_BLOCK = "█"
TILE_COLUMNS = 2
"Terminal columns per tile"
TILE_TEXT = FULL_BLOCK * TILE_COLUMNS


def clamp_frame_index(frame_count: int, index: int) -> int:
    """
    Clamps a frame index into [0, frame_count - 1].

    :param frame_count: Number of frames, at least one
    :param index: The requested index
    :return: The valid index
    """
    return max(0, min(index, frame_count - 1))


def normalize_frame_range(frame_count: int, start: int, end: int) -> range:
    """
    Computes the frames to play for a requested start and end frame.

    The start is clamped to [0, frame_count] and the end to frame_count. An
    empty or inverted range collapses to the single start frame, or to the
    last frame if the start lies behind it.

    :param frame_count: Number of frames, at least one
    :param start: First frame to play
    :param end: Frame to stop before
    :return: The frame indices in playback order
    """
    start = min(max(start, 0), frame_count)
    end = min(end, frame_count)
    if end <= start:
        if start == frame_count:
            start -= 1
        end = start + 1
    return range(start, end)


class TerminalCompositor:
    """
    Draws frames and animations to a :class:`.TerminalSurface`.

    Playback is synchronous: :meth:`draw_animation` blocks the calling thread,
    sleeping the sequence's frame delay between two frames.
    """

    def __init__(
        self,
        surface: TerminalSurface | None = None,
        settings: Settings | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        :param surface: The output handle, raw ANSI output to stdout by default
        :param settings: The settings to use, the module settings by default
        :param sleep: Function waiting the given number of seconds
        """
        self.surface = surface if surface is not None else AnsiSurface(sys.stdout)
        self.settings = settings or default_settings
        self._sleep = sleep

    def draw(
        self,
        frame: "StaticFrame",
        x: int = 0,
        y: int = 0,
        transparent_animation: bool = False,
    ) -> bool:
        """
        Draws a frame with its top left tile at (x, y).

        If the frame failed to load a notice naming its source is written
        instead, without moving the cursor or writing colors.

        :param frame: The frame
        :param x: Column of the top left tile, in tiles
        :param y: Row of the top left tile, in tiles
        :param transparent_animation: Paint transparent tiles in the
            background color instead of skipping them
        :return: True if the frame was drawn
        """
        surface = self.surface
        if not frame.loaded:
            logger.warning("Frame of %s has no tile grid: %s", frame.source, frame.error)
            surface.notice(
                f"Image at {frame.source} is null! Ensure that the directory is "
                f"correct, then try again! ({frame.error})"
            )
            surface.flush()
            return False
        grid = frame.require_grid()
        threshold = self.settings.TRANSPARENCY_THRESHOLD
        background = surface.background_rgb() if transparent_animation else None
        origin = x * TILE_COLUMNS
        surface.move(origin, y)
        for row_index, row in enumerate(grid):
            for color in row:
                if not color.is_transparent(threshold):
                    surface.paint(TILE_TEXT, color.to_rgb())
                elif transparent_animation:
                    surface.paint(TILE_TEXT, background)
                else:
                    surface.skip(TILE_COLUMNS)
            # wide glyphs leave the native cursor in an unreliable column
            surface.move(origin, y + row_index + 1)
        surface.flush()
        return True

    def draw_frame(
        self,
        sequence: "AnimationSequence",
        index: int,
        x: int = 0,
        y: int = 0,
        opaque: bool = False,
    ) -> bool:
        """
        Draws a single frame of an animation.

        :param sequence: The animation
        :param index: The frame index, clamped to the valid range
        :param x: Column of the top left tile, in tiles
        :param y: Row of the top left tile, in tiles
        :param opaque: Paint transparent tiles in the background color
        :return: True if the frame was drawn
        """
        index = clamp_frame_index(sequence.frame_count, index)
        return self.draw(sequence.frames[index], x, y, transparent_animation=opaque)

    def draw_animation(
        self,
        sequence: "AnimationSequence",
        x: int = 0,
        y: int = 0,
        loop_count: int = 1,
        start_frame: int = 0,
        end_frame: int = 999,
        transparent: bool = False,
    ) -> int:
        """
        Plays an animation, blocking until all loops finished.

        The sequence's frame delay is read before every wait, so changing it
        while playing affects the next frame.

        :param sequence: The animation
        :param x: Column of the top left tile, in tiles
        :param y: Row of the top left tile, in tiles
        :param loop_count: How often the frame range is played
        :param start_frame: First frame to play
        :param end_frame: Frame to stop before
        :param transparent: Paint transparent tiles in the background color
            to avoid trails of previous frames
        :return: The number of frames drawn
        """
        frames = normalize_frame_range(sequence.frame_count, start_frame, end_frame)
        logger.debug(
            "Playing %s frames %d-%d, %d loops",
            sequence.source,
            frames.start,
            frames.stop - 1,
            loop_count,
        )
        drawn = 0
        for _ in range(loop_count):
            for index in frames:
                if drawn:
                    self._wait(sequence.frame_delay)
                self.draw(sequence.frames[index], x, y, transparent_animation=transparent)
                drawn += 1
        return drawn

    def _wait(self, delay_ms: int) -> None:
        if delay_ms > 0:
            self._sleep(delay_ms / 1000.0)


def render_to_string(
    frame: "StaticFrame",
    x: int = 0,
    y: int = 0,
    transparent_animation: bool = False,
    settings: Settings | None = None,
) -> str:
    """
    Returns the ANSI output drawing a frame would produce.

    :param frame: The frame
    :param x: Column of the top left tile, in tiles
    :param y: Row of the top left tile, in tiles
    :param transparent_animation: Paint transparent tiles in the background color
    :param settings: The settings to use, the module settings by default
    :return: The escape sequences and block characters
    """
    surface = AnsiSurface(background=(settings or default_settings).BACKGROUND_COLOR)
    TerminalCompositor(surface, settings=settings).draw(
        frame, x, y, transparent_animation=transparent_animation
    )
    return surface.getvalue()
