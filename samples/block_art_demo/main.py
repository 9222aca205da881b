#!/usr/bin/env python3
"""
Block Art Demo - Still and animated images as colored blocks in the terminal.

Images are looked up in the ``images/`` folder of the working directory unless
--full-dir is passed.

Usage:
    python samples/block_art_demo/main.py
    python samples/block_art_demo/main.py --gif nums.gif --background room.png
    python samples/block_art_demo/main.py --url https://example.com/anim.gif

Controls:
    Any key     - Continue to the next scene

The door opens silently, no sound is played.
"""

import argparse
import logging
import sys
from pathlib import Path

from blessed import Terminal

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from termstag import AnimationSequence, BlessedSurface, StaticFrame, TerminalCompositor

TEXT_COLUMN = 121


def wait_for_key(term: Terminal, row: int) -> None:
    """Print a prompt below the artwork and block until a key is pressed."""
    print(term.move_xy(0, row) + "Press any key to continue.", end="", flush=True)
    term.inkey()
    print(term.clear, end="", flush=True)


def frames_scene(term: Terminal, compositor: TerminalCompositor, anim: AnimationSequence) -> None:
    """Show the first frames side by side, then the animation below them."""
    print(term.move_xy(TEXT_COLUMN, 15) + "These images are frames of a gif.")
    print(term.move_xy(TEXT_COLUMN, 16) + "The bottom is the animated version!")
    for index in range(5):
        compositor.draw_frame(anim, index, index * (anim.width_tiles + 1))
    compositor.draw_animation(anim, 0, anim.height_tiles + 1, loop_count=30)
    wait_for_key(term, 2 * anim.height_tiles + 2)


def overlay_scene(
    term: Terminal,
    compositor: TerminalCompositor,
    background: StaticFrame,
    closed: StaticFrame,
    opened: StaticFrame,
) -> None:
    """Draw a background and swap transparent overlays on top of it."""
    compositor.draw(background)
    compositor.draw(closed, 23, 8)
    print(term.move_xy(TEXT_COLUMN, 15) + "Press any key to open the door.", flush=True)
    term.inkey()
    compositor.draw(opened, 23, 8)
    print(term.move_xy(TEXT_COLUMN, 15) + "Great job opening that door!!! ", flush=True)
    wait_for_key(term, background.height_tiles + 1)


def main():
    parser = argparse.ArgumentParser(
        description="Block Art Demo - images as colored blocks in the terminal",
    )
    parser.add_argument("--gif", default="nums.gif", help="Animated image (default: nums.gif)")
    parser.add_argument("--url", help="URL of an animated image to play")
    parser.add_argument("--background", default="room.png", help="Background image")
    parser.add_argument("--closed", default="dur-closed.png", help="Overlay shown first")
    parser.add_argument("--opened", default="dur-open.png", help="Overlay shown on key press")
    parser.add_argument(
        "--full-dir",
        action="store_true",
        help="Treat image arguments as full paths instead of names in images/",
    )
    parser.add_argument("--delay", type=int, default=None, help="Frame delay in ms")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("Loading Data!")
    anim = AnimationSequence.load(
        args.gif, 15, 15, full_dir=args.full_dir, frame_delay=args.delay
    )
    web_anim = (
        AnimationSequence.load(args.url, 60, 40, url=True, frame_delay=args.delay)
        if args.url
        else None
    )
    background = StaticFrame.load(args.background, 60, 40, full_dir=args.full_dir)
    closed = StaticFrame.load(args.closed, 15, 15, full_dir=args.full_dir)
    opened = StaticFrame.load(args.opened, 15, 15, full_dir=args.full_dir)

    term = Terminal()
    compositor = TerminalCompositor(BlessedSurface(term))
    try:
        with term.fullscreen(), term.cbreak(), term.hidden_cursor():
            print(term.clear, end="", flush=True)
            frames_scene(term, compositor, anim)
            if web_anim is not None:
                print(term.move_xy(TEXT_COLUMN, 15) + "This gif was loaded from the internet!")
                compositor.draw_animation(web_anim, loop_count=3)
                wait_for_key(term, web_anim.height_tiles + 1)
            overlay_scene(term, compositor, background, closed, opened)
    except KeyboardInterrupt:
        pass

    print("\nDemo finished")


if __name__ == "__main__":
    main()
