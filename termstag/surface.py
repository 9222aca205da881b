"""
Terminal output handles used by the compositor.

The compositor never touches ``sys.stdout`` or global console state directly,
it draws through a :class:`TerminalSurface`:

- :class:`BlessedSurface` drives a real terminal through the blessed library
- :class:`AnsiSurface` builds raw 24-bit ANSI escape sequences in memory and
  optionally writes them to a stream in a single call per flush
"""

from __future__ import annotations

from typing import Protocol, TextIO, runtime_checkable

from blessed import Terminal

from .config import settings as default_settings

# ANSI escape codes
ESC = "\033"
RESET = f"{ESC}[0m"

RGB = tuple[int, int, int]


@runtime_checkable
class TerminalSurface(Protocol):
    """Cursor and color primitives the compositor draws with."""

    def move(self, column: int, row: int) -> None:
        """Moves the cursor to a zero based column and row."""
        ...

    def paint(self, text: str, rgb: RGB) -> None:
        """Writes text in the given foreground color at the cursor."""
        ...

    def skip(self, columns: int) -> None:
        """Advances the cursor without writing."""
        ...

    def background_rgb(self) -> RGB:
        """Returns the terminal's current background color."""
        ...

    def notice(self, message: str) -> None:
        """Writes a plain, uncolored message line."""
        ...

    def flush(self) -> None:
        """Pushes pending output to the terminal."""
        ...


class AnsiSurface:
    """
    Collects ANSI escape sequences in memory.

    Color codes are only emitted when the color changes, a reset is appended
    on flush. If a stream is passed all collected output is written to it on
    :meth:`flush`, otherwise it can be read with :meth:`getvalue`.
    """

    def __init__(self, stream: TextIO | None = None, background: RGB | None = None):
        """
        :param stream: Optional stream flushed output is written to
        :param background: The background color, the configured one by default
        """
        self.stream = stream
        self.background = tuple(background or default_settings.BACKGROUND_COLOR)
        self._parts: list[str] = []
        self._color: RGB | None = None

    def move(self, column: int, row: int) -> None:
        self._parts.append(f"{ESC}[{row + 1};{column + 1}H")

    def paint(self, text: str, rgb: RGB) -> None:
        rgb = tuple(rgb)
        if rgb != self._color:
            r, g, b = rgb
            self._parts.append(f"{ESC}[38;2;{r};{g};{b}m")
            self._color = rgb
        self._parts.append(text)

    def skip(self, columns: int) -> None:
        if columns > 0:
            self._parts.append(f"{ESC}[{columns}C")

    def background_rgb(self) -> RGB:
        return self.background

    def notice(self, message: str) -> None:
        self._reset()
        self._parts.append(f"{message}\n")

    def flush(self) -> None:
        self._reset()
        if self.stream is not None:
            self.stream.write("".join(self._parts))
            self.stream.flush()
            self._parts.clear()

    def getvalue(self) -> str:
        """Returns the collected output."""
        return "".join(self._parts)

    def clear(self) -> None:
        """Drops the collected output."""
        self._parts.clear()
        self._color = None

    def _reset(self) -> None:
        if self._color is not None:
            self._parts.append(RESET)
            self._color = None


class BlessedSurface:
    """Draws to a terminal using blessed's capability strings."""

    def __init__(self, terminal: Terminal | None = None, background: RGB | None = None):
        """
        :param terminal: The terminal, one attached to stdout by default
        :param background: The terminal's background color, the configured one by default
        """
        self.terminal = terminal if terminal is not None else Terminal()
        self.background = tuple(background or default_settings.BACKGROUND_COLOR)

    def _write(self, text: str) -> None:
        self.terminal.stream.write(text)

    def move(self, column: int, row: int) -> None:
        self._write(self.terminal.move_xy(column, row))

    def paint(self, text: str, rgb: RGB) -> None:
        r, g, b = rgb
        self._write(f"{self.terminal.color_rgb(r, g, b)}{text}{self.terminal.normal}")

    def skip(self, columns: int) -> None:
        if columns > 0:
            self._write(self.terminal.move_right(columns))

    def background_rgb(self) -> RGB:
        return self.background

    def notice(self, message: str) -> None:
        self._write(f"{message}\n")

    def flush(self) -> None:
        self.terminal.stream.flush()
