"""
Implements the :class:`.Color` value type used for averaged tile colors.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """
    An immutable 8-bit ARGB color.

    Equality and hashing are component-wise, so two tiles with the same
    channels compare equal no matter where they were sampled.
    """

    a: int
    "Alpha channel, 0 = fully transparent, 255 = opaque"
    r: int
    "Red channel"
    g: int
    "Green channel"
    b: int
    "Blue channel"

    def __post_init__(self):
        for name in ("a", "r", "g", "b"):
            value = getattr(self, name)
            if not 0 <= value <= 255:
                raise ValueError(f"Channel {name} out of range: {value}")

    @classmethod
    def from_rgba(cls, r: int, g: int, b: int, a: int = 255) -> Color:
        """
        Creates a color from channels given in RGBA order.

        :param r: Red
        :param g: Green
        :param b: Blue
        :param a: Alpha, opaque by default
        :return: The color
        """
        return cls(int(a), int(r), int(g), int(b))

    def to_rgb(self) -> tuple[int, int, int]:
        """Returns the color as (r, g, b) tuple, dropping the alpha channel."""
        return self.r, self.g, self.b

    def to_argb(self) -> tuple[int, int, int, int]:
        """Returns the color as (a, r, g, b) tuple."""
        return self.a, self.r, self.g, self.b

    def is_transparent(self, threshold: int) -> bool:
        """
        Returns if the color is (nearly) invisible.

        :param threshold: The highest alpha value still counted as transparent
        """
        return self.a <= threshold

    def __str__(self):
        return f"Color(a={self.a},r={self.r},g={self.g},b={self.b})"


TRANSPARENT = Color(0, 0, 0, 0)
"Fully transparent black"
