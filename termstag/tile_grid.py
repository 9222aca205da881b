"""
The :class:`.TileGrid` holds the averaged tile colors of one sampled image.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from .color import Color


@dataclass(frozen=True)
class TileGrid:
    """
    Rows of averaged tile colors.

    The grid is rectangular: every row holds exactly :attr:`width` colors.

    :ivar rows: One tuple of colors per tile row, top to bottom
    """

    rows: tuple[tuple[Color, ...], ...]

    def __post_init__(self):
        rows = tuple(tuple(row) for row in self.rows)
        object.__setattr__(self, "rows", rows)
        if rows and any(len(row) != len(rows[0]) for row in rows):
            raise ValueError("All tile rows need to have the same length")

    @property
    def width(self) -> int:
        """Width in tiles."""
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self) -> int:
        """Height in tiles."""
        return len(self.rows)

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) in tiles."""
        return self.width, self.height

    def color_at(self, x: int, y: int) -> Color:
        """Returns the color of the tile at column x, row y."""
        return self.rows[y][x]

    def to_array(self) -> np.ndarray:
        """
        Returns the grid as uint8 array of shape (height, width, 4) in ARGB
        channel order.
        """
        return np.array(
            [[color.to_argb() for color in row] for row in self.rows], dtype=np.uint8
        ).reshape(self.height, self.width, 4)

    @classmethod
    def from_array(cls, array: np.ndarray) -> TileGrid:
        """
        Creates a grid from an array of shape (height, width, 4) in ARGB order.

        :param array: The tile colors
        :return: The grid
        """
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValueError("Expected an array of shape (height, width, 4)")
        return cls(
            tuple(
                tuple(Color(int(a), int(r), int(g), int(b)) for a, r, g, b in row)
                for row in array.tolist()
            )
        )

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[tuple[Color, ...]]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> tuple[Color, ...]:
        return self.rows[index]
