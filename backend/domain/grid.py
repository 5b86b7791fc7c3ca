"""
Grid value object: board dimensions and coordinate helpers.

Physical movement wraps around all four edges; the search graph used by
the pathfinder does not, so both flavours of neighbour stepping live here.
"""

import math
from typing import Iterator, Tuple

from .constants import DIRECTION_VECTORS

Cell = Tuple[int, int]


class Grid:
    """
    A fixed width x height coordinate space.

    Attributes:
        width, height: board dimensions in cells
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}.")
        self.width = width
        self.height = height

    @property
    def num_cells(self) -> int:
        return self.width * self.height

    def wrap(self, x: float, y: float) -> Tuple[float, float]:
        """Wrap a continuous position into [0, width) x [0, height)."""
        wx = x % self.width
        wy = y % self.height
        # -1e-17 % 10 == 10.0 in floating point; keep the half-open interval.
        if wx >= self.width:
            wx = 0.0
        if wy >= self.height:
            wy = 0.0
        return wx, wy

    def cell_of(self, x: float, y: float) -> Cell:
        """Return the discrete cell containing a continuous position."""
        return int(math.floor(x)), int(math.floor(y))

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def neighbors(self, cell: Cell) -> Iterator[Tuple[str, Cell]]:
        """
        Yield (direction, cell) for the in-bounds four-neighbours of a cell.

        No wraparound: cells across the board edge are not neighbours here.
        """
        x, y = cell
        for direction, (dx, dy) in DIRECTION_VECTORS.items():
            nxt = (x + dx, y + dy)
            if self.in_bounds(nxt):
                yield direction, nxt

    def cells(self) -> Iterator[Cell]:
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def __repr__(self):
        return f"<Grid {self.width}x{self.height}>"
