"""
Obstacle entities: fixed cells and obstacles drifting across the board.
"""

from dataclasses import dataclass

from .constants import DIRECTION_VECTORS, VALID_MOVES
from .grid import Cell, Grid


@dataclass(frozen=True)
class FixedObstacle:
    """A single blocked cell, placed once at episode start."""
    x: int
    y: int

    @property
    def cell(self) -> Cell:
        return (self.x, self.y)


class MovingObstacle:
    """
    An obstacle that drifts in a straight line and wraps around the board.

    It never turns, is never removed, and cannot be eaten. The lethal cell
    is the floor of its continuous position.
    """

    def __init__(self, grid: Grid, x: float, y: float, direction: str, speed: float):
        if direction not in VALID_MOVES:
            raise ValueError(f"Invalid direction: {direction}")
        if speed <= 0:
            raise ValueError(f"Obstacle speed must be positive, got {speed}.")
        self.grid = grid
        self.x, self.y = grid.wrap(float(x), float(y))
        self.direction = direction
        self.speed = speed

    @property
    def cell(self) -> Cell:
        return self.grid.cell_of(self.x, self.y)

    def advance(self) -> None:
        dx, dy = DIRECTION_VECTORS[self.direction]
        self.x, self.y = self.grid.wrap(self.x + dx * self.speed, self.y + dy * self.speed)

    def __repr__(self):
        return f"<MovingObstacle pos=({self.x:.2f}, {self.y:.2f}) dir={self.direction} speed={self.speed}>"
