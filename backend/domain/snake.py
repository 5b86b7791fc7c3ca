"""
Snake entity for the game engine.
"""

import math
from collections import deque
from typing import List, Optional, Tuple

from .constants import (
    DIRECTION_VECTORS,
    INITIAL_SPEED,
    OPPOSITES,
    RIGHT,
    SPEED_INCREMENT,
    VALID_MOVES,
)
from .grid import Cell, Grid


class Snake:
    """
    Represents a snake on the board.

    The head moves continuously: `head_x`/`head_y` accumulate fractional
    steps of `speed` cells per tick, and the discrete body only changes
    when the head crosses into a new cell.

    Attributes:
        grid: board the snake moves on (wraps on every edge)
        head_x, head_y: continuous head position
        direction: one of UP, DOWN, LEFT, RIGHT
        speed: cells advanced per tick
        positions: deque of (x, y) from head cell at index 0 to tail at the end
        size: number of cells the snake occupies at rest
        pending_growth: cell entries that will extend the body instead of moving the tail
        swept_cells: cells the head entered during the last advance (oldest first)
        alive: whether this snake is still alive
        death_reason: e.g., 'obstacle', 'head_collision', 'body_collision'
        death_tick: The tick number when the snake died
    """

    def __init__(
        self,
        grid: Grid,
        positions: List[Cell],
        direction: str = RIGHT,
        speed: float = INITIAL_SPEED,
        speed_increment: float = SPEED_INCREMENT,
    ):
        if not positions:
            raise ValueError("A snake needs at least one cell.")
        if direction not in VALID_MOVES:
            raise ValueError(f"Invalid direction: {direction}")
        if speed <= 0:
            raise ValueError(f"Snake speed must be positive, got {speed}.")

        self.grid = grid
        self.positions = deque(positions)
        # Start at the centre of the head cell
        self.head_x = positions[0][0] + 0.5
        self.head_y = positions[0][1] + 0.5
        self.direction = direction
        self.speed = speed
        self.speed_increment = speed_increment
        self.size = len(positions)
        self.pending_growth = 0
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_tick: Optional[int] = None
        # Cells entered by the last advance, or just the head when none were
        self.swept_cells: List[Cell] = [self.head]

    @property
    def head(self) -> Cell:
        """Return the head cell (first element)."""
        return self.positions[0]

    @property
    def head_position(self) -> Tuple[float, float]:
        return self.head_x, self.head_y

    def set_direction(self, direction: str) -> bool:
        """
        Request a new heading.

        A snake longer than one cell may not turn straight back on itself;
        such a request is ignored. Returns True if the heading was applied.
        """
        if direction not in VALID_MOVES:
            raise ValueError(f"Invalid direction: {direction}")
        if self.size > 1 and direction == OPPOSITES[self.direction]:
            return False
        self.direction = direction
        return True

    def advance(self) -> bool:
        """
        Move the head `speed` cells along `direction`, wrapping on the edges.

        Every cell boundary crossed is entered in turn, so a snake faster
        than one cell per tick still lays down a contiguous body. The cells
        entered are kept in `swept_cells`, oldest first.

        Returns True when the head entered at least one new cell this call.
        """
        dx, dy = DIRECTION_VECTORS[self.direction]
        old_x, old_y = self.head_x, self.head_y
        new_x = old_x + dx * self.speed
        new_y = old_y + dy * self.speed
        steps = (
            abs(math.floor(new_x) - math.floor(old_x))
            + abs(math.floor(new_y) - math.floor(old_y))
        )
        self.head_x, self.head_y = self.grid.wrap(new_x, new_y)

        self.swept_cells = []
        for _ in range(steps):
            x, y = self.head
            self._enter((
                (x + dx) % self.grid.width,
                (y + dy) % self.grid.height,
            ))

        if not self.swept_cells:
            self.swept_cells = [self.head]
            return False
        return True

    def _enter(self, cell: Cell) -> None:
        self.positions.appendleft(cell)
        self.swept_cells.append(cell)
        if self.pending_growth > 0:
            self.pending_growth -= 1
            self.size += 1
        else:
            self.positions.pop()

    def grow_body(self) -> None:
        """Keep the tail in place on the next cell entry."""
        self.pending_growth += 1

    def accelerate(self) -> None:
        self.speed += self.speed_increment

    def occupies(self, cell: Cell) -> bool:
        return cell in self.positions

    def kill(self, reason: str, tick: int) -> None:
        self.alive = False
        self.death_reason = reason
        self.death_tick = tick

    def __repr__(self):
        return (
            f"<Snake head={self.head} dir={self.direction} size={self.size} "
            f"speed={self.speed:.2f} alive={self.alive}>"
        )
