"""
Occupancy index: which cells are blocked by obstacles or snake bodies.
"""

from typing import Iterable, Set

from .grid import Cell


class OccupancyIndex:
    """
    Read-only blocked/free view of the board at one moment.

    `is_obstacle` covers fixed obstacles and the floored cells of moving
    obstacles (lethal hazards). `is_blocked` additionally covers every cell
    of every snake body, dead snakes included.
    """

    def __init__(
        self,
        fixed_cells: Iterable[Cell] = (),
        moving_cells: Iterable[Cell] = (),
        body_cells: Iterable[Cell] = (),
    ):
        self.obstacle_cells: Set[Cell] = set(fixed_cells) | set(moving_cells)
        self.body_cells: Set[Cell] = set(body_cells)

    @classmethod
    def from_entities(cls, fixed_obstacles, moving_obstacles, snakes) -> "OccupancyIndex":
        bodies = []
        for snake in snakes:
            bodies.extend(snake.positions)
        return cls(
            fixed_cells=(o.cell for o in fixed_obstacles),
            moving_cells=(o.cell for o in moving_obstacles),
            body_cells=bodies,
        )

    @classmethod
    def from_state(cls, game_state) -> "OccupancyIndex":
        """Build the index from a GameState snapshot."""
        bodies = []
        for positions in game_state.snake_positions.values():
            bodies.extend(tuple(cell) for cell in positions)
        return cls(
            fixed_cells=(tuple(c) for c in game_state.fixed_obstacles),
            moving_cells=(tuple(c) for c in game_state.moving_obstacles),
            body_cells=bodies,
        )

    def is_obstacle(self, cell: Cell) -> bool:
        return cell in self.obstacle_cells

    def is_blocked(self, cell: Cell) -> bool:
        return cell in self.obstacle_cells or cell in self.body_cells

    def blocked_cells(self) -> Set[Cell]:
        return self.obstacle_cells | self.body_cells
