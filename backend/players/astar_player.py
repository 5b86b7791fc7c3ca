"""
A* player - steers toward the food along a shortest unobstructed path.
"""

from domain.game_state import GameState
from domain.occupancy import OccupancyIndex
from services.pathfinder import compute_direction
from .base import Player


class AStarPlayer(Player):
    """
    Computer opponent that re-plans every tick.

    Obstacles and both snake bodies (as they stand before the tick's
    movement) are treated as blocked. When the food is unreachable the
    snake holds its current heading.
    """

    name = "astar"

    def get_move(self, game_state: GameState) -> str:
        positions = game_state.snake_positions[self.snake_id]
        current_direction = game_state.directions[self.snake_id]
        occupancy = OccupancyIndex.from_state(game_state)

        return compute_direction(
            start=tuple(positions[0]),
            goal=tuple(game_state.food),
            is_blocked=occupancy.is_blocked,
            current_direction=current_direction,
            width=game_state.width,
            height=game_state.height,
        )
