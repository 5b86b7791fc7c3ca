"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from domain.constants import DIRECTION_VECTORS, OPPOSITES
from domain.game_state import GameState
from domain.occupancy import OccupancyIndex
from .base import Player


class RandomPlayer(Player):
    """
    A random controller that picks a direction whose next cell is free.

    Board edges wrap, so only obstacles and snake bodies are avoided.
    Turning straight back is never offered for snakes longer than one cell.
    """

    name = "random"

    def __init__(self, snake_id: str, rng: Optional[random.Random] = None):
        super().__init__(snake_id)
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> str:
        snake_positions = game_state.snake_positions[self.snake_id]
        current_direction = game_state.directions[self.snake_id]
        head_x, head_y = snake_positions[0]
        occupancy = OccupancyIndex.from_state(game_state)

        candidates: List[str] = []
        safe_moves: List[str] = []
        for move, (dx, dy) in DIRECTION_VECTORS.items():
            if len(snake_positions) > 1 and move == OPPOSITES[current_direction]:
                continue
            candidates.append(move)

            new_cell = ((head_x + dx) % game_state.width, (head_y + dy) % game_state.height)
            if occupancy.is_blocked(new_cell):
                continue
            safe_moves.append(move)

        # If no safe moves, just keep going (we'll die anyway)
        if not safe_moves:
            return current_direction if current_direction in candidates else self.rng.choice(candidates)

        return self.rng.choice(safe_moves)
