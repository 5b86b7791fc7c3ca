"""
Controller interface shared by the computer opponent and headless drivers.
"""

from domain.game_state import GameState


class Player:
    """
    Steers one snake on the arena.

    The engine asks for a heading once per tick (the AI snake) or whenever
    the head enters a new cell (headless player runs). The answer is only a
    request: a reverse into a longer snake's own neck is dropped by
    Snake.set_direction, and the move takes effect on the next advance.
    """

    def __init__(self, snake_id: str):
        self.snake_id = snake_id

    def get_move(self, game_state: GameState) -> str:
        """
        Pick a heading for this snake from a pre-move board snapshot.

        Args:
            game_state: Snapshot with bodies, obstacles and food

        Returns:
            One of UP, DOWN, LEFT, RIGHT
        """
        raise NotImplementedError
