"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import Any, Dict, List, Optional, Tuple


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Renderers and players only ever see this copy; mutating it has no
    effect on the running game.

    Attributes:
        tick_number: how many ticks have been simulated (0-based)
        status: 'running', 'paused' or 'over'
        snake_positions: dict of snake_id -> list of (x, y), head first
        head_positions: dict of snake_id -> continuous (x, y) head position
        directions: dict of snake_id -> current direction
        speeds: dict of snake_id -> cells per tick
        alive: dict of snake_id -> bool
        scores: dict of snake_id -> int
        width, height: board dimensions
        food: (x, y) of the food cell
        fixed_obstacles: list of (x, y) fixed obstacle cells
        moving_obstacles: list of (x, y) floored moving obstacle cells
        moving_obstacle_positions: list of continuous (x, y) moving obstacle positions
    """

    def __init__(
        self,
        tick_number: int,
        status: str,
        snake_positions: Dict[str, List[Tuple[int, int]]],
        head_positions: Dict[str, Tuple[float, float]],
        directions: Dict[str, str],
        speeds: Dict[str, float],
        alive: Dict[str, bool],
        scores: Dict[str, int],
        width: int,
        height: int,
        food: Tuple[int, int],
        fixed_obstacles: List[Tuple[int, int]],
        moving_obstacles: List[Tuple[int, int]],
        moving_obstacle_positions: Optional[List[Tuple[float, float]]] = None,
    ):
        self.tick_number = tick_number
        self.status = status
        self.snake_positions = snake_positions
        self.head_positions = head_positions
        self.directions = directions
        self.speeds = speeds
        self.alive = alive
        self.scores = scores
        self.width = width
        self.height = height
        self.food = food
        self.fixed_obstacles = fixed_obstacles
        self.moving_obstacles = moving_obstacles
        self.moving_obstacle_positions = moving_obstacle_positions or []

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        # = fixed obstacle
        M = moving obstacle
        T = snake body
        P = player head, A = AI head (lowercase when dead)
        With (0,0) at bottom left and x-axis labels at bottom
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        fx, fy = self.food
        board[fy][fx] = 'F'

        for x, y in self.fixed_obstacles:
            board[y][x] = '#'
        for x, y in self.moving_obstacles:
            board[y][x] = 'M'

        for snake_id, positions in self.snake_positions.items():
            head_mark = snake_id[0].upper()
            if not self.alive[snake_id]:
                head_mark = head_mark.lower()
            for pos_idx, (x, y) in enumerate(positions):
                board[y][x] = head_mark if pos_idx == 0 else 'T'

        result = []
        # Print rows in reverse order (bottom to top)
        for y in range(self.height - 1, -1, -1):
            result.append(f"{y:2d} {' '.join(board[y])}")

        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))

        return "\n".join(result)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation (tuples become lists when dumped)."""
        return {
            "tick_number": self.tick_number,
            "status": self.status,
            "snake_positions": {sid: list(p) for sid, p in self.snake_positions.items()},
            "head_positions": dict(self.head_positions),
            "directions": dict(self.directions),
            "speeds": dict(self.speeds),
            "alive": dict(self.alive),
            "scores": dict(self.scores),
            "width": self.width,
            "height": self.height,
            "food": self.food,
            "fixed_obstacles": list(self.fixed_obstacles),
            "moving_obstacles": list(self.moving_obstacles),
            "moving_obstacle_positions": list(self.moving_obstacle_positions),
        }

    def __repr__(self):
        return (
            f"<GameState tick={self.tick_number}, status={self.status}, food={self.food}, "
            f"snakes={len(self.snake_positions)}, scores={self.scores}>"
        )
