"""
Domain entities for the obstacle snake arena.

This module contains the core game entities that are independent of
infrastructure concerns (database, HTTP, rendering, etc.).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITES, DIRECTION_VECTORS,
    RUNNING, PAUSED, OVER, PLAYER_ID, AI_ID,
)
from .errors import ConfigurationError
from .grid import Grid
from .snake import Snake
from .obstacles import FixedObstacle, MovingObstacle
from .occupancy import OccupancyIndex
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'OPPOSITES', 'DIRECTION_VECTORS',
    'RUNNING', 'PAUSED', 'OVER', 'PLAYER_ID', 'AI_ID',
    'ConfigurationError',
    'Grid',
    'Snake',
    'FixedObstacle',
    'MovingObstacle',
    'OccupancyIndex',
    'GameState',
]
