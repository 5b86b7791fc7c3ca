"""
Player implementations for the obstacle snake arena.

This module contains the player abstractions and implementations
that control snake movement decisions.
"""

from .base import Player
from .random_player import RandomPlayer
from .astar_player import AStarPlayer
from .variant_registry import get_player_class, list_variants, AVAILABLE_VARIANTS

__all__ = [
    'Player',
    'RandomPlayer',
    'AStarPlayer',
    'get_player_class',
    'list_variants',
    'AVAILABLE_VARIANTS',
]
