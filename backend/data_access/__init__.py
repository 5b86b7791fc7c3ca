"""
Data access layer for high score persistence.

The game engine never touches storage itself; callers inject a
HighScoreRepository (or any object with the same two methods).
"""

from .high_scores import (
    get_high_scores,
    get_top_scores,
    get_best_score,
    record_high_score,
    reset_high_scores,
)
from .repositories import HighScoreRepository

__all__ = [
    'get_high_scores',
    'get_top_scores',
    'get_best_score',
    'record_high_score',
    'reset_high_scores',
    'HighScoreRepository',
]
