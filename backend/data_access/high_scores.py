"""
High score functions used by the CLI and the API.

These functions delegate to the HighScoreRepository for actual database operations.
"""

from typing import Any, Dict, List, Optional, Tuple

from .repositories import HighScoreRepository


def _repo() -> HighScoreRepository:
    return HighScoreRepository()


def get_high_scores() -> Dict[str, int]:
    return _repo().get_high_scores()


def get_top_scores(limit: int = 10) -> List[Dict[str, Any]]:
    """
    Get the leaderboard.

    Args:
        limit: Maximum number of entries to return

    Returns:
        List of {name, score, updated_at} dicts, best first
    """
    return _repo().get_top_scores(limit=limit)


def get_best_score() -> Optional[Tuple[str, int]]:
    return _repo().get_best()


def record_high_score(name: str, score: int) -> bool:
    return _repo().record_high_score(name, score)


def reset_high_scores() -> int:
    return _repo().clear()
