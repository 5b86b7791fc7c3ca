"""
High score repository: best score per player name.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from database import init_database
from .base import BaseRepository

logger = logging.getLogger(__name__)


class HighScoreRepository(BaseRepository):
    """
    Repository for the high_scores table.

    Implements the persistence port the game engine expects:
    get_high_scores() and record_high_score(name, score).
    """

    def __init__(self, ensure_schema: bool = True):
        if ensure_schema:
            init_database()

    def get_high_scores(self) -> Dict[str, int]:
        """Return every recorded name -> best score."""
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT name, score FROM high_scores")
            return {row["name"]: row["score"] for row in cursor.fetchall()}

    def get_top_scores(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Return the best entries, highest score first (ties by name)."""
        with self.read_connection() as (conn, cursor):
            cursor.execute(
                "SELECT name, score, updated_at FROM high_scores "
                "ORDER BY score DESC, name ASC LIMIT ?",
                (limit,),
            )
            return [dict(row) for row in cursor.fetchall()]

    def get_best(self) -> Optional[Tuple[str, int]]:
        top = self.get_top_scores(limit=1)
        if not top:
            return None
        return top[0]["name"], top[0]["score"]

    def record_high_score(self, name: str, score: int) -> bool:
        """
        Store a score for a name, keeping only the best one.

        Returns:
            True if the stored best score for that name changed.
        """
        if not name or not name.strip():
            raise ValueError("High score name must not be empty.")
        if score < 0:
            raise ValueError(f"Score must be non-negative, got {score}.")
        name = name.strip()

        with self.connection() as (conn, cursor):
            cursor.execute("SELECT score FROM high_scores WHERE name = ?", (name,))
            row = cursor.fetchone()
            if row is not None and row["score"] >= score:
                return False

            cursor.execute("""
                INSERT INTO high_scores (name, score, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(name) DO UPDATE SET
                    score = excluded.score,
                    updated_at = excluded.updated_at
            """, (name, score))
            logger.info("Recorded high score %s for %s", score, name)
            return True

    def clear(self) -> int:
        """Delete every high score. Returns the number of rows removed."""
        with self.connection() as (conn, cursor):
            cursor.execute("DELETE FROM high_scores")
            return cursor.rowcount
