"""
Registry for snake controllers.

Maps controller keys (e.g., 'astar', 'random') to player classes so the
CLI and the API can pick who drives the player snake in headless runs.
To add a controller, create a Player subclass and add an entry to
PLAYER_VARIANT_LOADERS.
"""

from typing import Callable, Dict, Optional, Type

from .base import Player


# Lazy imports to avoid circular dependencies
def _get_astar_player() -> Type[Player]:
    from .astar_player import AStarPlayer
    return AStarPlayer


def _get_random_player() -> Type[Player]:
    from .random_player import RandomPlayer
    return RandomPlayer


# Registry: maps controller key -> callable that returns the player class
PLAYER_VARIANT_LOADERS: Dict[str, Callable[[], Type[Player]]] = {
    "astar": _get_astar_player,
    "random": _get_random_player,
}

DEFAULT_VARIANT = "astar"

# Canonical list of available controller keys (for API exposure)
AVAILABLE_VARIANTS = list(PLAYER_VARIANT_LOADERS.keys())


def get_player_class(variant_key: Optional[str] = None) -> Type[Player]:
    """
    Get the player class for a given controller key.

    Args:
        variant_key: One of 'astar', 'random'. If None or empty, returns the default.

    Returns:
        The player class (subclass of Player).

    Raises:
        ValueError: If variant_key is not recognized.
    """
    if not variant_key or variant_key.strip() == "":
        variant_key = DEFAULT_VARIANT

    variant_key = variant_key.strip()

    if variant_key not in PLAYER_VARIANT_LOADERS:
        available = ", ".join(AVAILABLE_VARIANTS)
        raise ValueError(
            f"Unknown player variant '{variant_key}'. Available variants: {available}"
        )

    return PLAYER_VARIANT_LOADERS[variant_key]()


def list_variants() -> list:
    """
    Return metadata about all available controllers.

    Returns:
        List of dicts with 'key' and 'description' for each controller.
    """
    return [
        {"key": "astar", "description": "Shortest path to the food, holds course when boxed in"},
        {"key": "random", "description": "Random move that avoids obstacles and bodies"},
    ]
