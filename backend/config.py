"""
Runtime configuration for the obstacle snake arena.

Values come from environment variables (a local .env file is loaded with
python-dotenv) and fall back to the defaults in domain.constants.
"""

import os
from dataclasses import dataclass, fields
from typing import Any, Dict

from dotenv import load_dotenv

from domain import constants

load_dotenv()


@dataclass
class GameConfig:
    width: int = 32
    height: int = 32
    num_fixed_obstacles: int = constants.NUM_FIXED_OBSTACLES
    num_moving_obstacles: int = constants.NUM_MOVING_OBSTACLES
    moving_obstacle_speed: float = constants.MOVING_OBSTACLE_SPEED
    initial_speed: float = constants.INITIAL_SPEED
    speed_increment: float = constants.SPEED_INCREMENT
    max_placement_attempts: int = constants.MAX_PLACEMENT_ATTEMPTS

    @classmethod
    def from_env(cls, **overrides: Any) -> "GameConfig":
        """
        Build a config from SNAKE_* environment variables.

        e.g. SNAKE_WIDTH=20 sets `width`. Keyword overrides that are not
        None win over the environment.
        """
        values: Dict[str, Any] = {}
        for f in fields(cls):
            raw = os.getenv(f"SNAKE_{f.name.upper()}")
            if raw is not None and raw.strip() != "":
                values[f.name] = f.type(raw) if isinstance(f.type, type) else raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def get_cors_origins() -> list:
    allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
    if allowed_origins_env:
        return [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
    # sensible defaults for local dev
    return [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
