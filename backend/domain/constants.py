"""
Game constants for the obstacle snake arena.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Unit step per direction. Up => y + 1 (origin at the bottom left).
DIRECTION_VECTORS = {
    UP: (0, 1),
    DOWN: (0, -1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITES = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Tick engine states
RUNNING = "running"
PAUSED = "paused"
OVER = "over"

# Death reasons
DEATH_OBSTACLE = "obstacle"
DEATH_HEAD_COLLISION = "head_collision"
DEATH_BODY_COLLISION = "body_collision"

# Snake ids used in snapshots
PLAYER_ID = "player"
AI_ID = "ai"

# Game settings
INITIAL_SPEED = 0.1
SPEED_INCREMENT = 0.02
MOVING_OBSTACLE_SPEED = 0.05
NUM_FIXED_OBSTACLES = 6
NUM_MOVING_OBSTACLES = 3
MAX_PLACEMENT_ATTEMPTS = 1000
