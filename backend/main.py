import argparse
import json
import logging
import os
import random
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from config import GameConfig
from domain.constants import (
    AI_ID,
    DEATH_BODY_COLLISION,
    DEATH_HEAD_COLLISION,
    DEATH_OBSTACLE,
    OVER,
    PAUSED,
    PLAYER_ID,
    RIGHT,
    RUNNING,
    VALID_MOVES,
)
from domain.errors import ConfigurationError
from domain.game_state import GameState
from domain.grid import Cell, Grid
from domain.obstacles import FixedObstacle, MovingObstacle
from domain.occupancy import OccupancyIndex
from domain.snake import Snake
from players.astar_player import AStarPlayer
from players.base import Player
from players.variant_registry import get_player_class

logger = logging.getLogger(__name__)


class SnakeGame:
    """
    Manages:
      - Board (width, height) with wraparound edges
      - Player snake and AI snake
      - Fixed and moving obstacles
      - Food
      - Scores
      - Ticks and the running / paused / over state
      - History for replay

    Construction places every entity; `tick()` advances the simulation by
    one step. The player's heading is written from outside through
    `set_player_direction`; the AI's heading comes from `ai_player`.
    """

    def __init__(
        self,
        width: int,
        height: int,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        game_id: Optional[str] = None,
        ai_player: Optional[Player] = None,
        high_score_store: Any = None,
        record_history: bool = False,
    ):
        self.config = config or GameConfig(width=width, height=height)
        try:
            self.grid = Grid(width, height)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        self.width = width
        self.height = height
        self.rng = random.Random(seed)

        self.game_id = game_id or str(uuid.uuid4())
        self.start_time = time.time()
        self.tick_number = 0
        self.status = RUNNING
        self.game_result: Optional[Dict[str, str]] = None
        self.scores: Dict[str, int] = {PLAYER_ID: 0, AI_ID: 0}

        self.ai_player = ai_player or AStarPlayer(AI_ID)
        self.history: List[GameState] = []
        self.record_history_enabled = record_history

        # Previously recorded scores are only kept for display
        self.high_score_store = high_score_store
        self.high_scores: Dict[str, int] = {}
        if high_score_store is not None:
            self.high_scores = dict(high_score_store.get_high_scores())

        entities = 3 + self.config.num_fixed_obstacles + self.config.num_moving_obstacles
        if entities > self.grid.num_cells:
            raise ConfigurationError(
                f"A {width}x{height} board cannot hold {entities} entities."
            )

        occupied = set()

        # Player starts in the middle facing right
        center = (width // 2, height // 2)
        self.player = self._new_snake(center, RIGHT)
        occupied.add(center)

        self.fixed_obstacles: List[FixedObstacle] = []
        for _ in range(self.config.num_fixed_obstacles):
            x, y = self._random_free_cell(occupied)
            self.fixed_obstacles.append(FixedObstacle(x, y))
            occupied.add((x, y))

        self.moving_obstacles: List[MovingObstacle] = []
        for _ in range(self.config.num_moving_obstacles):
            x, y = self._random_free_cell(occupied)
            self.moving_obstacles.append(MovingObstacle(
                self.grid, x + 0.5, y + 0.5,
                direction=self.rng.choice(sorted(VALID_MOVES)),
                speed=self.config.moving_obstacle_speed,
            ))
            occupied.add((x, y))

        ai_cell = self._random_free_cell(occupied)
        self.ai = self._new_snake(ai_cell, self.rng.choice(sorted(VALID_MOVES)))
        occupied.add(ai_cell)

        self.food: Cell = self._random_free_cell(occupied)

        logger.info(
            "Game %s: %dx%d board, %d fixed / %d moving obstacles, player at %s, AI at %s, food at %s",
            self.game_id, width, height, len(self.fixed_obstacles),
            len(self.moving_obstacles), center, ai_cell, self.food,
        )

        if self.record_history_enabled:
            self.record_history()

    # ------------------------------------------------------------------
    # Setup helpers
    # ------------------------------------------------------------------

    def _new_snake(self, cell: Cell, direction: str) -> Snake:
        return Snake(
            self.grid,
            [cell],
            direction=direction,
            speed=self.config.initial_speed,
            speed_increment=self.config.speed_increment,
        )

    def _random_free_cell(self, occupied, required: bool = True) -> Optional[Cell]:
        """
        Return a random cell not in `occupied`.

        Rejection sampling, capped at config.max_placement_attempts draws.
        Running out of draws raises ConfigurationError, or returns None
        when `required` is False.
        """
        for _ in range(self.config.max_placement_attempts):
            cell = (self.rng.randint(0, self.width - 1), self.rng.randint(0, self.height - 1))
            if cell not in occupied:
                return cell
        if not required:
            return None
        raise ConfigurationError(
            f"Could not find a free cell after {self.config.max_placement_attempts} attempts "
            f"on a {self.width}x{self.height} board."
        )

    @property
    def snakes(self) -> Dict[str, Snake]:
        return {PLAYER_ID: self.player, AI_ID: self.ai}

    def occupancy(self) -> OccupancyIndex:
        return OccupancyIndex.from_entities(
            self.fixed_obstacles, self.moving_obstacles, (self.player, self.ai)
        )

    def _relocate_food(self) -> None:
        """
        Move the food to a free cell.

        Falls back to scanning the board once rejection sampling gives up;
        a completely full board leaves the food where it is.
        """
        occupancy = self.occupancy()
        blocked = occupancy.blocked_cells()
        cell = self._random_free_cell(blocked, required=False)
        if cell is not None:
            self.food = cell
            return

        free = [cell for cell in self.grid.cells() if cell not in blocked]
        if not free:
            logger.warning("Game %s: no free cell left for food, leaving it at %s", self.game_id, self.food)
            return
        self.food = self.rng.choice(free)

    # ------------------------------------------------------------------
    # External interface
    # ------------------------------------------------------------------

    def set_player_direction(self, direction: str) -> bool:
        """
        Latch the player's heading for the next tick.

        Ignored (returns False) when it would reverse a snake longer than
        one cell, or once the game is over.
        """
        if direction not in VALID_MOVES:
            raise ValueError(f"Invalid direction: {direction}")
        if self.status == OVER:
            return False
        return self.player.set_direction(direction)

    def set_paused(self, paused: bool) -> None:
        if self.status == OVER:
            return
        self.status = PAUSED if paused else RUNNING

    def toggle_pause(self) -> None:
        self.set_paused(self.status == RUNNING)

    def is_over(self) -> bool:
        return self.status == OVER

    @property
    def game_over(self) -> bool:
        return self.status == OVER

    def get_scores(self) -> Tuple[int, int]:
        return self.scores[PLAYER_ID], self.scores[AI_ID]

    def get_size(self) -> int:
        return self.player.size

    @property
    def best_high_score(self) -> Optional[Tuple[str, int]]:
        if not self.high_scores:
            return None
        name = max(self.high_scores, key=lambda n: (self.high_scores[n], n))
        return name, self.high_scores[name]

    def get_current_state(self) -> GameState:
        """
        Return a snapshot of the current board as a GameState.
        """
        snake_positions = {}
        head_positions = {}
        directions = {}
        speeds = {}
        alive_dict = {}
        for sid, snake in self.snakes.items():
            snake_positions[sid] = list(snake.positions)
            head_positions[sid] = snake.head_position
            directions[sid] = snake.direction
            speeds[sid] = snake.speed
            alive_dict[sid] = snake.alive

        return GameState(
            tick_number=self.tick_number,
            status=self.status,
            snake_positions=snake_positions,
            head_positions=head_positions,
            directions=directions,
            speeds=speeds,
            alive=alive_dict,
            scores=self.scores.copy(),
            width=self.width,
            height=self.height,
            food=self.food,
            fixed_obstacles=[o.cell for o in self.fixed_obstacles],
            moving_obstacles=[o.cell for o in self.moving_obstacles],
            moving_obstacle_positions=[(o.x, o.y) for o in self.moving_obstacles],
        )

    def get_entities(self) -> GameState:
        return self.get_current_state()

    # ------------------------------------------------------------------
    # Simulation step
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """
        Execute one tick:
          1) If the game is paused or over, do nothing
          2) Let the AI choose its heading from the pre-move board
          3) Advance moving obstacles, then the player, then the AI
          4) Resolve collisions
          5) Handle food (grow + speed up + score)
        """
        if self.status != RUNNING:
            return

        if self.ai.alive:
            move = self.ai_player.get_move(self.get_current_state())
            self.ai.set_direction(move)

        for obstacle in self.moving_obstacles:
            obstacle.advance()

        self.player.advance()
        if self.ai.alive:
            self.ai.advance()

        self._resolve_collisions()
        self._consume_food()

        self.tick_number += 1
        if not self.player.alive:
            self.end_game(f"Player died ({self.player.death_reason}).")

        if self.record_history_enabled:
            self.record_history()

    def _resolve_collisions(self) -> None:
        """
        Apply the collision rules in order. Only the player's death ends
        the episode; the AI dying is a soft event.

        Obstacle and body checks cover every cell a snake swept through
        this tick, so a snake faster than one cell per tick cannot jump
        over a hazard.
        """
        occupancy = OccupancyIndex.from_entities(self.fixed_obstacles, self.moving_obstacles, ())
        player, ai = self.player, self.ai

        if any(occupancy.is_obstacle(cell) for cell in player.swept_cells):
            self._kill(player, DEATH_OBSTACLE)

        if ai.alive and any(occupancy.is_obstacle(cell) for cell in ai.swept_cells):
            self._kill(ai, DEATH_OBSTACLE)

        if player.alive and ai.alive and player.head == ai.head:
            self._kill(player, DEATH_HEAD_COLLISION)
            self._kill(ai, DEATH_HEAD_COLLISION)
        elif player.alive and any(ai.occupies(cell) for cell in player.swept_cells):
            # A dead AI's body still counts as a hazard
            self._kill(player, DEATH_BODY_COLLISION)
        elif ai.alive and any(player.occupies(cell) for cell in ai.swept_cells):
            self._kill(ai, DEATH_BODY_COLLISION)

    def _kill(self, snake: Snake, reason: str) -> None:
        snake.kill(reason, self.tick_number)
        sid = PLAYER_ID if snake is self.player else AI_ID
        logger.info("Game %s: %s died at tick %d (%s) at %s", self.game_id, sid, self.tick_number, reason, snake.head)

    def _consume_food(self) -> None:
        for sid, snake in self.snakes.items():
            if not snake.alive or self.food not in snake.swept_cells:
                continue
            self.scores[sid] += 1
            snake.grow_body()
            snake.accelerate()
            self._relocate_food()
            logger.debug(
                "Game %s: %s ate food at tick %d, score %d, speed %.2f, next food %s",
                self.game_id, sid, self.tick_number, self.scores[sid], snake.speed, self.food,
            )

    def end_game(self, reason: str) -> None:
        self.status = OVER
        logger.info("Game Over: %s", reason)

        # Decide winner by highest score
        player_score, ai_score = self.get_scores()
        if player_score == ai_score:
            self.game_result = {PLAYER_ID: "tied", AI_ID: "tied"}
        elif player_score > ai_score:
            self.game_result = {PLAYER_ID: "won", AI_ID: "lost"}
        else:
            self.game_result = {PLAYER_ID: "lost", AI_ID: "won"}

    # ------------------------------------------------------------------
    # Episode end: persistence and replay
    # ------------------------------------------------------------------

    def submit_high_score(self, name: str) -> bool:
        """
        Hand the player's (name, score) to the high score store.

        Only valid once the game is over. An empty name records nothing.
        """
        if not self.is_over():
            raise RuntimeError("High scores can only be submitted after the game is over.")
        if not name or not name.strip():
            return False

        name = name.strip()
        score = self.scores[PLAYER_ID]
        if score > self.high_scores.get(name, -1):
            self.high_scores[name] = score
        if self.high_score_store is None:
            return False
        self.high_score_store.record_high_score(name, score)
        return True

    def record_history(self) -> None:
        self.history.append(self.get_current_state())

    def death_info(self) -> Dict[str, Dict[str, Any]]:
        return {
            sid: {"reason": snake.death_reason, "tick": snake.death_tick}
            for sid, snake in self.snakes.items()
            if not snake.alive
        }

    def serialize_history(self, history: List[GameState]) -> List[Dict[str, Any]]:
        """
        Convert the list of GameState objects to a JSON-serializable list of dicts.
        """
        return [state.to_dict() for state in history]

    def save_history_to_json(self, directory: str = "completed_games", filename: Optional[str] = None) -> str:
        if filename is None:
            filename = f"snake_game_{self.game_id}.json"

        metadata = {
            "game_id": self.game_id,
            "start_time": datetime.fromtimestamp(self.start_time, tz=timezone.utc).isoformat(),
            "end_time": datetime.fromtimestamp(time.time(), tz=timezone.utc).isoformat(),
            "width": self.width,
            "height": self.height,
            "game_result": self.game_result,
            "final_scores": self.scores,
            "death_info": self.death_info(),
            "actual_ticks": self.tick_number,
        }

        data = {
            "metadata": metadata,
            "ticks": self.serialize_history(self.history),
        }

        os.makedirs(directory, exist_ok=True)
        path = os.path.join(directory, filename)
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
        logger.info("Saved replay to %s", path)
        return path

    def print_board(self):
        """
        Prints a visual representation of the current board state.
        """
        print("\n" + self.get_current_state().print_board() + "\n")


# -------------------------------
# Simulation Function
# -------------------------------

def run_simulation(game_params: argparse.Namespace, high_score_store: Any = None) -> Dict:
    """
    Runs a single headless game with the player snake driven by a controller.

    Args:
        game_params: An object (like argparse.Namespace) containing game settings
                     (width, height, max_ticks, and optionally player, seed,
                     name, save_replay, game_id).
        high_score_store: Optional persistence port for high scores.

    Returns:
        A dictionary summarizing the game results.
    """
    seed = getattr(game_params, 'seed', None)
    config = GameConfig.from_env(width=game_params.width, height=game_params.height)
    save_replay = getattr(game_params, 'save_replay', False)

    game = SnakeGame(
        width=game_params.width,
        height=game_params.height,
        config=config,
        seed=seed,
        game_id=getattr(game_params, 'game_id', None),
        high_score_store=high_score_store,
        record_history=save_replay,
    )

    player_class = get_player_class(getattr(game_params, 'player', None))
    if player_class.name == "random":
        controller = player_class(PLAYER_ID, rng=random.Random(seed))
    else:
        controller = player_class(PLAYER_ID)

    # The controller is consulted whenever the player's head enters a new cell
    last_decision_cell = None
    while not game.is_over() and game.tick_number < game_params.max_ticks:
        if game.player.head != last_decision_cell:
            game.set_player_direction(controller.get_move(game.get_current_state()))
            last_decision_cell = game.player.head
        game.tick()

    if not game.is_over():
        game.end_game("Reached max ticks.")

    name = getattr(game_params, 'name', None)
    if name:
        game.submit_high_score(name)

    result = {
        "game_id": game.game_id,
        "ticks": game.tick_number,
        "final_scores": dict(game.scores),
        "game_result": game.game_result,
        "player_alive": game.player.alive,
        "ai_alive": game.ai.alive,
        "death_info": game.death_info(),
    }
    if save_replay:
        result["replay_path"] = game.save_history_to_json()
    return result


# -------------------------------
# Example Usage (Main Entry Point)
# -------------------------------
def main():
    parser = argparse.ArgumentParser(
        description="Run a headless obstacle snake game against the A* opponent."
    )
    parser.add_argument("--width", type=int, required=False, default=32,
                        help="Width of the board in cells")
    parser.add_argument("--height", type=int, required=False, default=32,
                        help="Height of the board in cells")
    parser.add_argument("--max-ticks", dest="max_ticks", type=int, required=False, default=5000,
                        help="Stop the game after this many ticks")
    parser.add_argument("--player", type=str, required=False, default="astar",
                        help="Controller for the player snake (astar or random)")
    parser.add_argument("--seed", type=int, required=False, default=None,
                        help="Random seed for entity placement")
    parser.add_argument("--name", type=str, required=False, default=None,
                        help="Record the player's score under this name")
    parser.add_argument("--save-replay", dest="save_replay", action="store_true",
                        help="Write a JSON replay to completed_games/")

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)

    store = None
    if args.name:
        from data_access import HighScoreRepository
        store = HighScoreRepository()

    result = run_simulation(args, high_score_store=store)

    print("\nSimulation Result Summary:")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
