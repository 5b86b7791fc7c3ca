"""
Tests for main.py - the tick engine.

Most tests build a small board without random obstacles and then place
snakes, obstacles and food by hand so every tick is predictable.
"""

import json
import pytest
import sys
import os
from argparse import Namespace
from unittest.mock import Mock

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import GameConfig
from main import SnakeGame, run_simulation
from domain import (
    ConfigurationError,
    FixedObstacle,
    MovingObstacle,
    Snake,
    UP, DOWN, LEFT, RIGHT,
    RUNNING, PAUSED, OVER,
)
from players.astar_player import AStarPlayer


def make_game(width=10, height=10, ai_move=None, **config_overrides):
    """Empty board with speed-1 snakes; the AI follows `ai_move` if given."""
    config = GameConfig(
        width=width,
        height=height,
        num_fixed_obstacles=0,
        num_moving_obstacles=0,
        initial_speed=1.0,
    )
    for key, value in config_overrides.items():
        setattr(config, key, value)

    ai_player = None
    if ai_move is not None:
        ai_player = Mock()
        ai_player.get_move = Mock(return_value=ai_move)

    return SnakeGame(width=width, height=height, config=config, seed=7, ai_player=ai_player)


def place(game, player=None, ai=None, food=None, player_dir=RIGHT, ai_dir=LEFT, speed=1.0):
    if player is not None:
        game.player = Snake(game.grid, player, direction=player_dir, speed=speed)
    if ai is not None:
        game.ai = Snake(game.grid, ai, direction=ai_dir, speed=speed)
    if food is not None:
        game.food = food


class TestInitialization:
    """Tests for board setup."""

    def test_entities_do_not_overlap(self):
        """Every entity gets its own cell at the start."""
        config = GameConfig(width=12, height=12, num_fixed_obstacles=6, num_moving_obstacles=3)
        game = SnakeGame(width=12, height=12, config=config, seed=3)

        cells = [game.player.head, game.ai.head, game.food]
        cells += [o.cell for o in game.fixed_obstacles]
        cells += [o.cell for o in game.moving_obstacles]
        assert len(cells) == 12
        assert len(set(cells)) == len(cells)

    def test_player_starts_in_center(self):
        """The player spawns in the middle facing right with size 1."""
        game = make_game()
        assert game.player.head == (5, 5)
        assert game.player.direction == RIGHT
        assert game.player.size == 1
        assert game.status == RUNNING
        assert game.get_scores() == (0, 0)

    def test_same_seed_same_board(self):
        """Placement is reproducible with a seed."""
        config = GameConfig(width=15, height=15)
        a = SnakeGame(width=15, height=15, config=config, seed=11)
        b = SnakeGame(width=15, height=15, config=config, seed=11)
        assert a.get_current_state().to_dict() == b.get_current_state().to_dict()

    def test_board_too_small(self):
        """More entities than cells is a configuration error."""
        config = GameConfig(width=2, height=2, num_fixed_obstacles=6, num_moving_obstacles=0)
        with pytest.raises(ConfigurationError):
            SnakeGame(width=2, height=2, config=config)

    def test_placement_attempts_are_capped(self):
        """Running out of placement attempts fails instead of looping forever."""
        config = GameConfig(width=10, height=10, num_fixed_obstacles=1, max_placement_attempts=0)
        with pytest.raises(ConfigurationError):
            SnakeGame(width=10, height=10, config=config)

    def test_invalid_dimensions(self):
        """A zero-width board is a configuration error."""
        with pytest.raises(ConfigurationError):
            SnakeGame(width=0, height=10)

    def test_loads_high_scores_from_store(self):
        """Previously recorded scores are read at construction."""
        store = Mock()
        store.get_high_scores = Mock(return_value={"bob": 3, "amy": 7})
        game = SnakeGame(width=10, height=10, config=GameConfig(width=10, height=10), high_score_store=store)
        assert game.high_scores == {"bob": 3, "amy": 7}
        assert game.best_high_score == ("amy", 7)


class TestPlayerControl:
    """Tests for direction, pause and over handling."""

    def test_single_cell_player_can_reverse(self):
        """SetPlayerDirection accepts the opposite heading at size 1."""
        game = make_game()
        assert game.set_player_direction(LEFT) is True
        assert game.player.direction == LEFT

    def test_long_player_cannot_reverse(self):
        """SetPlayerDirection is a no-op for the opposite heading at size > 1."""
        game = make_game()
        place(game, player=[(5, 5), (4, 5)])
        assert game.set_player_direction(LEFT) is False
        assert game.player.direction == RIGHT

    def test_last_writer_wins(self):
        """Only the latest request before a tick counts."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(5, 5)], ai=[(1, 8)], food=(9, 9))
        game.set_player_direction(UP)
        game.set_player_direction(DOWN)
        game.tick()
        assert game.player.head == (5, 4)

    def test_invalid_direction(self):
        """Unknown directions raise ValueError."""
        with pytest.raises(ValueError):
            make_game().set_player_direction("BACK")

    def test_pause_stops_simulation(self):
        """No entity moves while paused."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(5, 5)], ai=[(1, 8)], food=(9, 9))
        game.set_paused(True)
        assert game.status == PAUSED
        game.tick()
        assert game.player.head == (5, 5)
        assert game.tick_number == 0

        game.set_paused(False)
        game.tick()
        assert game.player.head == (6, 5)

    def test_toggle_pause(self):
        """toggle_pause flips between running and paused."""
        game = make_game()
        game.toggle_pause()
        assert game.status == PAUSED
        game.toggle_pause()
        assert game.status == RUNNING

    def test_over_is_terminal(self):
        """Ticks, pause and direction changes do nothing once over."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(5, 5)], ai=[(1, 8)], food=(9, 9))
        game.fixed_obstacles = [FixedObstacle(6, 5)]
        game.tick()
        assert game.is_over()

        ai_head = game.ai.head
        game.tick()
        game.set_paused(True)
        assert game.status == OVER
        assert game.set_player_direction(UP) is False
        assert game.player.head == (6, 5)
        assert game.ai.head == ai_head
        assert game.tick_number == 1


class TestFoodAndGrowth:
    """Tests for eating, growth and speed."""

    def test_player_reaches_food_in_three_ticks(self):
        """Player at (5,5) moving right at speed 1 eats food at (8,5) on the third tick."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(5, 5)], ai=[(0, 0)], food=(8, 5))
        game.ai.kill("obstacle", 0)
        original_size = game.player.size

        for _ in range(3):
            game.tick()

        assert game.player.head == (8, 5)
        assert game.get_scores() == (1, 0)
        assert game.food != (8, 5)
        assert game.food != (0, 0)
        assert game.player.speed == pytest.approx(1.02)
        # Growth lands on the next cell entry
        assert game.player.size == original_size
        assert game.player.pending_growth == 1

        game.tick()
        assert game.player.head == (9, 5)
        assert game.player.size == original_size + 1
        assert list(game.player.positions) == [(9, 5), (8, 5)]

    def test_ai_eats_food(self):
        """The AI scores, grows and speeds up like the player."""
        game = make_game(ai_move=RIGHT)
        place(game, player=[(5, 8)], ai=[(2, 2)], food=(3, 2), ai_dir=RIGHT)
        game.tick()

        assert game.get_scores() == (0, 1)
        assert game.ai.pending_growth == 1
        assert game.ai.speed == pytest.approx(1.02)
        assert game.food != (3, 2)

    def test_new_food_avoids_everything(self):
        """Relocated food never lands on a body or obstacle."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(5, 5), (4, 5), (3, 5)], ai=[(0, 0)], food=(6, 5))
        game.ai.kill("obstacle", 0)
        game.fixed_obstacles = [FixedObstacle(x, 9) for x in range(10)]
        game.tick()

        occupancy = game.occupancy()
        assert game.get_scores() == (1, 0)
        assert not occupancy.is_blocked(game.food)

    def test_full_board_leaves_food_in_place(self):
        """With no free cell the food stays where it was."""
        game = make_game(width=3, height=1)
        game.ai = Snake(game.grid, [(0, 0), (2, 0)])
        game.player = Snake(game.grid, [(1, 0)])
        game.food = (2, 0)
        game._relocate_food()
        assert game.food == (2, 0)

    def test_dead_snake_does_not_eat(self):
        """An AI killed this tick does not consume food on its cell."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(5, 8)], ai=[(4, 2)], food=(3, 2))
        game.moving_obstacles = [MovingObstacle(game.grid, 4.5, 2.5, LEFT, 1.0)]
        game.tick()

        assert game.ai.alive is False
        assert game.ai.death_reason == "obstacle"
        assert game.get_scores() == (0, 0)
        assert game.food == (3, 2)


class TestCollisions:
    """Tests for collision resolution order."""

    def test_player_hits_fixed_obstacle(self):
        """Player running into an obstacle dies and the episode ends."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(5, 5)], ai=[(1, 8)], food=(9, 9))
        game.fixed_obstacles = [FixedObstacle(6, 5)]
        game.tick()

        assert game.player.alive is False
        assert game.player.death_reason == "obstacle"
        assert game.is_over()
        assert game.status == OVER

    def test_moving_obstacle_hits_player(self):
        """A moving obstacle drifting into the player's cell is lethal."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(5, 5)], ai=[(1, 8)], food=(9, 9))
        game.moving_obstacles = [MovingObstacle(game.grid, 7.5, 5.5, LEFT, 1.0)]
        game.tick()

        assert game.player.death_reason == "obstacle"
        assert game.is_over()

    def test_ai_hits_obstacle_game_continues(self):
        """The AI dying does not end the episode."""
        game = make_game(ai_move=RIGHT)
        place(game, player=[(5, 8)], ai=[(2, 2)], food=(9, 0), ai_dir=RIGHT)
        game.fixed_obstacles = [FixedObstacle(3, 2)]
        game.tick()

        assert game.ai.alive is False
        assert game.ai.death_reason == "obstacle"
        assert game.player.alive is True
        assert not game.is_over()

    def test_head_to_head_takes_precedence(self):
        """Heads meeting kill both, even though each head is also in the other's body."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(4, 5), (3, 5)], ai=[(6, 5), (7, 5)], food=(9, 9))
        game.tick()

        assert game.player.head == game.ai.head == (5, 5)
        assert game.player.alive is False
        assert game.ai.alive is False
        assert game.player.death_reason == "head_collision"
        assert game.ai.death_reason == "head_collision"
        assert game.is_over()

    def test_player_into_ai_body(self):
        """Player running into the AI's body dies; the AI survives."""
        game = make_game(ai_move=DOWN)
        place(game, player=[(5, 4)], ai=[(6, 4), (6, 5)], food=(9, 9), ai_dir=DOWN)
        game.tick()

        assert game.player.alive is False
        assert game.player.death_reason == "body_collision"
        assert game.ai.alive is True
        assert game.is_over()

    def test_ai_into_player_body(self):
        """The AI running into the player dies alone; the episode continues."""
        game = make_game(ai_move=DOWN)
        place(game, player=[(5, 5), (4, 5)], ai=[(5, 6)], food=(9, 9), ai_dir=DOWN)
        game.tick()

        assert game.ai.alive is False
        assert game.ai.death_reason == "body_collision"
        assert game.player.alive is True
        assert not game.is_over()
        assert game.get_scores() == (0, 0)

    def test_dead_ai_body_is_a_hazard(self):
        """A dead AI's body still kills the player."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(5, 5)], ai=[(6, 5)], food=(9, 9))
        game.ai.kill("obstacle", 0)
        game.tick()

        assert game.player.alive is False
        assert game.player.death_reason == "body_collision"

    def test_dead_ai_stops_moving_and_planning(self):
        """A dead AI is neither advanced nor asked for a move."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(5, 8)], ai=[(2, 2)], food=(9, 9))
        game.ai.kill("obstacle", 0)
        game.tick()

        assert game.ai.head == (2, 2)
        game.ai_player.get_move.assert_not_called()

    def test_wraparound_is_not_a_collision(self):
        """Crossing the board edge is harmless."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(9, 5)], ai=[(1, 8)], food=(4, 4))
        game.tick()

        assert game.player.head == (0, 5)
        assert game.player.alive is True

    def test_fast_player_cannot_jump_an_obstacle(self):
        """At speed 1.5 the player dies on an obstacle in a cell it crossed."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(2, 5)], ai=[(1, 8)], food=(9, 9), speed=1.5)
        game.fixed_obstacles = [FixedObstacle(3, 5)]
        game.tick()

        assert game.player.head == (4, 5)
        assert game.player.alive is False
        assert game.player.death_reason == "obstacle"
        assert game.is_over()

    def test_fast_player_cannot_jump_ai_body(self):
        """A crossed cell holding the AI's body is a body collision."""
        game = make_game(ai_move=DOWN)
        place(
            game,
            player=[(2, 5)],
            ai=[(3, 2), (3, 3), (3, 4), (3, 5), (3, 6)],
            food=(9, 9),
            ai_dir=DOWN,
            speed=1.5,
        )
        game.tick()

        assert game.ai.occupies((3, 5))
        assert game.player.alive is False
        assert game.player.death_reason == "body_collision"
        assert game.ai.alive is True

    def test_fast_player_eats_food_it_crosses(self):
        """Food in a crossed cell is eaten even when the head ends past it."""
        game = make_game(ai_move=LEFT)
        place(game, player=[(2, 5)], ai=[(0, 0)], food=(3, 5), speed=1.5)
        game.ai.kill("obstacle", 0)
        game.tick()

        assert game.player.head == (4, 5)
        assert game.get_scores() == (1, 0)
        assert game.player.pending_growth == 1


class TestAiDirection:
    """Tests for how the AI heading is chosen each tick."""

    def test_ai_plans_on_pre_move_board(self):
        """The AI sees the board as it stood before this tick's movement."""
        game = make_game(ai_move=UP)
        place(game, player=[(5, 5)], ai=[(2, 2)], food=(9, 9))
        game.tick()

        state = game.ai_player.get_move.call_args[0][0]
        assert state.snake_positions["ai"] == [(2, 2)]
        assert state.snake_positions["player"] == [(5, 5)]
        assert game.ai.head == (2, 3)

    def test_astar_ai_moves_toward_food(self):
        """The default opponent heads for the food."""
        game = make_game()
        assert isinstance(game.ai_player, AStarPlayer)
        place(game, player=[(8, 8)], ai=[(2, 2)], food=(2, 6), ai_dir=RIGHT, player_dir=UP)
        game.tick()

        assert game.ai.direction == UP
        assert game.ai.head == (2, 3)

    def test_enclosed_ai_holds_direction(self):
        """Boxed in by four obstacles, the AI keeps its heading every tick."""
        game = make_game()
        place(game, player=[(1, 1)], ai=[(5, 5)], food=(8, 8), ai_dir=LEFT)
        game.ai.speed = 0.1
        game.fixed_obstacles = [FixedObstacle(4, 5), FixedObstacle(6, 5), FixedObstacle(5, 4), FixedObstacle(5, 6)]

        for _ in range(3):
            game.tick()
            assert game.ai.direction == LEFT
            assert game.ai.alive is True


class TestEpisodeEnd:
    """Tests for high scores and replays."""

    def _finished_game(self, store=None):
        game = make_game(ai_move=LEFT)
        game.high_score_store = store
        place(game, player=[(5, 5)], ai=[(1, 8)], food=(6, 5))
        game.fixed_obstacles = [FixedObstacle(8, 5)]
        game.tick()
        # Keep the relocated food out of both snakes' way
        game.food = (2, 2)
        game.tick()
        game.tick()
        return game

    def test_submit_before_over_raises(self):
        """High scores are only handed out after the game is over."""
        with pytest.raises(RuntimeError):
            make_game().submit_high_score("alice")

    def test_submit_records_player_score(self):
        """The store receives (name, score) once the game is over."""
        store = Mock()
        game = self._finished_game(store)
        assert game.is_over()
        assert game.get_scores()[0] == 1

        assert game.submit_high_score("  alice ") is True
        store.record_high_score.assert_called_once_with("alice", 1)
        assert game.high_scores["alice"] == 1

    def test_empty_name_records_nothing(self):
        """An empty name is ignored."""
        store = Mock()
        game = self._finished_game(store)
        assert game.submit_high_score("") is False
        store.record_high_score.assert_not_called()

    def test_game_result_by_score(self):
        """The higher score wins when the game ends."""
        game = self._finished_game()
        assert game.game_result == {"player": "won", "ai": "lost"}

    def test_save_history_to_json(self, tmp_path):
        """Recorded ticks are written as a JSON replay."""
        config = GameConfig(width=10, height=10, num_fixed_obstacles=0, num_moving_obstacles=0)
        game = SnakeGame(width=10, height=10, config=config, seed=5, record_history=True)
        game.tick()
        game.tick()
        game.end_game("test")

        path = game.save_history_to_json(directory=str(tmp_path))
        with open(path) as f:
            data = json.load(f)

        assert data["metadata"]["game_id"] == game.game_id
        assert data["metadata"]["actual_ticks"] == 2
        assert len(data["ticks"]) == 3
        assert data["ticks"][0]["tick_number"] == 0

    def test_snapshot_is_a_copy(self):
        """Mutating a snapshot does not touch the game."""
        game = make_game()
        state = game.get_entities()
        state.snake_positions["player"].append((0, 0))
        state.scores["player"] = 99
        assert list(game.player.positions) == [(5, 5)]
        assert game.get_scores() == (0, 0)


class TestRunSimulation:
    """Tests for the headless driver."""

    def test_run_simulation_summary(self, monkeypatch):
        """A headless run ends and reports its outcome."""
        monkeypatch.delenv("SNAKE_NUM_FIXED_OBSTACLES", raising=False)
        params = Namespace(width=12, height=12, max_ticks=200, player="random", seed=3)
        result = run_simulation(params)

        assert set(result) >= {"game_id", "ticks", "final_scores", "game_result", "player_alive", "ai_alive"}
        assert 0 < result["ticks"] <= 200
        assert set(result["final_scores"]) == {"player", "ai"}
        assert result["game_result"]["player"] in {"won", "lost", "tied"}

    def test_run_simulation_records_high_score(self):
        """A name in the params is passed to the high score store."""
        store = Mock()
        store.get_high_scores = Mock(return_value={})
        params = Namespace(width=12, height=12, max_ticks=30, player="astar", seed=1, name="zoe")
        result = run_simulation(params, high_score_store=store)

        store.record_high_score.assert_called_once_with("zoe", result["final_scores"]["player"])

    def test_run_simulation_unknown_player(self):
        """Unknown controllers are rejected."""
        params = Namespace(width=12, height=12, max_ticks=10, player="psychic", seed=1)
        with pytest.raises(ValueError):
            run_simulation(params)
