"""Tests for the GameEngine module."""

import dataclasses
import json

import numpy as np
import pytest

from canvas_snake.engine import FOOD_POINTS, GameEngine, GameStatus
from canvas_snake.grid import CellType
from canvas_snake.snake import Direction, Snake


def _arrange(engine, cells, direction, food=None):
    """Replace the engine's snake and food, keeping the grid in sync."""
    engine.grid.clear()
    engine.snake = Snake(cells)
    for x, y in cells:
        engine.grid.set(x, y, CellType.SNAKE)
    engine.direction = direction
    engine.food.position = None
    if food is not None:
        engine.grid.set(food[0], food[1], CellType.FOOD)
        engine.food.position = food


class TestEngineInit:
    def test_starts_ready(self):
        engine = GameEngine(seed=0)
        assert engine.status == GameStatus.READY
        assert engine.score == 0
        assert engine.tick == 0

    def test_step_before_reset_does_nothing(self):
        engine = GameEngine(seed=0)
        before = engine.snapshot()
        assert engine.step() == before

    def test_grid_too_small(self):
        with pytest.raises(ValueError, match="at least 8"):
            GameEngine(grid_size=5)


class TestEngineReset:
    def test_reset_layout(self):
        engine = GameEngine(seed=0)
        snap = engine.reset(30)
        assert snap.snake == ((6, 6), (5, 6), (4, 6))
        assert snap.direction == Direction.RIGHT
        assert snap.score == 0
        assert snap.status == GameStatus.RUNNING
        assert snap.grid_size == 30

    def test_reset_places_food_off_snake(self):
        for seed in range(20):
            engine = GameEngine(seed=seed)
            snap = engine.reset(8)
            assert snap.food is not None
            assert snap.food not in snap.snake

    def test_reset_after_game_over(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        engine.score = 40
        engine.status = GameStatus.GAME_OVER
        snap = engine.reset()
        assert snap.status == GameStatus.RUNNING
        assert snap.score == 0
        assert engine.pending_direction is None

    def test_reset_changes_grid_size(self):
        engine = GameEngine(grid_size=30, seed=0)
        engine.reset(12)
        assert engine.grid_size == 12
        assert engine.grid.cells.shape == (12, 12)


class TestEngineDirection:
    def test_reverse_rejected(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        engine.direction = Direction.DOWN
        engine.set_direction(Direction.UP)
        assert engine.pending_direction is None
        assert engine.direction == Direction.DOWN

    def test_turn_applied_on_next_step(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        engine.set_direction(Direction.UP)
        assert engine.direction == Direction.RIGHT
        snap = engine.step()
        assert snap.direction == Direction.UP
        assert snap.head == (6, 5)

    def test_latest_accepted_turn_wins(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        engine.set_direction(Direction.UP)
        engine.set_direction(Direction.LEFT)  # reverse of RIGHT, ignored
        assert engine.pending_direction == Direction.UP
        engine.set_direction(Direction.DOWN)
        assert engine.pending_direction == Direction.DOWN

    def test_quick_double_turn_cannot_reverse(self):
        """UP then LEFT before a tick must not walk the head into the neck."""
        engine = GameEngine(seed=0)
        engine.reset(30)
        engine.set_direction(Direction.UP)
        engine.set_direction(Direction.LEFT)
        engine.step()
        assert engine.status == GameStatus.RUNNING


class TestEngineMovement:
    def test_move_right(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        _arrange(engine, [(6, 6), (5, 6), (4, 6)], Direction.RIGHT, food=(20, 20))
        snap = engine.step()
        assert snap.snake == ((7, 6), (6, 6), (5, 6))
        assert snap.score == 0
        assert snap.tick == 1

    def test_grid_tracks_snake(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        _arrange(engine, [(6, 6), (5, 6), (4, 6)], Direction.RIGHT, food=(20, 20))
        engine.step()
        assert engine.grid.get(7, 6) == CellType.SNAKE
        assert engine.grid.get(4, 6) == CellType.EMPTY
        assert engine.grid.count(CellType.SNAKE) == 3


class TestEngineFood:
    def test_eating_grows_and_scores(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        _arrange(engine, [(6, 6), (5, 6), (4, 6)], Direction.RIGHT, food=(7, 6))
        snap = engine.step()
        assert snap.snake == ((7, 6), (6, 6), (5, 6), (4, 6))
        assert snap.score == FOOD_POINTS
        assert snap.food is not None
        assert snap.food not in snap.snake

    def test_head_cell_stays_snake_after_eating(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        _arrange(engine, [(6, 6), (5, 6), (4, 6)], Direction.RIGHT, food=(7, 6))
        engine.step()
        assert engine.grid.get(7, 6) == CellType.SNAKE
        assert engine.grid.count(CellType.FOOD) == 1

    def test_filling_the_board_wins(self):
        engine = GameEngine(grid_size=8, seed=0)
        engine.reset()
        path = [
            (x if y % 2 == 0 else 7 - x, y) for y in range(8) for x in range(8)
        ]
        _arrange(engine, list(reversed(path[:63])), Direction.LEFT, food=path[63])
        snap = engine.step()
        assert snap.won
        assert snap.status == GameStatus.GAME_OVER
        assert snap.food is None
        assert len(snap.snake) == 64


class TestEngineCollision:
    def test_left_wall(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        cells = [(0, 6), (1, 6), (2, 6)]
        _arrange(engine, cells, Direction.LEFT, food=(20, 20))
        snap = engine.step()
        assert snap.status == GameStatus.GAME_OVER
        assert snap.snake == tuple(cells)

    def test_runs_into_right_wall(self):
        engine = GameEngine(grid_size=10, seed=7)
        engine.reset()
        for _ in range(20):
            engine.step()
            if engine.status == GameStatus.GAME_OVER:
                break
        assert engine.status == GameStatus.GAME_OVER
        assert engine.snake.head[0] == 9

    def test_self_collision(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        _arrange(
            engine,
            [(5, 5), (5, 6), (6, 6), (6, 5), (7, 5)],
            Direction.UP,
            food=(20, 20),
        )
        engine.set_direction(Direction.RIGHT)
        snap = engine.step()
        assert snap.status == GameStatus.GAME_OVER

    def test_moving_into_tail_is_fatal(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        _arrange(
            engine, [(5, 5), (5, 6), (6, 6), (6, 5)], Direction.UP, food=(20, 20),
        )
        engine.set_direction(Direction.RIGHT)
        assert engine.step().status == GameStatus.GAME_OVER

    def test_collision_reads_the_board(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        _arrange(engine, [(6, 6), (5, 6), (4, 6)], Direction.RIGHT, food=(20, 20))
        engine.grid.set(7, 6, CellType.SNAKE)
        assert engine.step().status == GameStatus.GAME_OVER

    def test_growth_reads_the_board(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        _arrange(engine, [(6, 6), (5, 6), (4, 6)], Direction.RIGHT)
        engine.grid.set(7, 6, CellType.FOOD)
        snap = engine.step()
        assert len(snap.snake) == 4
        assert snap.score == FOOD_POINTS

    def test_game_over_is_terminal(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        _arrange(engine, [(0, 6), (1, 6)], Direction.LEFT, food=(20, 20))
        first = engine.step()
        assert engine.step() == first


class TestEnginePause:
    def test_pause_and_resume(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        engine.pause()
        before = engine.snapshot()
        assert before.status == GameStatus.PAUSED
        assert engine.step() == before
        engine.resume()
        assert engine.step().tick == 1

    def test_pause_requires_running(self):
        engine = GameEngine(seed=0)
        with pytest.raises(ValueError, match="running"):
            engine.pause()

    def test_resume_requires_paused(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        with pytest.raises(ValueError, match="paused"):
            engine.resume()


class TestEngineEnd:
    def test_end_running_game(self):
        engine = GameEngine(seed=0)
        engine.reset(30)
        engine.end()
        assert engine.status == GameStatus.GAME_OVER
        assert engine.step().tick == 0


class TestEngineSnapshot:
    def test_snapshot_is_frozen(self):
        engine = GameEngine(seed=0)
        snap = engine.reset(30)
        with pytest.raises(dataclasses.FrozenInstanceError):
            snap.score = 100
        assert isinstance(snap.snake, tuple)

    def test_snapshot_detached_from_engine(self):
        engine = GameEngine(seed=0)
        snap = engine.reset(30)
        engine.step()
        assert snap.snake == ((6, 6), (5, 6), (4, 6))

    def test_to_dict_is_json_serializable(self):
        engine = GameEngine(seed=42)
        engine.reset(30)
        engine.step()
        data = engine.snapshot().to_dict()
        json.dumps(data)
        assert data["status"] == "running"
        assert data["direction"] == "right"
        assert data["snake"][0] == [7, 6]


class TestEngineInvariants:
    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_random_play(self, seed):
        """Every step either moves, grows, or ends the game."""
        engine = GameEngine(grid_size=10, seed=seed)
        engine.reset()
        choices = np.random.default_rng(seed + 100)
        directions = list(Direction)

        for _ in range(300):
            prev = engine.snapshot()
            engine.set_direction(directions[choices.integers(0, 4)])
            snap = engine.step()

            assert len(snap.snake) >= 1
            assert len(set(snap.snake)) == len(snap.snake)
            assert snap.score >= prev.score

            if snap.status == GameStatus.GAME_OVER:
                assert snap.snake == prev.snake
                assert snap.score == prev.score
                break

            dx, dy = snap.direction.value
            assert snap.head == (prev.head[0] + dx, prev.head[1] + dy)
            if len(snap.snake) == len(prev.snake) + 1:
                assert snap.score == prev.score + FOOD_POINTS
                assert snap.food != prev.food
                assert snap.snake[1:] == prev.snake
            else:
                assert len(snap.snake) == len(prev.snake)
                assert snap.score == prev.score
                assert snap.snake[1:] == prev.snake[:-1]
            if snap.food is not None:
                assert snap.food not in snap.snake


class TestEngineDeterminism:
    def test_same_seed_same_outcome(self):
        actions = [
            Direction.RIGHT, Direction.DOWN, Direction.DOWN,
            Direction.LEFT, Direction.DOWN,
        ]
        assert self._run_game(123, actions) == self._run_game(123, actions)

    def test_different_seeds_differ(self):
        foods = {GameEngine(seed=s).reset(30).food for s in range(5)}
        assert len(foods) > 1

    @staticmethod
    def _run_game(seed, actions):
        engine = GameEngine(seed=seed)
        engine.reset(20)
        for action in actions:
            engine.set_direction(action)
            engine.step()
        return engine.snapshot()
