# tests/conftest.py
import os
import sys

# Headless SDL so tests don't open a window
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

# Ensure project root is importable (so core.* imports work when running from repo root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import pygame as pg
import pytest

from config import AppConfig
from core.food import Food
from core.game_state import GameState
from core.geometry import Direction, Position
from core.snake import Snake


class FirstFreeRng:
    """Deterministic stand-in for random.Random: always the first candidate, never a bonus roll."""
    def __init__(self, roll: float = 1.0):
        self.roll = roll

    def choice(self, seq):
        return seq[0]

    def random(self):
        return self.roll


@pytest.fixture(scope="session", autouse=True)
def _pygame_session():
    pg.init()
    yield
    pg.quit()


@pytest.fixture
def screen():
    # Plain Surface is fine for draw tests (no need for display mode)
    return pg.Surface((800, 600))


@pytest.fixture
def cfg():
    return AppConfig(grid_w=10, grid_h=10, seed=7)


@pytest.fixture
def state_factory():
    def make(rng=None, **overrides):
        base = AppConfig(grid_w=10, grid_h=10, seed=7)
        return GameState(base.with_(**overrides), rng=rng)
    return make


@pytest.fixture
def place():
    """Replace snake and food of a state in one go (tests only)."""
    def _place(state, segments, direction=Direction.RIGHT, food=None, bonus=None):
        state.snake = Snake.from_segments([Position(*p) for p in segments], direction)
        state.food = Food.plain(Position(*food), state.cfg.plain_food_value) if food else None
        state.bonus = bonus
        return state
    return _place


@pytest.fixture
def first_free_rng():
    return FirstFreeRng()


@pytest.fixture
def rolling_rng():
    # every bonus roll succeeds
    return FirstFreeRng(roll=0.0)
