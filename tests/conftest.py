"""Shared fixtures for the game tests."""
import contextlib
import random

import pytest

from game_of_squares.components import Position, TargetTag
from game_of_squares.simulation import create_simulation


class FakeTerminal:
    """Just enough of blessed.Terminal for the renderer and the game loop."""

    normal = ''
    home = ''
    clear = ''

    def __init__(self, width=80, height=24, keys=()):
        self.width = width
        self.height = height
        self.keys = list(keys)

    def move_xy(self, x, y):
        return f'<{x},{y}>'

    def color(self, n):
        return ''

    def on_color(self, n):
        return ''

    def inkey(self, timeout=None):
        if self.keys:
            return self.keys.pop(0)
        return ''

    def fullscreen(self):
        return contextlib.nullcontext()

    def cbreak(self):
        return contextlib.nullcontext()

    def hidden_cursor(self):
        return contextlib.nullcontext()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def sim():
    return create_simulation(seed=1234, spawn_max_attempts=10_000)


@pytest.fixture
def place_target():
    """Move the session's only target to an exact spot."""
    def _place(ctx, x, y):
        target_id = ctx.target_id()
        pos = ctx.world.get_component(target_id, Position)
        pos.x, pos.y = x, y
        return target_id
    return _place


@pytest.fixture
def term():
    return FakeTerminal()
