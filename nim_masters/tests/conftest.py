"""
Pytest fixtures for Nim Masters tests.
"""

import random

import pytest

from ..config import Settings
from ..engine_core.events import RecordingSink
from ..engine_core.setup import match_from_piles
from ..engine_core.state import Difficulty, GameMode, MatchState, TimeControl


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible draws and playouts."""
    return random.Random(1234)


@pytest.fixture
def instant_settings() -> Settings:
    """No animation or CPU pacing: every step resolves on the next update."""
    return Settings(move_animation_ms=0, cpu_delay_ms=0)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def vs_cpu_state() -> MatchState:
    """Untimed vs-CPU match on [1, 2, 3], human to move."""
    return match_from_piles([1, 2, 3], mode=GameMode.VS_CPU, difficulty=Difficulty.HARD)


@pytest.fixture
def classic_vs_cpu_state() -> MatchState:
    """Classic-clock vs-CPU match on [3, 4, 5]."""
    return match_from_piles(
        [3, 4, 5],
        mode=GameMode.VS_CPU,
        difficulty=Difficulty.HARD,
        time_control=TimeControl.CLASSIC,
    )


@pytest.fixture
def blitz_two_player_state() -> MatchState:
    """Blitz two-player match on [2, 5, 0, 4]."""
    return match_from_piles(
        [2, 5, 0, 4],
        mode=GameMode.TWO_PLAYER,
        time_control=TimeControl.BLITZ,
    )
