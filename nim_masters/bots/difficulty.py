"""
Difficulty Profiles - One CPU policy per difficulty tier.

The tier is a closed enumeration. Each profile says which policy plays it
and with what sample budget; choose_move is the single entry point the
driver uses.
"""

from __future__ import annotations
import random
from dataclasses import dataclass

from ..engine_core.action import Move
from ..engine_core.state import Difficulty
from .policy import BotDecision, BotPolicy, MonteCarloPolicy, NimSumPolicy


@dataclass(frozen=True)
class DifficultyProfile:
    """
    How one tier plays.

    traces is the Monte-Carlo sample budget per candidate move, or None
    for exact play.
    """
    name: str
    description: str
    traces: int | None = None

    def create_policy(self, rng: random.Random | None = None) -> BotPolicy:
        if self.traces is None:
            return NimSumPolicy()
        return MonteCarloPolicy(traces=self.traces, rng=rng)


# ============================================================================
# Predefined Profiles
# ============================================================================

EASY = DifficultyProfile(name="Easy", description="8 MC traces", traces=8)

NORMAL = DifficultyProfile(name="Normal", description="60 MC traces", traces=60)

HARD = DifficultyProfile(name="Hard", description="XOR optimal")


PROFILES: dict[Difficulty, DifficultyProfile] = {
    Difficulty.EASY: EASY,
    Difficulty.NORMAL: NORMAL,
    Difficulty.HARD: HARD,
}


def create_policy(difficulty: Difficulty, rng: random.Random | None = None) -> BotPolicy:
    """Policy for a difficulty tier."""
    return PROFILES[difficulty].create_policy(rng)


def decide(piles, difficulty: Difficulty, rng: random.Random | None = None) -> BotDecision:
    """Full decision (move plus evaluation details) for a tier."""
    return create_policy(difficulty, rng).select_move(piles)


def choose_move(piles, difficulty: Difficulty, rng: random.Random | None = None) -> Move:
    """
    Pick the CPU move for a pile snapshot.

    Pure function of (piles, difficulty) apart from the random source.
    Raises EmptyBoardError on an all-empty board.
    """
    return decide(piles, difficulty, rng).move
