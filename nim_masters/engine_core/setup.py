"""
Match Setup - Creates the initial state of a match.

This module handles:
- Drawing pile sizes for the chosen board size
- Seeding the clocks from the time control
- Building matches from explicit piles (tests, suggestions)
"""

from __future__ import annotations
import logging
import random

from .state import (
    BOARD_LAYOUTS,
    CLOCK_RULES,
    BoardSize,
    Difficulty,
    GameMode,
    MatchConfig,
    MatchState,
    TimeControl,
    first_nonempty,
)

logger = logging.getLogger(__name__)


def new_match(
    board_size: BoardSize = BoardSize.MEDIUM,
    mode: GameMode = GameMode.VS_CPU,
    difficulty: Difficulty = Difficulty.NORMAL,
    time_control: TimeControl | None = TimeControl.BLITZ,
    rng: random.Random | None = None,
) -> MatchState:
    """
    Set up a new match.

    Args:
        board_size: Selects pile count and stone range
        mode: Two-player or vs-CPU
        difficulty: CPU tier (ignored in two-player mode)
        time_control: Clock discipline, or None for an untimed match
        rng: Random source for the pile draw (seed it for determinism)

    Returns:
        Initial MatchState with player 0 to move
    """
    rng = rng or random.Random()
    layout = BOARD_LAYOUTS[board_size]
    piles = tuple(
        rng.randint(layout.min_stones, layout.max_stones)
        for _ in range(layout.pile_count)
    )

    state = match_from_piles(
        piles,
        mode=mode,
        difficulty=difficulty,
        time_control=time_control,
        board_size=board_size,
    )
    logger.info(
        f"New {board_size.value} match ({mode.value}, {difficulty.value}, "
        f"{time_control.value if time_control else 'untimed'}): {list(piles)}"
    )
    return state


def new_match_from_config(config: MatchConfig, rng: random.Random | None = None) -> MatchState:
    """Set up a new match from menu settings."""
    return new_match(
        board_size=config.board_size,
        mode=config.mode,
        difficulty=config.difficulty,
        time_control=config.time_control,
        rng=rng,
    )


def match_from_piles(
    piles,
    mode: GameMode = GameMode.VS_CPU,
    difficulty: Difficulty = Difficulty.NORMAL,
    time_control: TimeControl | None = None,
    board_size: BoardSize | None = None,
) -> MatchState:
    """
    Build a match on a given position.

    Raises ValueError for a negative pile or an empty pile list.
    """
    piles = tuple(int(p) for p in piles)
    if not piles:
        raise ValueError("A match needs at least one pile")
    if any(p < 0 for p in piles):
        raise ValueError(f"Pile sizes must be non-negative: {list(piles)}")

    if time_control is not None:
        base = CLOCK_RULES[time_control].base_ms
        clocks = (base, base)
    else:
        clocks = (0, 0)

    selected = first_nonempty(piles)
    return MatchState(
        piles=piles,
        mode=mode,
        difficulty=difficulty,
        board_size=board_size,
        time_control=time_control,
        clocks=clocks,
        clock_running=time_control is not None,
        selected_pile=0 if selected is None else selected,
        selected_amount=1,
    )
