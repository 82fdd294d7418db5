"""
Match State - The canonical state of one Nim match.

Design principles:
- Immutable: every change returns a new MatchState
- Piles keep their order for the whole match; values only decrease
- No ambient globals: the driver owns the current state and passes it in
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import reduce
from operator import xor


class BoardSize(Enum):
    """Board size selection."""
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class GameMode(Enum):
    """Who plays the second seat."""
    TWO_PLAYER = "two_player"
    VS_CPU = "vs_cpu"


class Difficulty(Enum):
    """CPU difficulty tiers."""
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


class TimeControl(Enum):
    """Clock disciplines."""
    CLASSIC = "classic"
    BLITZ = "blitz"
    BULLET = "bullet"


class Opponent(Enum):
    """Opponent choice as offered by the menu."""
    HUMAN = "human"
    CPU_EASY = "cpu_easy"
    CPU_NORMAL = "cpu_normal"
    CPU_HARD = "cpu_hard"

    @property
    def mode(self) -> GameMode:
        return GameMode.TWO_PLAYER if self is Opponent.HUMAN else GameMode.VS_CPU

    @property
    def difficulty(self) -> Difficulty:
        """Difficulty of the CPU seat. Two-player matches carry NORMAL, unused."""
        return {
            Opponent.CPU_EASY: Difficulty.EASY,
            Opponent.CPU_HARD: Difficulty.HARD,
        }.get(self, Difficulty.NORMAL)


class EndReason(Enum):
    """Why a match was decided."""
    NORMAL = "normal"  # last stone taken
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class PileLayout:
    """Pile count and inclusive stone range for a board size."""
    pile_count: int
    min_stones: int
    max_stones: int


@dataclass(frozen=True)
class ClockRule:
    """Base allotment and per-move increment, in milliseconds."""
    base_ms: int
    increment_ms: int


BOARD_LAYOUTS: dict[BoardSize, PileLayout] = {
    BoardSize.SMALL: PileLayout(pile_count=3, min_stones=1, max_stones=5),
    BoardSize.MEDIUM: PileLayout(pile_count=4, min_stones=2, max_stones=7),
    BoardSize.LARGE: PileLayout(pile_count=5, min_stones=3, max_stones=9),
}

CLOCK_RULES: dict[TimeControl, ClockRule] = {
    TimeControl.CLASSIC: ClockRule(base_ms=300_000, increment_ms=5_000),
    TimeControl.BLITZ: ClockRule(base_ms=60_000, increment_ms=2_000),
    TimeControl.BULLET: ClockRule(base_ms=15_000, increment_ms=1_000),
}

HUMAN_SEAT = 0
CPU_SEAT = 1

# Largest position the decision engine is asked about (the large board)
MAX_PILES = max(layout.pile_count for layout in BOARD_LAYOUTS.values())
MAX_PILE_SIZE = max(layout.max_stones for layout in BOARD_LAYOUTS.values())


def nim_sum(piles: tuple[int, ...] | list[int]) -> int:
    """XOR of all pile sizes."""
    return reduce(xor, piles, 0)


def first_nonempty(piles: tuple[int, ...] | list[int]) -> int | None:
    """Index of the first pile with stones, or None on an empty board."""
    for i, count in enumerate(piles):
        if count > 0:
            return i
    return None


@dataclass(frozen=True)
class MatchConfig:
    """
    Settings chosen once, at match creation.

    time_control=None plays an untimed match.
    """
    board_size: BoardSize = BoardSize.MEDIUM
    opponent: Opponent = Opponent.CPU_NORMAL
    time_control: TimeControl | None = TimeControl.BLITZ

    @property
    def mode(self) -> GameMode:
        return self.opponent.mode

    @property
    def difficulty(self) -> Difficulty:
        return self.opponent.difficulty


@dataclass(frozen=True)
class Outcome:
    """A decided match: who won and why."""
    winner: int
    reason: EndReason


@dataclass(frozen=True)
class MatchState:
    """
    Complete match state at a point in time.

    selected_pile/selected_amount are driver convenience (the cursor the
    current human moves around), not part of the rules.
    """
    piles: tuple[int, ...]
    mode: GameMode = GameMode.VS_CPU
    difficulty: Difficulty = Difficulty.NORMAL
    board_size: BoardSize | None = None
    time_control: TimeControl | None = None

    active_player: int = 0
    turn_number: int = 0

    # Clocks, in milliseconds, indexed by seat
    clocks: tuple[int, int] = (0, 0)
    clock_running: bool = False

    outcome: Outcome | None = None

    # Cursor
    selected_pile: int = 0
    selected_amount: int = 1

    # History (for replay and debugging)
    move_history: tuple = field(default_factory=tuple)

    @property
    def is_decided(self) -> bool:
        return self.outcome is not None

    @property
    def is_live(self) -> bool:
        """True while at least one pile has stones."""
        return any(p > 0 for p in self.piles)

    @property
    def pile_count(self) -> int:
        return len(self.piles)

    @property
    def clock_rule(self) -> ClockRule | None:
        if self.time_control is None:
            return None
        return CLOCK_RULES[self.time_control]

    def has_clock(self, player: int) -> bool:
        """
        Whether a seat plays on a clock.

        Player 0 always does in a timed match; player 1 only in two-player
        mode. The CPU never has a clock.
        """
        if self.time_control is None:
            return False
        return player == HUMAN_SEAT or self.mode == GameMode.TWO_PLAYER

    def is_cpu_turn(self) -> bool:
        return self.mode == GameMode.VS_CPU and self.active_player == CPU_SEAT

    def is_human_turn(self) -> bool:
        return not self.is_cpu_turn()

    def with_clock(self, player: int, remaining_ms: int) -> MatchState:
        """Return new state with one seat's clock replaced."""
        clocks = list(self.clocks)
        clocks[player] = remaining_ms
        return self._copy_with(clocks=(clocks[0], clocks[1]))

    def with_pile(self, pile_index: int, count: int) -> MatchState:
        """Return new state with one pile replaced."""
        piles = list(self.piles)
        piles[pile_index] = count
        return self._copy_with(piles=tuple(piles))

    def _copy_with(self, **kwargs) -> MatchState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
