"""
Action System - Moves, intents, and results.

Moves are the rules-level unit: take `amount` stones from one pile.
Intents are what a front-end sends on a human turn (move the cursor,
change the amount, confirm). All state changes flow through the reducer
and come back as results.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Move:
    """Take `amount` stones from pile `pile_index`."""
    pile_index: int
    amount: int

    def __str__(self) -> str:
        return f"take {self.amount} from pile {self.pile_index + 1}"


class IntentType(Enum):
    """Player intents, already resolved from raw input."""
    SELECT_PILE = "select_pile"
    ADJUST_AMOUNT = "adjust_amount"
    CONFIRM_MOVE = "confirm_move"


@dataclass(frozen=True)
class Intent:
    """
    A resolved player intent.

    delta is the direction for SELECT_PILE (-1 left, +1 right) and the
    step for ADJUST_AMOUNT (-1 or +1). CONFIRM_MOVE ignores it.
    """
    intent_type: IntentType
    delta: int = 0

    @classmethod
    def select_pile(cls, direction: int) -> Intent:
        """Factory for pile selection."""
        return cls(intent_type=IntentType.SELECT_PILE, delta=direction)

    @classmethod
    def adjust_amount(cls, delta: int) -> Intent:
        """Factory for amount adjustment."""
        return cls(intent_type=IntentType.ADJUST_AMOUNT, delta=delta)

    @classmethod
    def confirm(cls) -> Intent:
        """Factory for move confirmation."""
        return cls(intent_type=IntentType.CONFIRM_MOVE)


@dataclass
class MoveResult:
    """
    Result of applying a move or an intent.

    Contains:
    - Whether it succeeded
    - New state (if succeeded)
    - Errors (if rejected)
    - Events for the notification sink
    """
    success: bool
    new_state: Any | None = None  # MatchState
    error: str | None = None
    error_code: str | None = None

    move: Move | None = None
    board_empty: bool = False
    events: list[Any] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> MoveResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        move: Move | None = None,
        events: list[Any] | None = None,
    ) -> MoveResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            move=move,
            board_empty=not state.is_live,
            events=events or [],
        )


@dataclass
class TurnResult:
    """
    Result of a turn advance or a clock tick.

    terminal is True when this step decided the match.
    """
    new_state: Any  # MatchState
    terminal: bool = False
    cpu_to_move: bool = False
    events: list[Any] = field(default_factory=list)
