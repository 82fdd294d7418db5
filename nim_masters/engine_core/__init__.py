"""
Engine Core - Match state and the rules of Nim.

The engine is the runtime that:
1. Sets up a match (piles, clocks)
2. Validates and applies moves
3. Advances turns and decides the match
4. Runs the clocks
5. Emits events for the presentation and audio layers
"""

from .state import (
    BoardSize,
    GameMode,
    Difficulty,
    TimeControl,
    Opponent,
    EndReason,
    MatchConfig,
    MatchState,
    Outcome,
    nim_sum,
)
from .action import Move, Intent, IntentType, MoveResult, TurnResult
from .action_generator import legal_moves, is_legal
from .events import EventSink, RecordingSink, MoveTaken, StoneRemoved, MatchDecided
from .reducer import (
    Reducer,
    apply_intent,
    legal_move,
    apply_move,
    advance_turn,
    tick_clock,
    select_pile,
    adjust_amount,
    confirm_move,
)
from .setup import new_match, new_match_from_config, match_from_piles

__all__ = [
    "BoardSize",
    "GameMode",
    "Difficulty",
    "TimeControl",
    "Opponent",
    "EndReason",
    "MatchConfig",
    "MatchState",
    "Outcome",
    "nim_sum",
    "Move",
    "Intent",
    "IntentType",
    "MoveResult",
    "TurnResult",
    "legal_moves",
    "is_legal",
    "EventSink",
    "RecordingSink",
    "MoveTaken",
    "StoneRemoved",
    "MatchDecided",
    "Reducer",
    "apply_intent",
    "legal_move",
    "apply_move",
    "advance_turn",
    "tick_clock",
    "select_pile",
    "adjust_amount",
    "confirm_move",
    "new_match",
    "new_match_from_config",
    "match_from_piles",
]
