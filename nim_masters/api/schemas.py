"""
Pydantic Schemas - The contract between the engine and a front-end.

Front-ends never touch MatchState. They send requests (match settings,
intents, elapsed time) and poll read-only snapshots once per frame.

Error Codes:
- NO_MATCH: No match is running
- EMPTY_BOARD: A move was requested on a board with no stones
"""

from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, Field

from ..engine_core.state import (
    MAX_PILE_SIZE,
    MAX_PILES,
    BoardSize,
    Difficulty,
    EndReason,
    GameMode,
    MatchConfig,
    MatchState,
    Opponent,
    TimeControl,
)
from ..session.game_loop import LoopState


# =============================================================================
# Enums
# =============================================================================

class IntentKind(str, Enum):
    """Intents a front-end may send."""
    SELECT_PILE = "select_pile"
    ADJUST_AMOUNT = "adjust_amount"
    CONFIRM_MOVE = "confirm_move"


class ErrorCode(str, Enum):
    """Structured error codes."""
    NO_MATCH = "NO_MATCH"
    EMPTY_BOARD = "EMPTY_BOARD"


# =============================================================================
# Shared Models
# =============================================================================

class OutcomeInfo(BaseModel):
    """How a decided match ended."""
    winner: int = Field(..., ge=0, le=1)
    reason: EndReason

    model_config = {"from_attributes": True}


class EventInfo(BaseModel):
    """One engine event, flattened for the presentation layer."""
    kind: str = Field(description="move_taken, stone_removed, match_decided")
    pile_index: Optional[int] = None
    amount: Optional[int] = None
    mover: Optional[int] = None
    index: Optional[int] = None
    winner: Optional[int] = None
    reason: Optional[EndReason] = None

    @classmethod
    def from_event(cls, event) -> "EventInfo":
        return cls(
            kind=event.kind.value,
            pile_index=getattr(event, "pile_index", None),
            amount=getattr(event, "amount", None),
            mover=getattr(event, "mover", None),
            index=getattr(event, "index", None),
            winner=getattr(event, "winner", None),
            reason=getattr(event, "reason", None),
        )


class MatchSnapshot(BaseModel):
    """Read-only view of a match, polled once per frame."""
    piles: list[int]
    active_player: int
    selected_pile: int
    selected_amount: int
    clocks: list[int] = Field(description="Remaining ms per seat")
    clock_running: bool
    outcome: Optional[OutcomeInfo] = None

    mode: GameMode
    difficulty: Difficulty
    board_size: Optional[BoardSize] = None
    time_control: Optional[TimeControl] = None
    loop_state: Optional[LoopState] = None

    model_config = {"frozen": True}

    @classmethod
    def from_state(cls, state: MatchState, loop_state: LoopState | None = None) -> "MatchSnapshot":
        return cls(
            piles=list(state.piles),
            active_player=state.active_player,
            selected_pile=state.selected_pile,
            selected_amount=state.selected_amount,
            clocks=list(state.clocks),
            clock_running=state.clock_running,
            outcome=OutcomeInfo.model_validate(state.outcome) if state.outcome else None,
            mode=state.mode,
            difficulty=state.difficulty,
            board_size=state.board_size,
            time_control=state.time_control,
            loop_state=loop_state,
        )


# =============================================================================
# Request Models
# =============================================================================

class MatchConfigRequest(BaseModel):
    """Request to start a new match."""
    board_size: BoardSize = Field(BoardSize.MEDIUM, description="small, medium, large")
    opponent: Opponent = Field(
        Opponent.CPU_NORMAL, description="human, cpu_easy, cpu_normal, cpu_hard"
    )
    time_control: Optional[TimeControl] = Field(
        TimeControl.BLITZ, description="classic, blitz, bullet, or null for untimed"
    )
    random_seed: Optional[int] = Field(None, description="Seed for reproducible games")

    def to_config(self) -> MatchConfig:
        return MatchConfig(
            board_size=self.board_size,
            opponent=self.opponent,
            time_control=self.time_control,
        )


class IntentRequest(BaseModel):
    """A human intent."""
    kind: IntentKind
    delta: int = Field(0, ge=-1, le=1, description="-1 or +1; ignored for confirm_move")


class SuggestRequest(BaseModel):
    """Ask the CPU what it would play on a position."""
    piles: list[Annotated[int, Field(ge=0, le=MAX_PILE_SIZE)]] = Field(
        ..., min_length=1, max_length=MAX_PILES,
        description=f"Up to {MAX_PILES} piles of 0 to {MAX_PILE_SIZE} stones",
    )
    difficulty: Difficulty = Difficulty.HARD
    random_seed: Optional[int] = None


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")


class StepResponse(BaseModel):
    """Result of an intent or a tick."""
    accepted: bool
    snapshot: MatchSnapshot
    events: list[EventInfo] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class SuggestResponse(BaseModel):
    """The CPU's choice on a position."""
    pile_index: int
    amount: int
    nim_sum: int
    explanation: str = ""
    evaluated_moves: int = 0
