"""
Game Service - Business logic layer between a front-end and the engine.

The service:
1. Translates requests into session and engine calls
2. Owns the session (menu state, current match)
3. Formats snapshots and events for the presentation layer

This layer is framework-agnostic: a terminal, a game window or a test can
drive it the same way.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field

from ..bots import decide
from ..config import Settings
from ..engine_core.action import Intent
from ..engine_core.events import EventSink
from ..engine_core.state import nim_sum
from ..errors import EmptyBoardError
from ..session import Session, StepResult
from .schemas import (
    ErrorCode,
    ErrorResponse,
    EventInfo,
    IntentKind,
    IntentRequest,
    MatchConfigRequest,
    MatchSnapshot,
    StepResponse,
    SuggestRequest,
    SuggestResponse,
)


@dataclass
class GameService:
    """
    Main service for front-ends.

    Usage:
        service = GameService()
        snapshot = service.start_match(MatchConfigRequest(opponent="cpu_hard"))

        # Every frame
        service.tick(elapsed_ms)

        # On input
        service.send_intent(IntentRequest(kind="confirm_move"))
    """
    settings: Settings = field(default_factory=Settings)
    sink: EventSink | None = None
    session: Session | None = None

    def __post_init__(self):
        if self.session is None:
            self.session = Session(settings=self.settings, sink=self.sink)

    def start_match(self, request: MatchConfigRequest) -> MatchSnapshot:
        """Start a new match, replacing any running one."""
        if request.random_seed is not None:
            self.session.rng.seed(request.random_seed)
        loop = self.session.start_match(request.to_config())
        return MatchSnapshot.from_state(loop.match, loop.state)

    def snapshot(self) -> MatchSnapshot | ErrorResponse:
        loop = self.session.loop
        if loop is None:
            return self._no_match()
        return MatchSnapshot.from_state(loop.match, loop.state)

    def send_intent(self, request: IntentRequest) -> StepResponse | ErrorResponse:
        """Forward a human intent to the running match."""
        if self.session.loop is None:
            return self._no_match()

        intent = {
            IntentKind.SELECT_PILE: lambda: Intent.select_pile(request.delta),
            IntentKind.ADJUST_AMOUNT: lambda: Intent.adjust_amount(request.delta),
            IntentKind.CONFIRM_MOVE: Intent.confirm,
        }[request.kind]()
        return self._step_response(self.session.handle_intent(intent))

    def tick(self, elapsed_ms: int) -> StepResponse | ErrorResponse:
        """Advance the running match by one frame."""
        if self.session.loop is None:
            return self._no_match()
        step = self.session.update(elapsed_ms)
        if step is None:
            # Match already over; the menu is showing game over
            step = StepResult(success=True, loop_state=self.session.loop.state)
        return self._step_response(step)

    def suggest(self, request: SuggestRequest) -> SuggestResponse | ErrorResponse:
        """What the CPU would play on a position."""
        rng = random.Random(request.random_seed)
        try:
            decision = decide(request.piles, request.difficulty, rng)
        except EmptyBoardError as e:
            return ErrorResponse(error=e.message, error_code=ErrorCode.EMPTY_BOARD)

        return SuggestResponse(
            pile_index=decision.move.pile_index,
            amount=decision.move.amount,
            nim_sum=nim_sum(request.piles),
            explanation=decision.explanation,
            evaluated_moves=decision.evaluated_moves,
        )

    def return_to_menu(self) -> None:
        self.session.return_to_menu()

    def _step_response(self, step: StepResult) -> StepResponse:
        loop = self.session.loop
        return StepResponse(
            accepted=step.success,
            snapshot=MatchSnapshot.from_state(loop.match, loop.state),
            events=[EventInfo.from_event(e) for e in step.events],
            errors=step.errors,
        )

    def _no_match(self) -> ErrorResponse:
        return ErrorResponse(error="No match is running", error_code=ErrorCode.NO_MATCH)
