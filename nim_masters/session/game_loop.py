"""
Game Loop - The frame-driven driver around one match.

The loop:
1. Human sends intents (cursor, amount, confirm) on their turn
2. A confirmed move freezes input while it animates
3. When the animation ends, the turn advances
4. On a CPU turn, the move is computed at once and applied after a delay
5. Clocks tick whenever no move is animating
6. Repeat until the match is decided

The loop owns the current MatchState; the engine functions never keep it.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from enum import Enum

from ..bots import BotPolicy, create_policy
from ..config import Settings
from ..engine_core.action import Intent, IntentType, Move
from ..engine_core.events import EventSink, dispatch
from ..engine_core.reducer import Reducer, advance_turn, apply_move, tick_clock
from ..engine_core.state import GameMode, MatchState
from ..errors import InvariantViolation

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    WAITING_HUMAN = "waiting_human"
    ANIMATING = "animating"
    CPU_THINKING = "cpu_thinking"
    GAME_OVER = "game_over"


@dataclass
class StepResult:
    """
    Result of an intent or a frame update.

    Rejected intents come back with success=False and leave the match
    untouched.
    """
    success: bool
    loop_state: LoopState

    events: list = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    # Game over info
    winner: int | None = None


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(new_match(...), sink=audio_sink)

        # On key press
        loop.handle_intent(Intent.select_pile(+1))
        loop.handle_intent(Intent.confirm())

        # Every frame
        loop.update(elapsed_ms)
        render(loop.match)
    """

    def __init__(
        self,
        match: MatchState,
        policy: BotPolicy | None = None,
        sink: EventSink | None = None,
        settings: Settings | None = None,
        rng: random.Random | None = None,
    ):
        self.match = match
        self.sink = sink
        self.settings = settings or Settings()
        self.reducer = Reducer()

        if policy is None and match.mode == GameMode.VS_CPU:
            policy = create_policy(match.difficulty, rng)
        self.policy = policy

        self._animating = False
        self._animation_elapsed_ms = 0
        self.pending_cpu_move: Move | None = None
        self._cpu_wait_ms = 0

    @property
    def state(self) -> LoopState:
        if self.match.is_decided:
            return LoopState.GAME_OVER
        if self._animating:
            return LoopState.ANIMATING
        if self.pending_cpu_move is not None or self.match.is_cpu_turn():
            return LoopState.CPU_THINKING
        return LoopState.WAITING_HUMAN

    def accepts_input(self) -> bool:
        """Intents are only taken on a human turn with nothing in flight."""
        return self.state == LoopState.WAITING_HUMAN

    def handle_intent(self, intent: Intent) -> StepResult:
        """
        Apply a human intent.

        Rejections (wrong time, illegal move) are silent: the match is
        unchanged and the front-end may play an error tone.
        """
        if not self.accepts_input():
            return self._rejected(f"Input ignored while {self.state.value}")

        result = self.reducer.apply(self.match, intent)
        if not result.success:
            logger.debug(f"Intent {intent.intent_type.value} rejected: {result.error}")
            return self._rejected(result.error)

        self.match = result.new_state
        if intent.intent_type == IntentType.CONFIRM_MOVE:
            self._start_animation()
            self._emit(result.events)
        return self._step(result.events)

    def update(self, elapsed_ms: int) -> StepResult:
        """
        Advance the loop by one frame.

        elapsed_ms comes from a monotonic source; negative values count
        as zero.
        """
        elapsed_ms = max(0, int(elapsed_ms))
        events: list = []

        if self.match.is_decided:
            return self._step(events)

        if self._animating:
            self._animation_elapsed_ms += elapsed_ms
            if self._animation_elapsed_ms >= self.settings.move_animation_ms:
                self._animating = False
                events.extend(self._finish_move())
        elif self.pending_cpu_move is not None:
            self._cpu_wait_ms -= elapsed_ms
            if self._cpu_wait_ms <= 0:
                events.extend(self._play_cpu_move())
        elif self.match.is_cpu_turn():
            self._schedule_cpu_move()

        if not self._animating and not self.match.is_decided:
            tick = tick_clock(self.match, elapsed_ms)
            self.match = tick.new_state
            self._emit(tick.events)
            events.extend(tick.events)

        return self._step(events)

    def _start_animation(self) -> None:
        self._animating = True
        self._animation_elapsed_ms = 0

    def _finish_move(self) -> list:
        """Advance the turn once the move animation is over."""
        result = advance_turn(self.match)
        self.match = result.new_state
        self._emit(result.events)

        if result.cpu_to_move:
            self._schedule_cpu_move()
        return result.events

    def _schedule_cpu_move(self) -> None:
        """Compute the CPU move now; it is applied after cpu_delay_ms."""
        if self.policy is None:
            raise InvariantViolation("CPU to move but no policy configured")
        decision = self.policy.select_move(self.match.piles)
        self.pending_cpu_move = decision.move
        self._cpu_wait_ms = self.settings.cpu_delay_ms

    def _play_cpu_move(self) -> list:
        move = self.pending_cpu_move
        self.pending_cpu_move = None

        result = apply_move(self.match, move.pile_index, move.amount)
        if not result.success:
            raise InvariantViolation(
                f"CPU produced an illegal move: {move}",
                context={"piles": list(self.match.piles)},
            )
        self.match = result.new_state
        self._start_animation()
        self._emit(result.events)
        return result.events

    def _emit(self, events: list) -> None:
        dispatch(self.sink, events)

    def _step(self, events: list) -> StepResult:
        outcome = self.match.outcome
        return StepResult(
            success=True,
            loop_state=self.state,
            events=events,
            winner=outcome.winner if outcome else None,
        )

    def _rejected(self, error: str) -> StepResult:
        return StepResult(success=False, loop_state=self.state, errors=[error])
