"""
Reducer - Applies moves, turn advances and clock ticks to match state.

The reducer is the single point of state change.
All rule transitions go through the functions below.

Design principles:
- Pure functions: (state, input) -> result carrying the new state
- Validates before applying; an illegal move is a failed result, not an error
- A decided match is terminal: changing it raises MatchOverError
"""

from __future__ import annotations
import logging
from dataclasses import dataclass

from ..errors import MatchOverError
from .action import Intent, IntentType, Move, MoveResult, TurnResult
from .action_generator import is_legal
from .events import MatchDecided, take_events
from .state import CPU_SEAT, EndReason, GameMode, MatchState, Outcome, first_nonempty

logger = logging.getLogger(__name__)


def legal_move(state: MatchState, pile_index: int, amount: int) -> bool:
    """True iff the pile exists, has stones, and 1 <= amount <= its size."""
    return is_legal(state.piles, pile_index, amount)


def apply_move(state: MatchState, pile_index: int, amount: int) -> MoveResult:
    """
    Take stones for the active player.

    The move is re-validated here, whatever built it. On success the
    mover's clock (if it has one running) gains the time-control
    increment. Turn ownership does not change; call advance_turn next.
    """
    _require_undecided(state, "apply a move")

    if not legal_move(state, pile_index, amount):
        logger.debug(f"Rejected move: pile={pile_index} amount={amount} piles={list(state.piles)}")
        return MoveResult.failure(
            f"Cannot take {amount} from pile {pile_index}",
            error_code="ILLEGAL_MOVE",
        )

    mover = state.active_player
    move = Move(pile_index=pile_index, amount=amount)
    new_state = state.with_pile(pile_index, state.piles[pile_index] - amount)

    rule = state.clock_rule
    if rule is not None and state.clock_running and state.has_clock(mover):
        new_state = new_state.with_clock(mover, new_state.clocks[mover] + rule.increment_ms)

    new_state = new_state._copy_with(
        move_history=state.move_history + (move,),
        selected_pile=pile_index,
        selected_amount=amount,
    )
    return MoveResult.success_with_state(
        new_state,
        move=move,
        events=take_events(pile_index, amount, mover),
    )


def advance_turn(state: MatchState) -> TurnResult:
    """
    Finish the current turn.

    An empty board decides the match for the player who just moved.
    Otherwise the other seat becomes active and the cursor resets to the
    first pile with stones, amount 1.
    """
    _require_undecided(state, "advance the turn")

    if not state.is_live:
        mover = state.active_player
        new_state = state._copy_with(
            outcome=Outcome(winner=mover, reason=EndReason.NORMAL),
            clock_running=False,
        )
        logger.info(f"Player {mover} took the last stone and wins")
        return TurnResult(
            new_state=new_state,
            terminal=True,
            events=[MatchDecided(winner=mover, reason=EndReason.NORMAL)],
        )

    new_state = state._copy_with(
        active_player=1 - state.active_player,
        turn_number=state.turn_number + 1,
        selected_pile=first_nonempty(state.piles),
        selected_amount=1,
    )
    return TurnResult(new_state=new_state, cpu_to_move=new_state.is_cpu_turn())


def tick_clock(state: MatchState, elapsed_ms: int) -> TurnResult:
    """
    Run the active player's clock down by elapsed_ms.

    Negative elapsed time is treated as zero. A clock that reaches zero
    is clamped there and decides the match on time: the opponent wins in
    two-player mode, the CPU wins in vs-CPU mode (only the human clock
    can run out).
    """
    if state.is_decided or not state.clock_running:
        return TurnResult(new_state=state)

    player = state.active_player
    if not state.has_clock(player):
        return TurnResult(new_state=state)

    remaining = state.clocks[player] - max(0, elapsed_ms)
    if remaining > 0:
        return TurnResult(new_state=state.with_clock(player, remaining))

    winner = 1 - player if state.mode == GameMode.TWO_PLAYER else CPU_SEAT
    new_state = state.with_clock(player, 0)._copy_with(
        outcome=Outcome(winner=winner, reason=EndReason.TIMEOUT),
        clock_running=False,
    )
    logger.info(f"Player {player} ran out of time; player {winner} wins")
    return TurnResult(
        new_state=new_state,
        terminal=True,
        events=[MatchDecided(winner=winner, reason=EndReason.TIMEOUT)],
    )


def select_pile(state: MatchState, direction: int) -> MatchState:
    """
    Move the cursor to the next pile with stones in `direction`.

    Wraps around the ends and skips empty piles. The selected amount is
    clamped to the new pile. A direction of 0 leaves the cursor alone.
    """
    if direction == 0:
        return state
    n = state.pile_count
    step = 1 if direction > 0 else -1
    for i in range(1, n + 1):
        j = (state.selected_pile + step * i) % n
        if state.piles[j] > 0:
            return state._copy_with(
                selected_pile=j,
                selected_amount=max(1, min(state.selected_amount, state.piles[j])),
            )
    return state


def adjust_amount(state: MatchState, delta: int) -> MatchState:
    """Change the selected amount, clamped to [1, selected pile size]."""
    size = state.piles[state.selected_pile]
    amount = max(1, min(size, state.selected_amount + delta))
    return state._copy_with(selected_amount=amount)


def confirm_move(state: MatchState) -> MoveResult:
    """Apply the move under the cursor."""
    return apply_move(state, state.selected_pile, state.selected_amount)


def _require_undecided(state: MatchState, what: str) -> None:
    if state.is_decided:
        raise MatchOverError(
            f"Cannot {what}: the match is over",
            context={"winner": state.outcome.winner, "reason": state.outcome.reason.value},
        )


@dataclass
class Reducer:
    """
    Applies player intents to match state.

    Stateless - all state is in MatchState.
    """

    def apply(self, state: MatchState, intent: Intent) -> MoveResult:
        """
        Apply an intent to the match.

        Returns MoveResult with the new state or the rejection reason.
        """
        validation_error = self._validate_intent(state, intent)
        if validation_error:
            return MoveResult.failure(validation_error, error_code="INVALID_INTENT")

        handler = self._get_handler(intent.intent_type)
        if not handler:
            return MoveResult.failure(
                f"No handler for intent type: {intent.intent_type}",
                error_code="NO_HANDLER",
            )
        return handler(state, intent)

    def _validate_intent(self, state: MatchState, intent: Intent) -> str | None:
        """
        Validate that an intent may be applied now.

        Returns error message if invalid, None if valid.
        """
        if state.is_decided:
            return "Match is over - no intents allowed"
        if not state.is_human_turn():
            return "Not a human turn"
        if intent.intent_type != IntentType.CONFIRM_MOVE and intent.delta not in (-1, 1):
            return f"Intent delta must be -1 or +1, got {intent.delta}"
        return None

    def _get_handler(self, intent_type: IntentType):
        handlers = {
            IntentType.SELECT_PILE: self._handle_select_pile,
            IntentType.ADJUST_AMOUNT: self._handle_adjust_amount,
            IntentType.CONFIRM_MOVE: self._handle_confirm,
        }
        return handlers.get(intent_type)

    def _handle_select_pile(self, state: MatchState, intent: Intent) -> MoveResult:
        return MoveResult.success_with_state(select_pile(state, intent.delta))

    def _handle_adjust_amount(self, state: MatchState, intent: Intent) -> MoveResult:
        return MoveResult.success_with_state(adjust_amount(state, intent.delta))

    def _handle_confirm(self, state: MatchState, intent: Intent) -> MoveResult:
        return confirm_move(state)


def apply_intent(state: MatchState, intent: Intent) -> MoveResult:
    """
    Convenience function to apply an intent.

    Creates a Reducer and applies the intent.
    """
    return Reducer().apply(state, intent)
