"""
Bot Policy - Interface for CPU decision-making.

A BotPolicy takes an immutable pile snapshot and returns a decision.
It never sees the match: no clocks, no turn state, no hidden memory.
Each call is independent, randomized only through the policy's rng.
"""

from __future__ import annotations
import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ..engine_core.action import Move
from ..engine_core.action_generator import count_legal_moves, legal_moves
from ..engine_core.state import first_nonempty, nim_sum
from ..errors import EmptyBoardError
from .evaluator import PlayoutEvaluator

logger = logging.getLogger(__name__)


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The move to make
    - Explanation (for UI/debugging)
    - Evaluation details (for debugging)
    """
    move: Move
    explanation: str = ""

    evaluated_moves: int = 0
    best_score: float = 0.0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


class BotPolicy(ABC):
    """
    Abstract base class for CPU policies.

    One implementation per difficulty tier, all behind select_move.
    """

    def select_move(self, piles) -> BotDecision:
        """
        Select a move on the given piles.

        Raises EmptyBoardError if no pile has stones; the driver must
        only ask for a move while the match is live.
        """
        piles = tuple(piles)
        if first_nonempty(piles) is None:
            raise EmptyBoardError(
                "No legal move on an empty board",
                context={"piles": list(piles)},
            )
        decision = self._select(piles)
        logger.debug(f"{self.get_name()} chose {decision.move}: {decision.explanation}")
        return decision

    @abstractmethod
    def _select(self, piles: tuple[int, ...]) -> BotDecision:
        """Pick a move on a board known to have stones."""
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class NimSumPolicy(BotPolicy):
    """
    Exact play by Nim-sum.

    From a position with nonzero Nim-sum, moves to a zero Nim-sum
    position. From a zero Nim-sum position every move loses against
    perfect play, so it takes a single stone from the first nonempty pile.
    """

    def _select(self, piles: tuple[int, ...]) -> BotDecision:
        x = nim_sum(piles)
        if x != 0:
            for i, size in enumerate(piles):
                target = size ^ x
                if target < size:
                    return BotDecision(
                        move=Move(pile_index=i, amount=size - target),
                        explanation=f"Nim-sum {x}: reduce pile {i + 1} to {target}",
                        evaluated_moves=i + 1,
                        best_score=1.0,
                        evaluation_details={"nim_sum": x},
                    )

        i = first_nonempty(piles)
        return BotDecision(
            move=Move(pile_index=i, amount=1),
            explanation="Nim-sum 0: no winning move, taking one stone",
            evaluated_moves=count_legal_moves(piles),
            best_score=0.0,
            evaluation_details={"nim_sum": x},
        )


class MonteCarloPolicy(BotPolicy):
    """
    Flat Monte-Carlo: random playouts after each candidate move.

    Candidates are visited in legal_moves order. A move that empties the
    board wins on the spot and is returned without sampling. Otherwise the
    candidate with the most playout wins is kept; ties keep the first.
    """

    def __init__(self, traces: int, rng: random.Random | None = None):
        if traces < 1:
            raise ValueError("traces must be >= 1")
        self.traces = traces
        self.rng = rng or random.Random()
        self.evaluator = PlayoutEvaluator(rng=self.rng)

    def _select(self, piles: tuple[int, ...]) -> BotDecision:
        moves = legal_moves(piles)
        best, best_score = moves[0], -1
        scores: dict[str, int] = {}

        for move in moves:
            after = list(piles)
            after[move.pile_index] -= move.amount
            if not any(after):
                return BotDecision(
                    move=move,
                    explanation="Takes the last stone",
                    evaluated_moves=len(scores) + 1,
                    best_score=float(self.traces),
                    evaluation_details={"traces": self.traces, "wins": scores},
                )

            wins = self.evaluator.count_wins(after, self.traces)
            scores[f"{move.pile_index}:{move.amount}"] = wins
            if wins > best_score:
                best, best_score = move, wins

        return BotDecision(
            move=best,
            explanation=f"Won {best_score}/{self.traces} random playouts",
            evaluated_moves=len(moves),
            best_score=float(best_score),
            evaluation_details={"traces": self.traces, "wins": scores},
        )

    def get_name(self) -> str:
        return f"MonteCarloPolicy({self.traces})"
