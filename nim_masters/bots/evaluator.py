"""
Playout Evaluator - Scores a position by random playouts.

The evaluator estimates how good a position is for the side that just
moved into it:
1. Copy the piles
2. Let both sides take uniformly random legal moves until the board is empty
3. Count the playouts in which the evaluating side took the last stone

There is no heuristic player inside a playout: every pick is a pure
random walk over nonempty piles and amounts.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field


def random_playout(piles, mover_to_move: bool, rng: random.Random) -> bool:
    """
    Play one random game to the end.

    Args:
        piles: Starting position (not modified)
        mover_to_move: True if the evaluating side moves first from here
        rng: Random source

    Returns:
        True iff the evaluating side makes the final depleting move
    """
    sim = list(piles)
    mine = mover_to_move
    while True:
        nonempty = [i for i, count in enumerate(sim) if count > 0]
        if not nonempty:
            # Whoever moved last is the side not on move now
            return not mine
        pile = rng.choice(nonempty)
        sim[pile] -= rng.randint(1, sim[pile])
        mine = not mine


@dataclass
class PlayoutEvaluator:
    """
    Counts random-playout wins from a position.

    Used by the Monte-Carlo policy for 1-ply evaluation:
    1. Enumerate legal moves
    2. Apply each to a scratch copy
    3. Count wins over `traces` playouts with the opponent to move
    4. Select the move with the most wins
    """
    rng: random.Random = field(default_factory=random.Random)

    def count_wins(self, piles, traces: int) -> int:
        """Wins for the side that just moved, over `traces` playouts."""
        return sum(
            1 for _ in range(traces)
            if random_playout(piles, mover_to_move=False, rng=self.rng)
        )
