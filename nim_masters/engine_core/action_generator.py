"""
Action Generator - Enumerates legal moves on a pile set.

Used by:
1. The CPU to enumerate candidate moves
2. The reducer to validate a move before applying it
3. Tests (is this move in legal_moves?)

Works on bare pile tuples so the decision engine never needs the
mutable match around it.
"""

from __future__ import annotations

from .action import Move


def is_legal(piles, pile_index, amount) -> bool:
    """
    Whether taking `amount` from pile `pile_index` is legal.

    Pure predicate: bool and non-int arguments are rejected rather than
    coerced.
    """
    if not _is_int(pile_index) or not _is_int(amount):
        return False
    if not 0 <= pile_index < len(piles):
        return False
    size = piles[pile_index]
    return size > 0 and 1 <= amount <= size


def legal_moves(piles) -> list[Move]:
    """
    Every legal move, ordered by pile index then amount.

    The order is part of the contract: Monte-Carlo ties keep the first
    candidate seen.
    """
    return [
        Move(pile_index=i, amount=amount)
        for i, size in enumerate(piles)
        for amount in range(1, size + 1)
    ]


def count_legal_moves(piles) -> int:
    return sum(p for p in piles if p > 0)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
