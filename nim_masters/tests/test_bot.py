"""
Tests for the CPU decision engine.

Tests:
- Exact Nim-sum play
- Random playouts
- Monte-Carlo policy
- Difficulty profiles
"""

import itertools
import random

import pytest

from ..bots.difficulty import EASY, HARD, NORMAL, PROFILES, choose_move, create_policy, decide
from ..bots.evaluator import PlayoutEvaluator, random_playout
from ..bots.policy import MonteCarloPolicy, NimSumPolicy
from ..engine_core.action import Move
from ..engine_core.action_generator import is_legal
from ..engine_core.state import Difficulty, nim_sum
from ..errors import EmptyBoardError


class TestNimSumPolicy:
    """Tests for exact play."""

    def test_single_pile_takes_all(self):
        assert choose_move([3], Difficulty.HARD) == Move(pile_index=0, amount=3)

    def test_one_two_three(self):
        """Nim-sum of [1, 2, 3] is 0; fall back to one stone from pile 0."""
        assert choose_move([1, 2, 3], Difficulty.HARD) == Move(pile_index=0, amount=1)

    def test_fallback_uses_first_nonempty_pile(self):
        assert choose_move([0, 0, 4, 4], Difficulty.HARD) == Move(pile_index=2, amount=1)

    def test_winning_moves_reach_zero_nim_sum(self):
        """Every position with nonzero Nim-sum is answered with a zero Nim-sum position."""
        policy = NimSumPolicy()
        for piles in itertools.product(range(8), repeat=3):
            if nim_sum(piles) == 0:
                continue
            move = policy.select_move(piles).move
            assert is_legal(piles, move.pile_index, move.amount)
            after = list(piles)
            after[move.pile_index] -= move.amount
            assert nim_sum(after) == 0

    def test_first_qualifying_pile_is_used(self):
        """[3, 5, 7] has Nim-sum 1; every pile qualifies and pile 0 is used."""
        assert choose_move([3, 5, 7], Difficulty.HARD) == Move(pile_index=0, amount=1)

    def test_decision_details(self):
        decision = decide([4, 1], Difficulty.HARD)
        assert decision.move == Move(pile_index=0, amount=3)
        assert decision.evaluation_details["nim_sum"] == 5
        assert "Nim-sum 5" in decision.explanation


class TestRandomPlayout:
    """Tests for the playout primitive."""

    def test_empty_board_credits_previous_mover(self, rng):
        assert random_playout([0, 0], mover_to_move=False, rng=rng) is True
        assert random_playout([0, 0], mover_to_move=True, rng=rng) is False

    def test_single_stone(self, rng):
        assert random_playout([1], mover_to_move=True, rng=rng) is True
        assert random_playout([1], mover_to_move=False, rng=rng) is False

    def test_forced_line(self, rng):
        """[1, 1]: the side moving first never takes the last stone."""
        assert random_playout([1, 1], mover_to_move=True, rng=rng) is False
        assert random_playout([1, 1], mover_to_move=False, rng=rng) is True

    def test_does_not_modify_input(self, rng):
        piles = [3, 4, 5]
        random_playout(piles, mover_to_move=True, rng=rng)
        assert piles == [3, 4, 5]

    def test_count_wins(self, rng):
        evaluator = PlayoutEvaluator(rng=rng)
        assert evaluator.count_wins([1, 1], 10) == 10
        assert evaluator.count_wins([0, 1], 10) == 0
        assert 0 <= evaluator.count_wins([3, 4, 5], 25) <= 25


class TestMonteCarloPolicy:
    """Tests for the sampled tiers."""

    def test_immediate_win_is_taken(self, rng):
        policy = MonteCarloPolicy(traces=8, rng=rng)
        assert policy.select_move([0, 0, 5]).move == Move(pile_index=2, amount=5)

    def test_immediate_win_stops_search(self, rng):
        decision = MonteCarloPolicy(traces=8, rng=rng).select_move([4])
        assert decision.move == Move(pile_index=0, amount=4)
        assert decision.evaluated_moves == 4
        assert decision.explanation == "Takes the last stone"

    def test_ties_keep_first_move(self, rng):
        """[1, 1]: both moves always lose, so the first enumerated one is kept."""
        decision = MonteCarloPolicy(traces=60, rng=rng).select_move([1, 1])
        assert decision.move == Move(pile_index=0, amount=1)
        assert decision.best_score == 0.0

    def test_finds_sure_win(self):
        """[1, 2]: taking one from pile 1 wins every playout."""
        policy = MonteCarloPolicy(traces=60, rng=random.Random(7))
        decision = policy.select_move([1, 2])
        assert decision.move == Move(pile_index=1, amount=1)
        assert decision.evaluation_details["wins"]["1:1"] == 60
        assert decision.evaluation_details["wins"]["1:2"] == 0

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_moves_are_always_legal(self, difficulty):
        rng = random.Random(2024)
        for _ in range(40):
            piles = [rng.randint(0, 6) for _ in range(rng.randint(1, 5))]
            if not any(piles):
                piles[0] = 1
            move = choose_move(piles, difficulty, rng)
            assert is_legal(piles, move.pile_index, move.amount)

    def test_same_seed_same_move(self):
        piles = [2, 5, 3, 7]
        a = choose_move(piles, Difficulty.EASY, random.Random(11))
        b = choose_move(piles, Difficulty.EASY, random.Random(11))
        assert a == b

    def test_rejects_zero_traces(self):
        with pytest.raises(ValueError):
            MonteCarloPolicy(traces=0)

    def test_name_includes_traces(self):
        assert MonteCarloPolicy(traces=8).get_name() == "MonteCarloPolicy(8)"


class TestEmptyBoard:
    """The decision engine refuses an empty board."""

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_empty_board_raises(self, difficulty, rng):
        with pytest.raises(EmptyBoardError) as exc_info:
            choose_move([0, 0, 0], difficulty, rng)
        assert exc_info.value.code == "EMPTY_BOARD"
        assert exc_info.value.context == {"piles": [0, 0, 0]}


class TestProfiles:
    """Tests for the difficulty registry."""

    def test_trace_budgets(self):
        assert EASY.traces == 8
        assert NORMAL.traces == 60
        assert HARD.traces is None

    def test_every_difficulty_has_a_profile(self):
        assert set(PROFILES) == set(Difficulty)

    def test_policy_types(self, rng):
        assert isinstance(create_policy(Difficulty.HARD, rng), NimSumPolicy)
        easy = create_policy(Difficulty.EASY, rng)
        assert isinstance(easy, MonteCarloPolicy)
        assert easy.traces == 8
        assert create_policy(Difficulty.NORMAL, rng).traces == 60
