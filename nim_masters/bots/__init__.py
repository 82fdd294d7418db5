"""
Bots module - CPU opponent.

Provides:
- BotPolicy: Interface for CPU decision-making
- NimSumPolicy: Exact play (hard)
- MonteCarloPolicy: Random-playout play (easy, normal)
- PlayoutEvaluator: Counts random-playout wins
- DifficultyProfile: Tier registry and choose_move
"""

from .policy import BotPolicy, BotDecision, NimSumPolicy, MonteCarloPolicy
from .evaluator import PlayoutEvaluator, random_playout
from .difficulty import DifficultyProfile, PROFILES, create_policy, decide, choose_move

__all__ = [
    "BotPolicy",
    "BotDecision",
    "NimSumPolicy",
    "MonteCarloPolicy",
    "PlayoutEvaluator",
    "random_playout",
    "DifficultyProfile",
    "PROFILES",
    "create_policy",
    "decide",
    "choose_move",
]
