"""
Nim Masters - Nim rules engine with a tiered CPU opponent.

A turn-based engine for the combinatorial game Nim. It provides:
- Match state and the rules of normal-play Nim
- Chess-clock time controls with Fischer increments
- A CPU opponent with easy, normal and hard difficulty
- A frame-driven game loop and menu flow for front-ends
"""

__version__ = "0.1.0"
