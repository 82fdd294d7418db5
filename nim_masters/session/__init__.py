"""
Session Module - Drives matches for a front-end.

A session represents one sitting:
- The menu picks board size, opponent and time control
- A GameLoop runs each match frame by frame
- Matches are discarded when a new one starts or the menu is re-entered

Sessions are EPHEMERAL: no state survives across matches.
"""

from .manager import Session
from .game_loop import GameLoop, LoopState, StepResult
from .menu import Menu, MenuInput, MenuScreen

__all__ = [
    "Session",
    "GameLoop",
    "LoopState",
    "StepResult",
    "Menu",
    "MenuInput",
    "MenuScreen",
]
