"""
Session - One sitting at the game: the menu plus the current match.

LIFECYCLE:
1. Menu collects board size, opponent and time control
2. Confirming the time control starts a match (new GameLoop)
3. The match runs until decided; the menu shows game over
4. Confirming on game over returns to the title and drops the match

Nothing survives across matches. There is no persistence.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field

from ..config import Settings
from ..engine_core.action import Intent
from ..engine_core.events import EventSink
from ..engine_core.setup import new_match_from_config
from ..engine_core.state import MatchConfig
from .game_loop import GameLoop, LoopState, StepResult
from .menu import Menu, MenuInput, MenuScreen

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """
    Owns the menu and, while a match is on, its GameLoop.

    rng feeds both the pile draw and the CPU playouts; seed it for a
    reproducible session.
    """
    settings: Settings = field(default_factory=Settings)
    sink: EventSink | None = None
    rng: random.Random = field(default_factory=random.Random)

    menu: Menu = field(default_factory=Menu)
    loop: GameLoop | None = None

    def handle_menu(self, key: MenuInput) -> GameLoop | None:
        """Apply a menu input; returns the new loop if a match started."""
        was_over = self.menu.screen == MenuScreen.GAME_OVER
        config = self.menu.handle(key)

        if was_over and self.menu.screen == MenuScreen.TITLE:
            self.loop = None
        if config is not None:
            return self.start_match(config)
        return None

    def start_match(self, config: MatchConfig) -> GameLoop:
        """Start a new match, replacing any previous one."""
        match = new_match_from_config(config, rng=self.rng)
        self.loop = GameLoop(match, sink=self.sink, settings=self.settings, rng=self.rng)
        self.menu.screen = MenuScreen.PLAYING
        return self.loop

    def handle_intent(self, intent: Intent) -> StepResult | None:
        if self.loop is None:
            return None
        return self.loop.handle_intent(intent)

    def update(self, elapsed_ms: int) -> StepResult | None:
        """Advance the running match by one frame."""
        if self.loop is None or self.menu.screen != MenuScreen.PLAYING:
            return None
        step = self.loop.update(elapsed_ms)
        if step.loop_state == LoopState.GAME_OVER:
            self.menu.screen = MenuScreen.GAME_OVER
        return step

    def return_to_menu(self) -> None:
        """Abandon the match and go back to the title screen."""
        if self.loop is not None:
            logger.info("Match abandoned")
        self.loop = None
        self.menu.screen = MenuScreen.TITLE
