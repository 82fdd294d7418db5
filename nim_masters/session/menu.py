"""
Menu - The pre-match flow.

    title -> board size -> opponent -> time control -> playing -> game over

Up/down move through the current list (clamped, no wrap), confirm moves
forward, back moves to the previous screen. Confirming the time control
yields the MatchConfig for a new match.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from ..engine_core.state import (
    BOARD_LAYOUTS,
    CLOCK_RULES,
    BoardSize,
    MatchConfig,
    Opponent,
    TimeControl,
)


class MenuScreen(Enum):
    TITLE = "title"
    BOARD_SIZE = "board_size"
    OPPONENT = "opponent"
    TIME_CONTROL = "time_control"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class MenuInput(Enum):
    UP = "up"
    DOWN = "down"
    CONFIRM = "confirm"
    BACK = "back"


BOARD_OPTIONS: list[BoardSize] = [BoardSize.SMALL, BoardSize.MEDIUM, BoardSize.LARGE]
OPPONENT_OPTIONS: list[Opponent] = [
    Opponent.HUMAN,
    Opponent.CPU_EASY,
    Opponent.CPU_NORMAL,
    Opponent.CPU_HARD,
]
TIME_OPTIONS: list[TimeControl] = [TimeControl.CLASSIC, TimeControl.BLITZ, TimeControl.BULLET]

OPPONENT_LABELS = {
    Opponent.HUMAN: "2P local game",
    Opponent.CPU_EASY: "8 MC traces",
    Opponent.CPU_NORMAL: "60 MC traces",
    Opponent.CPU_HARD: "XOR optimal",
}


def format_duration(ms: int) -> str:
    """'5 min', '1 min 30 sec', '15 sec'."""
    total_seconds = max(0, ms // 1000)
    minutes, seconds = divmod(total_seconds, 60)
    if minutes and seconds:
        return f"{minutes} min {seconds} sec"
    if minutes:
        return f"{minutes} min"
    return f"{seconds} sec"


def describe_board(size: BoardSize) -> str:
    layout = BOARD_LAYOUTS[size]
    return f"{layout.pile_count} piles, {layout.min_stones} to {layout.max_stones} stones"


def describe_time_control(tc: TimeControl) -> str:
    rule = CLOCK_RULES[tc]
    return f"{format_duration(rule.base_ms)} + {format_duration(rule.increment_ms)} inc"


@dataclass
class Menu:
    """
    Menu cursor and the choices made so far.

    Defaults match the usual quick game: medium board, normal CPU, blitz.
    """
    screen: MenuScreen = MenuScreen.TITLE
    board_index: int = 1
    opponent_index: int = 2
    time_index: int = 1

    @property
    def config(self) -> MatchConfig:
        return MatchConfig(
            board_size=BOARD_OPTIONS[self.board_index],
            opponent=OPPONENT_OPTIONS[self.opponent_index],
            time_control=TIME_OPTIONS[self.time_index],
        )

    def handle(self, key: MenuInput) -> MatchConfig | None:
        """
        Apply one menu input.

        Returns the MatchConfig when this input starts a match.
        """
        if self.screen == MenuScreen.TITLE:
            self.screen = MenuScreen.BOARD_SIZE
        elif self.screen == MenuScreen.BOARD_SIZE:
            self.board_index = self._move(self.board_index, key, len(BOARD_OPTIONS))
            self._step(key, back=MenuScreen.TITLE, forward=MenuScreen.OPPONENT)
        elif self.screen == MenuScreen.OPPONENT:
            self.opponent_index = self._move(self.opponent_index, key, len(OPPONENT_OPTIONS))
            self._step(key, back=MenuScreen.BOARD_SIZE, forward=MenuScreen.TIME_CONTROL)
        elif self.screen == MenuScreen.TIME_CONTROL:
            self.time_index = self._move(self.time_index, key, len(TIME_OPTIONS))
            if key == MenuInput.CONFIRM:
                self.screen = MenuScreen.PLAYING
                return self.config
            self._step(key, back=MenuScreen.OPPONENT, forward=None)
        elif self.screen == MenuScreen.GAME_OVER:
            if key == MenuInput.CONFIRM:
                self.screen = MenuScreen.TITLE
        return None

    def options(self) -> list[tuple[str, str]]:
        """(name, description) pairs for the current screen."""
        if self.screen == MenuScreen.BOARD_SIZE:
            return [(s.value, describe_board(s)) for s in BOARD_OPTIONS]
        if self.screen == MenuScreen.OPPONENT:
            return [(o.value, OPPONENT_LABELS[o]) for o in OPPONENT_OPTIONS]
        if self.screen == MenuScreen.TIME_CONTROL:
            return [(t.value, describe_time_control(t)) for t in TIME_OPTIONS]
        return []

    def selected_index(self) -> int | None:
        return {
            MenuScreen.BOARD_SIZE: self.board_index,
            MenuScreen.OPPONENT: self.opponent_index,
            MenuScreen.TIME_CONTROL: self.time_index,
        }.get(self.screen)

    def _move(self, index: int, key: MenuInput, count: int) -> int:
        if key == MenuInput.UP:
            return max(0, index - 1)
        if key == MenuInput.DOWN:
            return min(count - 1, index + 1)
        return index

    def _step(self, key: MenuInput, back: MenuScreen, forward: MenuScreen | None) -> None:
        if key == MenuInput.CONFIRM and forward is not None:
            self.screen = forward
        elif key == MenuInput.BACK:
            self.screen = back
