"""
Tests for the terminal front-end.
"""

import random

import pytest

from ..cli import build_parser, format_clock, main, parse_move, player_name
from ..engine_core.setup import new_match
from ..engine_core.state import BoardSize


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("LOG_LEVEL", "MOVE_ANIMATION_MS", "CPU_DELAY_MS", "FRAME_MS"):
        monkeypatch.delenv(f"NIM_MASTERS_{name}", raising=False)


class TestHelpers:

    def test_parse_move(self):
        assert parse_move("2 3") == (1, 3)
        assert parse_move("1,4") == (0, 4)
        assert parse_move("q") is None
        assert parse_move("1") is None
        assert parse_move("-1 2") is None

    def test_format_clock(self):
        assert format_clock(300_000) == "5:00"
        assert format_clock(65_400) == "1:05"
        assert format_clock(-20) == "0:00"

    def test_player_name(self):
        assert player_name(0, vs_cpu=True) == "Player 1"
        assert player_name(1, vs_cpu=True) == "CPU"
        assert player_name(1, vs_cpu=False) == "Player 2"

    def test_parser_defaults(self):
        args = build_parser().parse_args(["play"])
        assert args.board == "medium"
        assert args.opponent == "cpu_normal"
        assert args.time == "blitz"


class TestSuggestCommand:

    def test_prints_move(self, capsys):
        main(["suggest", "3", "4", "5"])
        out = capsys.readouterr().out
        assert "Nim-sum: 2" in out
        assert "Move: take 2 from pile 1" in out

    def test_empty_board_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["suggest", "0", "0"])
        assert exc_info.value.code == 1

    def test_negative_pile_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["suggest", "3", "-1"])
        assert exc_info.value.code == 1

    def test_oversized_pile_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["suggest", "300000", "1", "--difficulty", "normal"])
        assert exc_info.value.code == 1
        assert "0 to 9 stones" in capsys.readouterr().out

    def test_bad_environment_exits(self, monkeypatch):
        monkeypatch.setenv("NIM_MASTERS_FRAME_MS", "0")
        with pytest.raises(SystemExit) as exc_info:
            main(["suggest", "1"])
        assert exc_info.value.code == 2


class TestPlayCommand:

    def test_quit(self, monkeypatch, capsys):
        monkeypatch.setattr("builtins.input", lambda prompt="": "q")
        main(["play", "--opponent", "cpu_hard", "--time", "none", "--seed", "7", "--fast"])
        assert "Match abandoned." in capsys.readouterr().out

    def test_two_player_game(self, monkeypatch, capsys):
        """Each player empties one whole pile in turn; player 1 takes the last one."""
        piles = new_match(board_size=BoardSize.SMALL, rng=random.Random(7)).piles
        lines = iter([
            "9 9",
            f"1 {piles[0]}",
            f"2 {piles[1]}",
            f"3 {piles[2]}",
        ])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))

        main([
            "play", "--board", "small", "--opponent", "human",
            "--time", "none", "--seed", "7", "--fast",
        ])
        out = capsys.readouterr().out
        assert "Illegal move." in out
        assert f"Player 2 takes {piles[1]} from pile 2" in out
        assert "Player 1 wins (took the last stone)" in out
