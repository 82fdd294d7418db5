"""
Nim Masters CLI - Terminal front-end for the engine.

Usage:
    nim-masters play [--board SIZE] [--opponent WHO] [--time TC]   Play in the terminal
    nim-masters suggest 3 4 5 [--difficulty LEVEL]                  Ask the CPU for a move
"""

import argparse
import sys
import time

from .config import Settings, configure_logging
from .errors import ConfigurationError


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(2)
    configure_logging(settings)

    if args.command == "play":
        cmd_play(args, settings)
    elif args.command == "suggest":
        cmd_suggest(args)
    else:
        parser.print_help()
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Nim Masters - Nim with a CPU opponent and chess clocks",
        prog="nim-masters",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a match in the terminal")
    play_parser.add_argument("--board", choices=["small", "medium", "large"], default="medium")
    play_parser.add_argument(
        "--opponent",
        choices=["human", "cpu_easy", "cpu_normal", "cpu_hard"],
        default="cpu_normal",
    )
    play_parser.add_argument(
        "--time", choices=["classic", "blitz", "bullet", "none"], default="blitz",
        help="Time control ('none' for untimed)",
    )
    play_parser.add_argument("--seed", type=int, help="Random seed")
    play_parser.add_argument("--fast", action="store_true", help="Skip CPU pacing delays")

    # Suggest command
    suggest_parser = subparsers.add_parser("suggest", help="Show the CPU move for a position")
    suggest_parser.add_argument("piles", type=int, nargs="+", help="Pile sizes")
    suggest_parser.add_argument(
        "--difficulty", choices=["easy", "normal", "hard"], default="hard",
    )
    suggest_parser.add_argument("--seed", type=int, help="Random seed")

    return parser


def cmd_suggest(args):
    """Print the CPU's move for a position."""
    from pydantic import ValidationError

    from .api import ErrorResponse, GameService, SuggestRequest
    from .engine_core.state import MAX_PILE_SIZE, MAX_PILES

    try:
        request = SuggestRequest(piles=args.piles, difficulty=args.difficulty, random_seed=args.seed)
    except ValidationError:
        print(f"Error: give 1 to {MAX_PILES} piles of 0 to {MAX_PILE_SIZE} stones")
        sys.exit(1)

    response = GameService().suggest(request)
    if isinstance(response, ErrorResponse):
        print(f"Error: {response.error}")
        sys.exit(1)

    print(f"Nim-sum: {response.nim_sum}")
    print(f"Move: take {response.amount} from pile {response.pile_index + 1}")
    print(f"({response.explanation})")


def cmd_play(args, settings: Settings):
    """Play a match in the terminal."""
    from .api import GameService, IntentKind, IntentRequest, MatchConfigRequest
    from .session import LoopState

    service = GameService(settings=settings)
    snapshot = service.start_match(MatchConfigRequest(
        board_size=args.board,
        opponent=args.opponent,
        time_control=None if args.time == "none" else args.time,
        random_seed=args.seed,
    ))
    vs_cpu = args.opponent != "human"

    print("Take stones from one pile per turn. Whoever takes the last stone wins.")
    print("Enter a move as '<pile> <amount>', or 'q' to quit.\n")

    while snapshot.outcome is None:
        if snapshot.loop_state != LoopState.WAITING_HUMAN:
            snapshot = _settle(service, settings, fast=args.fast, vs_cpu=vs_cpu)
            continue

        print(render(snapshot, vs_cpu))
        started = time.monotonic()
        line = input(f"{player_name(snapshot.active_player, vs_cpu)}> ").strip().lower()
        step = service.tick(int((time.monotonic() - started) * 1000))
        snapshot = step.snapshot
        if snapshot.outcome is not None:
            break

        if line in {"q", "quit", "exit"}:
            service.return_to_menu()
            print("Match abandoned.")
            return

        target = parse_move(line)
        if target is None or not _is_legal(snapshot.piles, *target):
            print("Illegal move.\n")
            continue

        pile, amount = target
        for _ in range(len(snapshot.piles)):
            if snapshot.selected_pile == pile:
                break
            snapshot = service.send_intent(IntentRequest(kind=IntentKind.SELECT_PILE, delta=1)).snapshot
        while snapshot.selected_amount != amount:
            delta = 1 if snapshot.selected_amount < amount else -1
            step = service.send_intent(IntentRequest(kind=IntentKind.ADJUST_AMOUNT, delta=delta))
            snapshot = step.snapshot
            if not step.accepted:
                break

        step = service.send_intent(IntentRequest(kind=IntentKind.CONFIRM_MOVE))
        _print_events(step.events, vs_cpu)
        snapshot = step.snapshot

    print(render(snapshot, vs_cpu))
    outcome = snapshot.outcome
    reason = "out of time" if outcome.reason.value == "timeout" else "took the last stone"
    print(f"\n{player_name(outcome.winner, vs_cpu)} wins ({reason})")


def _settle(service, settings: Settings, fast: bool, vs_cpu: bool):
    """Run frames until a human may move or the match ends."""
    from .session import LoopState

    while True:
        step = service.tick(settings.frame_ms)
        _print_events(step.events, vs_cpu)
        if step.snapshot.loop_state in (LoopState.WAITING_HUMAN, LoopState.GAME_OVER):
            return step.snapshot
        if not fast:
            time.sleep(settings.frame_ms / 1000)


def _print_events(events, vs_cpu: bool) -> None:
    for event in events:
        if event.kind == "move_taken":
            print(f"{player_name(event.mover, vs_cpu)} takes {event.amount} from pile {event.pile_index + 1}")


def _is_legal(piles, pile, amount) -> bool:
    from .engine_core import is_legal

    return is_legal(piles, pile, amount)


def parse_move(line: str):
    """'2 3' -> (1, 3): one-based pile on input, zero-based out."""
    parts = line.replace(",", " ").split()
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        return None
    return int(parts[0]) - 1, int(parts[1])


def player_name(seat: int, vs_cpu: bool) -> str:
    if seat == 1 and vs_cpu:
        return "CPU"
    return f"Player {seat + 1}"


def format_clock(ms: int) -> str:
    """m:ss, never negative."""
    seconds = max(0, ms // 1000)
    return f"{seconds // 60}:{seconds % 60:02d}"


def render(snapshot, vs_cpu: bool) -> str:
    """Plain-text board."""
    lines = []
    for i, count in enumerate(snapshot.piles):
        marker = ">" if i == snapshot.selected_pile else " "
        lines.append(f"{marker} pile {i + 1}: {'o ' * count}({count})")
    if snapshot.time_control is not None:
        clocks = [f"P1 {format_clock(snapshot.clocks[0])}"]
        if not vs_cpu:
            clocks.append(f"P2 {format_clock(snapshot.clocks[1])}")
        lines.append("  ".join(clocks))
    return "\n".join(lines)


if __name__ == "__main__":
    main()
