#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py play [--config FILE] [--width W --height H --mines M]
    python main.py evaluate [--agent {random,autoplay}] [--games N]
    python main.py compare [--games N]
"""
import argparse
import logging
import random
from typing import Optional

from src.minesweeper import BoardConfig, EventBus, GameEvent, GameSession, render_ansi
from src.minesweeper.agents import RandomAgent
from src.minesweeper.evaluation import Evaluator


HELP = """Commands:
  r X Y     reveal cell
  f X Y     toggle flag
  auto on   start auto-play (auto off to stop)
  restart   new board
  quit      leave"""


def build_config(args: argparse.Namespace) -> Optional[BoardConfig]:
    """Board from --width/--height/--mines, or None to use the config file."""
    if args.width is None and args.height is None and args.mines is None:
        return None
    return BoardConfig(
        width=args.width or 9,
        height=args.height or 9,
        mines_count=args.mines if args.mines is not None else 10,
    )


def play(args: argparse.Namespace) -> None:
    """Play in the terminal."""
    events = EventBus()
    events.subscribe(GameEvent.GAME_WON, lambda won: print("\n*** WIN! ***"))
    events.subscribe(GameEvent.GAME_OVER, lambda over: print("\n*** LOST (hit mine) ***"))
    events.subscribe(GameEvent.GAME_RESTARTED, lambda: print("\nNew game"))

    session = GameSession(
        config_path=args.config,
        events=events,
        rng=random.Random(args.seed),
        config=build_config(args),
        autoplay_interval=0.0,
    )
    events.subscribe(
        GameEvent.MINE_MARKED,
        lambda marked: print(f"Remaining Mines: {session.board.remaining_mines}"),
    )

    print(HELP)
    while True:
        board = session.board
        print(f"\nTotal Mines: {board.total_mines}  "
              f"Remaining Mines: {board.remaining_mines}")
        print(render_ansi(board))
        try:
            line = input("> ").strip().lower()
        except EOFError:
            break

        parts = line.split()
        if not parts:
            continue
        command = parts[0]
        if command in ("q", "quit", "exit"):
            break
        if command == "restart":
            session.restart()
        elif command == "auto" and len(parts) == 2:
            session.set_autoplay(parts[1] == "on")
            while session.autoplay and session.update(1.0) is not None:
                pass
            session.set_autoplay(False)
        elif command in ("r", "f") and len(parts) == 3:
            try:
                x, y = int(parts[1]), int(parts[2])
            except ValueError:
                print(HELP)
                continue
            if command == "r":
                session.reveal(x, y)
            else:
                session.toggle_flag(x, y)
        else:
            print(HELP)


def evaluate(args: argparse.Namespace) -> None:
    """Evaluate a single player."""
    config = build_config(args) or BoardConfig(9, 9, 10)
    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)

    print(f"\nEvaluating {args.agent} over {args.games} games...")
    if args.agent == "autoplay":
        results = evaluator.evaluate_autoplay()
    else:
        agent = RandomAgent(config.width, config.height, seed=args.seed)
        results = evaluator.evaluate(agent)

    print(f"Results for {args.agent}:")
    for key, value in results.items():
        print(f"  {key}: {value:.3f}")


def compare(args: argparse.Namespace) -> None:
    """Compare the random agent with the auto-player."""
    config = build_config(args) or BoardConfig(9, 9, 10)
    evaluator = Evaluator(config, num_episodes=args.games, seed=args.seed)

    results = evaluator.compare(
        {"Random": RandomAgent(config.width, config.height, seed=args.seed)}
    )
    print("Evaluating Auto-play...")
    results["Auto-play"] = evaluator.evaluate_autoplay()

    print("\n" + "=" * 40)
    print(f"{'Player':<20} {'Win Rate':<10} {'Avg Revealed':<10}")
    print("-" * 40)
    for name, metrics in results.items():
        print(
            f"{name:<20} {metrics['win_rate']:>8.1%} "
            f"{metrics['avg_revealed']:>10.1f}"
        )


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=int, default=None, help="Board columns")
    parser.add_argument("--height", type=int, default=None, help="Board rows")
    parser.add_argument("--mines", type=int, default=None, help="Number of mines")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minesweeper - play and evaluate")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument(
        "--config", default=None, help="JSON file with width, height, minesCount"
    )
    add_board_arguments(play_parser)

    eval_parser = subparsers.add_parser("evaluate", help="Evaluate a player")
    eval_parser.add_argument(
        "--agent",
        choices=["random", "autoplay"],
        default="autoplay",
        help="Player to evaluate",
    )
    eval_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )
    add_board_arguments(eval_parser)

    compare_parser = subparsers.add_parser("compare", help="Compare players")
    compare_parser.add_argument(
        "--games", type=int, default=100, help="Number of games per player"
    )
    add_board_arguments(compare_parser)

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        play(args)
    elif args.command == "evaluate":
        evaluate(args)
    elif args.command == "compare":
        compare(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
