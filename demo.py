#!/usr/bin/env python3
"""Watch the auto-player play Minesweeper."""
import os
import random
import time
from typing import Optional

from src.minesweeper import GameEvent, GameSession, render_ansi


def clear_screen() -> None:
    os.system('cls' if os.name == 'nt' else 'clear')


def demo(
    delay: float = 1.0,
    games: int = 3,
    config_path: Optional[str] = None,
    seed: Optional[int] = None,
) -> None:
    """Run auto-played games, ticking the session like a host loop would."""
    outcomes = {"won": 0, "lost": 0}
    session = GameSession(
        config_path=config_path,
        rng=random.Random(seed),
        autoplay=True,
        autoplay_interval=delay,
    )
    session.events.subscribe(GameEvent.GAME_WON, lambda _: outcomes.__setitem__("won", outcomes["won"] + 1))
    session.events.subscribe(GameEvent.GAME_OVER, lambda _: outcomes.__setitem__("lost", outcomes["lost"] + 1))

    for game in range(games):
        if game:
            session.restart()
        board = session.board
        step = 0
        while not session.auto_player.finished:
            position = session.update(delay)
            if position is None:
                break
            step += 1
            clear_screen()
            print(f"=== Game {game + 1}/{games} | Step {step} ===")
            print(f"Board: {board.width}x{board.height}, {board.total_mines} mines")
            print(f"Last move: {position}\n")
            print(render_ansi(board))
            time.sleep(delay)

        if board.is_won:
            print("\n*** WIN! ***")
        elif board.is_lost:
            print("\n*** LOST (hit mine) ***")
        else:
            print("\n*** Out of moves ***")
        time.sleep(1.0)

    print(f"\n=== Final: {outcomes['won']} won, {outcomes['lost']} lost of {games} ===")


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("--delay", type=float, default=1.0, help="Seconds between moves")
    parser.add_argument("--games", type=int, default=3, help="Number of games")
    parser.add_argument("--config", default=None, help="JSON board configuration")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    args = parser.parse_args()

    demo(delay=args.delay, games=args.games, config_path=args.config, seed=args.seed)
