#!/usr/bin/env python3
"""
Minefield - Main entry point.

Usage:
    python main.py play [--width W --height H --mines M | --query STR | --preset NAME]
    python main.py simulate [--games N] [--seed S]
"""
import argparse
import logging
from typing import List, Optional, Tuple

import numpy as np

from minefield import (
    BoardConfig,
    Game,
    MinefieldEnv,
    PRESETS,
    TextRenderer,
    parse_board_params,
    parse_query_string,
    position_to_index,
)

HELP_TEXT = "Commands: r ROW COL (reveal), f ROW COL (flag), n (new game), q (quit)"


def resolve_config(args: argparse.Namespace) -> Tuple[BoardConfig, List[str]]:
    """Build the board config from --preset, --query or the size flags."""
    if args.preset:
        return PRESETS[args.preset], []
    if args.query is not None:
        return parse_query_string(args.query)
    params = {
        name: value
        for name, value in (
            ("width", args.width),
            ("height", args.height),
            ("mines", args.mines),
        )
        if value is not None
    }
    return parse_board_params(params)


def parse_command(line: str, game: Game) -> Optional[Tuple[str, Optional[int]]]:
    """
    Turn a line of input into (command, cell index).

    Returns:
        None if the line is not understood.
    """
    parts = line.split()
    if not parts:
        return None
    command = parts[0].lower()
    if command in ("n", "q") and len(parts) == 1:
        return command, None
    if command not in ("r", "f") or len(parts) != 3:
        return None
    try:
        row, col = int(parts[1]), int(parts[2])
    except ValueError:
        return None
    config = game.config
    if not (0 <= row < config.height and 0 <= col < config.width):
        return None
    return command, position_to_index(row, col, config.width)


def play(args: argparse.Namespace) -> None:
    """Play an interactive game in the terminal."""
    config, warnings = resolve_config(args)
    game = Game(config, seed=args.seed)
    renderer = TextRenderer(game, warnings)

    print(HELP_TEXT)
    try:
        while True:
            print()
            print(renderer.render())
            try:
                line = input("> ")
            except EOFError:
                break

            parsed = parse_command(line, game)
            if parsed is None:
                print(HELP_TEXT)
                continue

            command, index = parsed
            if command == "q":
                break
            if command == "n":
                game.reset()
            elif command == "r":
                game.reveal_action(index)
            else:
                game.flag_action(index)
    finally:
        game.close()


def simulate(args: argparse.Namespace) -> None:
    """Play random legal reveals through the gymnasium environment."""
    config, _ = resolve_config(args)
    env = MinefieldEnv(config=config)
    rng = np.random.default_rng(args.seed)

    wins = 0
    total_revealed = 0
    for game_number in range(args.games):
        seed = None if args.seed is None else args.seed + game_number
        env.reset(seed=seed)
        done = False
        info = {}

        while not done:
            mask = env.get_action_mask()[: env.total_cells]
            valid = np.flatnonzero(mask)
            if len(valid) == 0:
                break
            action = int(rng.choice(valid))
            _, _, terminated, truncated, info = env.step(action)
            done = terminated or truncated

        if info.get("game_state") == "WON":
            wins += 1
        total_revealed += info.get("revealed", 0)

    print(f"Board: {config.width}x{config.height} with {config.mines} mines")
    print(f"Games: {args.games}")
    print(f"Win rate: {wins / args.games:.1%}")
    print(f"Avg revealed: {total_revealed / args.games:.1f} cells")


def add_board_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--width", type=str, default=None, help="Board width (5-30)")
    parser.add_argument("--height", type=str, default=None, help="Board height (5-24)")
    parser.add_argument("--mines", type=str, default=None, help="Number of mines")
    parser.add_argument(
        "--query",
        type=str,
        default=None,
        help="Query string such as 'w=16&h=16&m=40'",
    )
    parser.add_argument(
        "--preset", choices=sorted(PRESETS), default=None, help="Difficulty preset"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")


def main() -> None:
    """Parse arguments and run the appropriate command."""
    parser = argparse.ArgumentParser(description="Minefield - terminal minesweeper")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    add_board_arguments(play_parser)

    simulate_parser = subparsers.add_parser(
        "simulate", help="Play random games and report the win rate"
    )
    add_board_arguments(simulate_parser)
    simulate_parser.add_argument(
        "--games", type=int, default=100, help="Number of games to play"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.command == "play":
        play(args)
    elif args.command == "simulate":
        simulate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
