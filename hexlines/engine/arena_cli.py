"""CLI for running bot-vs-bot arena matches.

Usage::

    hexlines-arena --p1 npc1 --p2 npc2 --games 50

    # Three-player game
    hexlines-arena --players 3 --p1 npc2 --p2 npc2 --p3 random --games 100

    # Same thing without the console script
    python -m hexlines.engine.arena_cli --p1 random --p2 npc1
"""

from __future__ import annotations

import argparse
import logging
import sys

from hexlines.config import settings
from hexlines.engine.arena import run_arena
from hexlines.engine.bot_strategy import available_strategies, get_strategy
from hexlines.engine.registry import create_default_registry


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bot-vs-Bot Arena")
    parser.add_argument("--game", default="yavalath")
    parser.add_argument("--games", type=int, default=50)
    parser.add_argument("--seed", type=int, default=settings.random_seed or 0)
    parser.add_argument(
        "--players",
        type=int,
        choices=(2, 3),
        default=settings.default_player_count,
    )
    choices = available_strategies()
    parser.add_argument("--p1", default="npc1", choices=choices, help="Strategy for player 1")
    parser.add_argument("--p2", default="npc2", choices=choices, help="Strategy for player 2")
    parser.add_argument("--p3", default="npc2", choices=choices, help="Strategy for player 3")
    parser.add_argument(
        "--fixed-seats",
        action="store_true",
        help="Keep p1 in the first seat instead of rotating seats each game",
    )
    parser.add_argument("--log-level", default=settings.log_level)
    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    registry = create_default_registry()
    try:
        plugin = registry.get(args.game)
    except KeyError:
        print(f"Unknown game: {args.game}", file=sys.stderr)
        sys.exit(1)

    bot_ids = [args.p1, args.p2, args.p3][: args.players]
    strategies = {}
    for seat, bot_id in enumerate(bot_ids, start=1):
        # Handle same-label case
        label = bot_id if bot_ids.count(bot_id) == 1 else f"{bot_id}_{seat}"
        strategies[label] = get_strategy(bot_id, seed=args.seed + seat)

    print(f"Arena: {' vs '.join(strategies.keys())}, {args.games} games")
    print()

    result = run_arena(
        plugin=plugin,
        strategies=strategies,
        num_games=args.games,
        base_seed=args.seed,
        num_players=args.players,
        game_options={"player_count": args.players},
        alternate_seats=not args.fixed_seats,
        progress_callback=lambda done, total: print(
            f"\r  Game {done}/{total}", end="", flush=True
        ),
    )
    print()
    print()
    print(result.summary())


if __name__ == "__main__":
    main()
