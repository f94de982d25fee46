"""
Play the bug crossing game in an arcade window

    python -m crossing --seed 7
"""

import argparse
import logging

from .constants import GameConfig
from .window import run


def main():
    parser = argparse.ArgumentParser(description="Cross the stone rows without getting hit by a bug")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for enemy rows and speeds (default: random)",
    )
    parser.add_argument(
        "--lives",
        type=int,
        default=None,
        help="Number of lives (default: 3)",
    )
    parser.add_argument(
        "--enemies",
        type=int,
        default=None,
        help="Number of enemies at level 0 (default: 3)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every collision and level change",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides = {}
    if args.lives is not None:
        overrides["initial_lives"] = args.lives
    if args.enemies is not None:
        overrides["initial_enemy_count"] = args.enemies

    game = run(config=GameConfig.from_dict(overrides), seed=args.seed)
    print(f"Final level: {game.level}  Crossings: {game.crossings}  Lives left: {game.lives}")


if __name__ == "__main__":
    main()
