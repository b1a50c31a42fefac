#!/usr/bin/env python3
"""
Print the deal for a game number, card by card and as a table.

Usage:
  python tools/dump_deal.py 617
  python tools/dump_deal.py 11982 --table
"""
from __future__ import annotations

import argparse
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import game  # type: ignore


def main() -> int:
    parser = argparse.ArgumentParser(description="Print the deal for a FreeCell game number")
    parser.add_argument('seed', type=int, help='Game number 0..999999')
    parser.add_argument('--table', action='store_true', help='Also print the dealt board')
    args = parser.parse_args()
    try:
        seed = game.check_seed(args.seed)
    except ValueError as e:
        parser.error(str(e))

    print(f"Game {game.format_seed(seed)}:")
    print(game.dump_deal(game.shuffle(seed)))
    if args.table:
        print()
        print(game.deal_board(seed).pretty())
    if not game.is_game_solvable(seed):
        print("known unsolvable")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
