from __future__ import annotations

import argparse
import os
import sys
import time
from typing import Dict, List, Optional, Tuple

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from game import MAX_SEED, deal_key, format_seed, shuffle  # type: ignore


def find_duplicates(max_seed: int) -> List[Tuple[int, int]]:
    """Pairs of game numbers in 0..max_seed that deal the same cards."""
    seen: Dict[str, int] = {}
    dups: List[Tuple[int, int]] = []
    for seed in range(max_seed + 1):
        key = deal_key(shuffle(seed))
        if key in seen:
            dups.append((seen[key], seed))
        else:
            seen[key] = seed
    return dups


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Check that every game number deals a different layout")
    parser.add_argument('--max', type=int, default=31_999, help='Highest game number to check (default: the original 32,000 games)')
    args = parser.parse_args(argv)
    if not 0 <= args.max <= MAX_SEED:
        parser.error(f"--max must be in 0..{MAX_SEED}")

    t0 = time.time()
    dups = find_duplicates(args.max)
    took = time.time() - t0
    for a, b in dups:
        print(f"duplicate game {format_seed(a)} {format_seed(b)}")
    print(f"checked={args.max + 1} duplicates={len(dups)} took={took:.1f}s")
    return 1 if dups else 0


if __name__ == '__main__':
    raise SystemExit(main())
