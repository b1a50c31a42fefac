from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

from .board import empty_pile_pick
from .cards import card_from_sym, get_card
from .config import configure_logging, default_seed
from .deal import dump_deal, shuffle
from .seeds import check_seed, format_seed, next_seed, previous_seed
from .session import GameSession

HELP_TEXT = """Commands:
  7H, TD, 10C   pick a card (select it, or place the selection on it)
  fc1..fc4      empty freecell
  f1..f4        empty foundation (clubs, diamonds, hearts, spades)
  c1..c8        empty cascade
  u             undo
  a             move safe cards to the foundations
  n / p         next / previous game
  g NNNNNN      go to game number
  h             this help
  q             quit"""

_WORDS = {
    'q': 'quit', 'quit': 'quit', 'exit': 'quit',
    'u': 'undo', 'undo': 'undo',
    'a': 'auto', 'auto': 'auto',
    'n': 'next', 'next': 'next',
    'p': 'prev', 'prev': 'prev',
    'h': 'help', 'help': 'help', '?': 'help',
}


def _pile(text: str, prefix: str, first_pile: int, count: int) -> Optional[int]:
    rest = text[len(prefix):]
    if not rest.isdigit():
        return None
    n = int(rest)
    if not 1 <= n <= count:
        raise ValueError(f"{prefix}{n}: expected {prefix}1..{prefix}{count}")
    return empty_pile_pick(first_pile + n - 1)


def parse_command(text: str) -> Tuple[str, Optional[int]]:
    """Parses one line of player input into (action, value).

    Actions: 'none', 'quit', 'undo', 'auto', 'next', 'prev', 'help',
    'goto' (value is the game number) and 'pick' (value is the pick id).
    Raises ValueError on anything else.
    """
    t = text.strip().lower()
    if not t:
        return 'none', None
    if t in _WORDS:
        return _WORDS[t], None
    parts = t.split()
    if parts[0] in ('g', 'goto') and len(parts) == 2:
        if not parts[1].isdigit():
            raise ValueError(f"bad game number: {parts[1]!r}")
        return 'goto', check_seed(int(parts[1]))
    for prefix, first, count in (('fc', 0, 4), ('f', 4, 4), ('c', 8, 8)):
        if t.startswith(prefix):
            pick = _pile(t, prefix, first, count)
            if pick is not None:
                return 'pick', pick
    return 'pick', card_from_sym(t).id


def _status(session: GameSession) -> str:
    sel = " ".join(get_card(cid).sym for cid in session.get_selected()) or "-"
    return f"game {format_seed(session.seed)}  moves {session.move_count():03d}  selected {sel}"


def _show(session: GameSession) -> None:
    print(session.board.pretty())
    print(_status(session))
    if not session.is_game_solvable():
        print("(this deal is known to be unsolvable)")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='FreeCell in the terminal')
    parser.add_argument('--seed', type=int, default=None, help='Game number 0..999999')
    parser.add_argument('--show', action='store_true', help='Print the deal and exit')
    parser.add_argument('--no-auto', action='store_true', help='Do not move safe cards to the foundations')
    args = parser.parse_args(argv)

    configure_logging()
    seed = default_seed() if args.seed is None else args.seed
    try:
        check_seed(seed)
    except ValueError as e:
        parser.error(str(e))

    if args.show:
        print(f"Game {format_seed(seed)}:")
        print(dump_deal(shuffle(seed)))
        return

    session = GameSession(seed)
    _show(session)
    while True:
        try:
            text = input('> ')
        except EOFError:
            break
        try:
            action, value = parse_command(text)
        except ValueError as e:
            print(f"? {e}")
            continue

        if action == 'quit':
            break
        if action == 'help':
            print(HELP_TEXT)
            continue
        if action == 'none':
            continue
        if action == 'undo':
            session.undo()
        elif action == 'auto':
            session.auto_move_all()
        elif action in ('next', 'prev', 'goto'):
            if action == 'next':
                value = next_seed(session.seed)
            elif action == 'prev':
                value = previous_seed(session.seed)
            session.new_game(value)
        elif action == 'pick':
            if session.interact(value) and not args.no_auto:
                session.auto_move_all()
        _show(session)
        if session.is_game_won():
            print(f"You won game {format_seed(session.seed)} in {session.move_count()} moves.")
            break
