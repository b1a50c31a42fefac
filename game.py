from __future__ import annotations

# Facade module that re-exports FreeCell core functionality.
# Used by the Flask app, the tools and the tests.
# Single-responsibility modules live under freecell_core/*.

# Robust imports so this module works when executed as part of a package
# or imported directly from the repo root.
try:
    from .freecell_core.cards import (  # type: ignore
        ACES,
        BLK,
        CLB,
        DECK,
        DMD,
        HRT,
        INVALID_CARD,
        KING,
        NO_CARD,
        RED,
        SPD,
        Card,
        card_from_sym,
        get_card,
        is_card,
    )
    from .freecell_core.board import (  # type: ignore
        EMPTY_PILE1,
        EMPTY_PILE16,
        FC,
        FD,
        FH,
        FS,
        HIDDEN_CARD,
        MAX_BOARD_ID,
        Board,
        Location,
        check_board,
        decode_location,
        empty_pile_pick,
    )
    from .freecell_core.deal import ClassicRand, deal_board, deal_key, dump_deal, shuffle  # type: ignore
    from .freecell_core.history import MoveHistory  # type: ignore
    from .freecell_core.moves import (  # type: ignore
        auto_move,
        can_interact,
        can_move_to_cascade,
        can_place_card,
        can_select_card,
        get_sequence,
        is_next_in_foundation,
        legal_targets,
        movable_stack_size,
        next_in_sequence,
        place_selection,
        selected_run,
    )
    from .freecell_core.seeds import (  # type: ignore
        MAX_SEED,
        UNSOLVABLE_GAMES,
        check_seed,
        format_seed,
        is_game_solvable,
        next_seed,
        parse_seed_digits,
        previous_seed,
    )
    from .freecell_core.session import GameSession  # type: ignore
except ImportError:
    from freecell_core.cards import (  # type: ignore
        ACES,
        BLK,
        CLB,
        DECK,
        DMD,
        HRT,
        INVALID_CARD,
        KING,
        NO_CARD,
        RED,
        SPD,
        Card,
        card_from_sym,
        get_card,
        is_card,
    )
    from freecell_core.board import (  # type: ignore
        EMPTY_PILE1,
        EMPTY_PILE16,
        FC,
        FD,
        FH,
        FS,
        HIDDEN_CARD,
        MAX_BOARD_ID,
        Board,
        Location,
        check_board,
        decode_location,
        empty_pile_pick,
    )
    from freecell_core.deal import ClassicRand, deal_board, deal_key, dump_deal, shuffle  # type: ignore
    from freecell_core.history import MoveHistory  # type: ignore
    from freecell_core.moves import (  # type: ignore
        auto_move,
        can_interact,
        can_move_to_cascade,
        can_place_card,
        can_select_card,
        get_sequence,
        is_next_in_foundation,
        legal_targets,
        movable_stack_size,
        next_in_sequence,
        place_selection,
        selected_run,
    )
    from freecell_core.seeds import (  # type: ignore
        MAX_SEED,
        UNSOLVABLE_GAMES,
        check_seed,
        format_seed,
        is_game_solvable,
        next_seed,
        parse_seed_digits,
        previous_seed,
    )
    from freecell_core.session import GameSession  # type: ignore


def new_session(seed: int) -> GameSession:
    """Starts a session on the deal for the given game number."""
    return GameSession(seed)


def main() -> None:
    # CLI driver delegated to freecell_core.cli
    try:
        from .freecell_core.cli import main as _main  # type: ignore
    except ImportError:
        from freecell_core.cli import main as _main  # type: ignore
    _main()


if __name__ == '__main__':
    main()
