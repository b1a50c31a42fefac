import unittest

from game import (
    EMPTY_PILE1,
    FC,
    FD,
    HIDDEN_CARD,
    INVALID_CARD,
    NO_CARD,
    Board,
    Location,
    auto_move,
    can_place_card,
    can_select_card,
    card_from_sym,
    check_board,
    decode_location,
    deal_board,
    get_sequence,
    is_next_in_foundation,
    legal_targets,
    movable_stack_size,
    next_in_sequence,
    place_selection,
    selected_run,
)


def cid(sym):
    return card_from_sym(sym).id


def card(sym):
    return card_from_sym(sym)


def singles(syms):
    return [[s] for s in syms]


class TestBoardUnit(unittest.TestCase):
    def test_given_locations_when_decoding_then_tagged_view_matches_encoding(self):
        self.assertEqual(decode_location(2), Location("freecell", 2))
        self.assertEqual(decode_location(FD), Location("foundation", 1))
        self.assertEqual(decode_location(8), Location("cascade", 0, 0))
        self.assertEqual(decode_location(8 + 3 + 8 * 2), Location("cascade", 3, 2))
        self.assertEqual(decode_location(167), Location("cascade", 7, 19))
        self.assertEqual(decode_location(FC + HIDDEN_CARD), Location("hidden", 0))
        self.assertIsNone(decode_location(168))
        self.assertIsNone(decode_location(EMPTY_PILE1))

    def test_given_deal_when_querying_then_card_at_and_last_in_cascade_correct(self):
        board = deal_board(1)
        self.assertEqual(board.card_at(8), cid("JD"))
        self.assertEqual(board.card_at(0), NO_CARD)
        self.assertEqual(board.last_in_cascade(0).sym, "6S")
        self.assertEqual(board.last_in_cascade(4).sym, "6C")
        self.assertTrue(board.is_last_in_cascade(cid("TC")))
        self.assertFalse(board.is_last_in_cascade(cid("JD")))
        self.assertEqual(board.empty_freecells(), 4)
        self.assertEqual(board.empty_cascades(), 0)
        self.assertEqual([c.sym for c in board.cascade(7)], ["5H", "3H", "3C", "7S", "7D", "TC"])
        self.assertEqual(check_board(board), [])

    def test_given_bad_pile_when_checking_empty_then_false(self):
        board = deal_board(1)
        with self.assertLogs("freecell_core.board", level="ERROR"):
            self.assertFalse(board.empty_pile(16))

    def test_given_layout_when_built_then_unplaced_cards_hidden_on_their_foundation(self):
        board = Board.from_layout(
            cascades=[["KS", "QH"]],
            freecells=[None, "7C"],
            foundations=["2D"],
        )
        self.assertEqual(board[cid("KS")], 8)
        self.assertEqual(board[cid("QH")], 16)
        self.assertEqual(board[cid("7C")], 1)
        self.assertEqual(board[cid("2D")], FD)
        self.assertEqual(board[cid("AD")], FD + HIDDEN_CARD)
        self.assertEqual(board.foundation_top(1).sym, "2D")
        self.assertIs(board.foundation_top(0), INVALID_CARD)

    def test_given_duplicate_card_when_building_layout_then_raises(self):
        with self.assertRaises(ValueError):
            Board.from_layout(cascades=[["KS"], ["KS"]])
        with self.assertRaises(ValueError):
            Board.from_layout(cascades=[["XX"]])

    def test_given_gap_in_cascade_when_checked_then_problem_reported(self):
        board = deal_board(1).moved({cid("KD"): 0})  # row 1 of cascade 0 now empty
        problems = check_board(board)
        self.assertTrue(any("gap" in p for p in problems))

    def test_given_card_already_under_foundation_top_when_checked_then_problem_reported(self):
        board = Board.from_layout(cascades=[["QD"]], foundations=["KC", "KD", "KH", "KS"])
        problems = check_board(board)
        self.assertEqual(len(problems), 1)
        self.assertIn("QD", problems[0])
        self.assertEqual(check_board(Board.from_layout(cascades=[["KD"]], foundations=["KC", "QD", "KH", "KS"])), [])

    def test_given_board_when_pretty_then_top_row_and_cascades_rendered(self):
        txt = Board.from_layout(cascades=[["KS", "QH"], ["2C"]], freecells=["7C"], foundations=["AD"]).pretty()
        lines = txt.splitlines()
        self.assertEqual(lines[0], "7C -- -- -- | -- AD -- --")
        self.assertEqual(lines[1], "KS 2C")
        self.assertEqual(lines[2], "QH")


class TestRulesUnit(unittest.TestCase):
    def test_given_cards_when_checking_sequence_then_rank_and_color_rules(self):
        self.assertTrue(next_in_sequence(card("8S"), card("7H")))
        self.assertFalse(next_in_sequence(card("8S"), card("7C")))
        self.assertFalse(next_in_sequence(card("8S"), card("6H")))
        self.assertFalse(next_in_sequence(INVALID_CARD, card("KH")))

    def test_given_foundation_tops_when_checking_next_then_suit_and_rank_rules(self):
        self.assertTrue(is_next_in_foundation(0, INVALID_CARD, card("AC")))
        self.assertFalse(is_next_in_foundation(1, INVALID_CARD, card("AC")))
        self.assertTrue(is_next_in_foundation(2, card("4H"), card("5H")))
        self.assertFalse(is_next_in_foundation(2, card("4H"), card("6H")))
        with self.assertLogs("freecell_core.moves", level="ERROR"):
            self.assertFalse(is_next_in_foundation(4, INVALID_CARD, card("AC")))

    def test_given_no_empty_cascades_when_sizing_then_free_cells_plus_one(self):
        board = Board.from_layout(
            cascades=singles(["KC", "KD", "KH", "KS", "QC", "QD", "QH", "QS"]),
            freecells=["2D", "3D"],
        )
        self.assertEqual(movable_stack_size(board, False), 3)
        self.assertEqual(movable_stack_size(board, True), 3)

    def test_given_one_empty_cascade_when_it_is_the_target_then_bonus_collapses(self):
        board = Board.from_layout(
            cascades=singles(["KC", "KD", "KH", "KS", "QC", "QD", "QH"]),
            freecells=["2D", "3D"],
        )
        self.assertEqual(movable_stack_size(board, True), 3)
        self.assertEqual(movable_stack_size(board, False), 2 * (2 + 1))

    def test_given_two_empty_cascades_when_sizing_then_doubling_formula(self):
        board = Board.from_layout(
            cascades=singles(["KC", "KD", "KH", "KS", "QC", "QD"]),
            freecells=["2D"],
        )
        free = 3
        self.assertEqual(movable_stack_size(board, False), 2 * (free + 2))
        self.assertEqual(movable_stack_size(board, True), 2 * (free + 1))

    def test_given_run_to_cascade_end_when_getting_sequence_then_whole_run(self):
        board = Board.from_layout(cascades=[["KD", "9C", "8H", "7S"], ["TD"]])
        self.assertEqual(get_sequence(board, cid("9C")), [cid("9C"), cid("8H"), cid("7S")])
        # KD -> 9C is not a sequence, so KD has no movable run
        self.assertEqual(get_sequence(board, cid("KD")), [])

    def test_given_run_too_long_for_space_when_getting_sequence_then_empty(self):
        board = Board.from_layout(
            cascades=[["9C", "8H", "7S"]] + singles(["KC", "KH", "QC", "QD", "JD", "JH", "TS"]),
            freecells=["2D", "3D", "4D"],
        )
        # one free cell, no empty cascade: at most two cards move
        self.assertEqual(get_sequence(board, cid("9C")), [])
        self.assertEqual(get_sequence(board, cid("8H")), [cid("8H"), cid("7S")])

    def test_given_long_run_when_selected_then_run_capped_at_ten(self):
        run = ["KH", "QS", "JH", "TS", "9H", "8S", "7H", "6S", "5H", "4S", "3H"]
        board = Board.from_layout(cascades=[run])
        with self.assertLogs("freecell_core.moves", level="ERROR"):
            sel = selected_run(board, cid("KH"))
        self.assertEqual(len(sel), 10)
        self.assertEqual(selected_run(board, NO_CARD), [])

    def test_given_run_cut_short_by_cap_when_placed_then_nothing_moves(self):
        run = ["KH", "QS", "JH", "TS", "9H", "8S", "7H", "6S", "5H", "4S", "3H"]
        board = Board.from_layout(cascades=[run])
        with self.assertLogs("freecell_core.moves", level="ERROR"):
            self.assertIsNone(place_selection(board, cid("KH"), EMPTY_PILE1 + 9))

    def test_given_foundation_and_hidden_cards_when_selecting_then_refused(self):
        board = Board.from_layout(cascades=[["5S"]], foundations=["2C"])
        self.assertFalse(can_select_card(board, cid("2C")))
        self.assertFalse(can_select_card(board, cid("AC")))  # buried
        self.assertFalse(can_select_card(board, EMPTY_PILE1))
        self.assertTrue(can_select_card(board, cid("5S")))

    def test_given_full_table_when_card_has_nowhere_to_go_then_not_selectable(self):
        board = Board.from_layout(
            cascades=[["9C", "8H", "7S"]] + singles(["KC", "KH", "QC", "QD", "JD", "JH", "TS"]),
            freecells=["2D", "3D", "4D", "5D"],
        )
        self.assertFalse(can_select_card(board, cid("5D")))
        # no red eight is exposed
        self.assertFalse(can_select_card(board, cid("7S")))

    def test_given_freecell_card_with_foundation_slot_when_selecting_then_selectable(self):
        board = Board.from_layout(
            cascades=singles(["KC", "KD", "KH", "KS", "QC", "QD", "QH", "QS"]),
            freecells=["3H", "4D", "5D", "6D"],
            foundations=["2H"],
        )
        self.assertTrue(can_select_card(board, cid("3H")))
        self.assertTrue(can_place_card(board, cid("3H"), cid("2H")))
        placed = place_selection(board, cid("3H"), cid("2H"))
        self.assertEqual(placed[cid("3H")], 6)
        self.assertEqual(placed[cid("2H")], 6 + HIDDEN_CARD)

    def test_given_selection_when_placing_on_empty_piles_then_pile_rules(self):
        board = Board.from_layout(
            cascades=[["9C", "8H", "7S"], ["AD"]],
            freecells=["KS"],
        )
        ad = cid("AD")
        self.assertTrue(can_place_card(board, ad, EMPTY_PILE1 + 1))      # empty freecell
        self.assertFalse(can_place_card(board, ad, EMPTY_PILE1 + 0))     # occupied freecell
        self.assertTrue(can_place_card(board, ad, EMPTY_PILE1 + FD))     # diamond foundation
        self.assertFalse(can_place_card(board, ad, EMPTY_PILE1 + FC))    # wrong suit
        self.assertTrue(can_place_card(board, ad, EMPTY_PILE1 + 10))     # empty cascade
        # a three card run can't go into a freecell
        self.assertFalse(can_place_card(board, cid("9C"), EMPTY_PILE1 + 1))
        self.assertTrue(can_place_card(board, cid("9C"), EMPTY_PILE1 + 12))

    def test_given_invalid_pick_when_placing_then_logged_and_refused(self):
        board = Board.from_layout(cascades=[["9C"]])
        with self.assertLogs("freecell_core.moves", level="ERROR"):
            self.assertFalse(can_place_card(board, cid("9C"), 500))

    def test_given_run_when_placed_on_cascade_card_then_order_preserved(self):
        board = Board.from_layout(cascades=[["9C", "8H", "7S"], ["TD"]])
        placed = place_selection(board, cid("9C"), cid("TD"))
        self.assertEqual(placed[cid("9C")], board[cid("TD")] + 8)
        self.assertEqual(placed[cid("8H")], board[cid("TD")] + 16)
        self.assertEqual(placed[cid("7S")], board[cid("TD")] + 24)
        self.assertTrue(placed.empty_pile(8))

    def test_given_run_too_long_when_placing_on_empty_cascade_then_move_aborted(self):
        board = Board.from_layout(
            cascades=[["9C", "8H", "7S"]] + singles(["KC", "KH", "QC", "QD", "JD", "JH"]),
            freecells=["2D", "3D", "4D", "5D"],
        )
        with self.assertLogs("freecell_core.moves", level="ERROR"):
            self.assertIsNone(place_selection(board, cid("9C"), EMPTY_PILE1 + 15))

    def test_given_selection_when_listing_targets_then_all_legal_picks(self):
        board = Board.from_layout(
            cascades=singles(["8H", "TD", "KC", "KH", "QC", "QD", "QH", "QS"]),
            freecells=["7S", "2C", "3C", "4C"],
        )
        self.assertEqual(legal_targets(board, cid("7S")), [cid("8H")])
        self.assertEqual(legal_targets(board, NO_CARD), [])

    def test_given_empty_foundation_when_auto_moving_then_only_aces_and_twos(self):
        board = Board.from_layout(cascades=[["3C"], ["2S"], ["AS"]], foundations=["AC"])
        moved = auto_move(board)
        self.assertIsNotNone(moved)
        new_board, promoted = moved
        self.assertEqual(promoted.sym, "AS")
        self.assertEqual(new_board[cid("AS")], 7)
        # next pass promotes the two of spades; the three of clubs waits
        new_board, promoted = auto_move(new_board)
        self.assertEqual(promoted.sym, "2S")
        self.assertEqual(new_board[cid("AS")], 7 + HIDDEN_CARD)
        self.assertIsNone(auto_move(new_board))

    def test_given_uneven_foundations_when_auto_moving_then_two_ranks_ahead_allowed(self):
        # lowest top is an ace, so a three may still move up (rank +2)
        board = Board.from_layout(cascades=[["3C"]], foundations=["2C", "AD", "AH", "AS"])
        new_board, promoted = auto_move(board)
        self.assertEqual(promoted.sym, "3C")
        self.assertEqual(new_board[cid("2C")], FC + HIDDEN_CARD)
        # a four is three ranks ahead and stays put
        board = Board.from_layout(cascades=[["4C"]], foundations=["3C", "AD", "AH", "AS"])
        self.assertIsNone(auto_move(board))


if __name__ == '__main__':
    unittest.main(verbosity=2)
