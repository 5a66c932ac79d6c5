import unittest

from blockfall.game import Board, Piece, TetrominoKind


def empty_rows(n, width=10):
    return ["." * width] * n


class TestPlacement(unittest.TestCase):
    def test_given_negative_anchor_when_only_empty_mask_cells_outside_then_placeable(self):
        board = Board(10, 20)
        # I in state 0 occupies the second row of its box
        self.assertTrue(board.can_place(Piece(TetrominoKind.I, 0, row=-1, col=0)))
        self.assertFalse(board.can_place(Piece(TetrominoKind.I, 0, row=-2, col=0)))
        # vertical I occupies column 2 of its box
        self.assertTrue(board.can_place(Piece(TetrominoKind.I, 1, row=0, col=-2)))
        self.assertFalse(board.can_place(Piece(TetrominoKind.I, 1, row=0, col=-3)))

    def test_given_bottom_and_right_edges_when_checking_then_out_of_range_rejected(self):
        board = Board(10, 20)
        self.assertTrue(board.can_place(Piece(TetrominoKind.O, 0, 18, 8)))
        self.assertFalse(board.can_place(Piece(TetrominoKind.O, 0, 19, 8)))
        self.assertFalse(board.can_place(Piece(TetrominoKind.O, 0, 18, 9)))

    def test_given_locked_piece_when_checking_same_position_then_not_placeable(self):
        board = Board(10, 20)
        piece = Piece(TetrominoKind.T, 2, 10, 3)
        self.assertTrue(board.can_place(piece))
        board.lock(piece)
        self.assertFalse(board.can_place(piece))
        for r, c in piece.cells():
            self.assertEqual(board.cell(r, c), TetrominoKind.T)

    def test_given_blocked_column_when_sliding_right_then_legal_prefix_then_illegal(self):
        board = Board.from_rows(empty_rows(18) + [".........J", ".........J"])
        legal = [board.can_place(Piece(TetrominoKind.O, 0, 18, col)) for col in range(0, 10)]
        first_illegal = legal.index(False)
        self.assertEqual(first_illegal, 8)
        self.assertTrue(all(legal[:first_illegal]))
        self.assertFalse(any(legal[first_illegal:]))

    def test_given_occupied_cells_when_locking_then_assertion_error(self):
        board = Board(10, 20)
        piece = Piece(TetrominoKind.O, 0, 0, 0)
        board.lock(piece)
        with self.assertRaises(AssertionError):
            board.lock(piece)
        with self.assertRaises(AssertionError):
            board.lock(Piece(TetrominoKind.O, 0, 19, 0))

    def test_given_out_of_range_cell_when_reading_then_assertion_error(self):
        board = Board(10, 20)
        self.assertIsNone(board.cell(19, 9))
        with self.assertRaises(AssertionError):
            board.cell(20, 0)


class TestLineClears(unittest.TestCase):
    def test_given_row_with_gap_when_filled_then_detected_and_cleared(self):
        board = Board.from_rows(empty_rows(19) + ["JJJJJJJ..."])
        board.lock(Piece(TetrominoKind.O, 0, 18, 7))
        self.assertEqual(board.detect_full_rows(), [])

        board.lock(Piece(TetrominoKind.I, 1, 16, 7))
        self.assertEqual(board.detect_full_rows(), [19])
        row_18_before = board.to_rows()[18]

        self.assertEqual(board.clear_rows([19]), 1)
        rows = board.to_rows()
        self.assertEqual(rows[19], row_18_before)
        self.assertEqual(rows[19], ".......OOI")
        self.assertEqual(rows[0], "..........")

    def test_given_non_adjacent_full_rows_when_cleared_then_order_preserved(self):
        board = Board.from_rows(empty_rows(15) + [
            ".....T....",
            ".....T....",
            "SSSSSSSSSS",
            "ZZZZZ.....",
            "LLLLLLLLLL",
        ])
        occupied_before = board.occupied_rows()
        full = board.detect_full_rows()
        self.assertEqual(full, [17, 19])

        self.assertEqual(board.clear_rows(full), 2)
        self.assertEqual(board.occupied_rows(), occupied_before - 2)
        self.assertEqual(board.to_rows()[15:], [
            "..........",
            "..........",
            ".....T....",
            ".....T....",
            "ZZZZZ.....",
        ])

    def test_given_rows_out_of_order_when_cleared_then_same_result_as_sorted(self):
        layout = empty_rows(16) + ["TTTTTTTTTT", "O.........", "IIIIIIIIII", "J........."]
        a = Board.from_rows(layout)
        b = Board.from_rows(layout)
        a.clear_rows([16, 18])
        b.clear_rows([18, 16])
        self.assertEqual(a, b)
        self.assertEqual(a.to_rows()[18:], ["O.........", "J........."])

    def test_given_row_not_full_when_clearing_then_assertion_error(self):
        board = Board.from_rows(empty_rows(19) + ["IIIIIIIII."])
        with self.assertRaises(AssertionError):
            board.clear_rows([19])
        with self.assertRaises(AssertionError):
            board.clear_rows([20])

    def test_given_block_in_row_zero_when_checking_top_then_blocked(self):
        board = Board(10, 20)
        self.assertFalse(board.is_top_row_blocked())
        board.lock(Piece(TetrominoKind.O, 0, 1, 0))
        self.assertFalse(board.is_top_row_blocked())
        board.lock(Piece(TetrominoKind.I, 0, -1, 4))
        self.assertTrue(board.is_top_row_blocked())


class TestBoardHelpers(unittest.TestCase):
    def test_given_board_when_copied_then_independent(self):
        board = Board(10, 20)
        clone = board.copy()
        board.lock(Piece(TetrominoKind.S, 0, 0, 0))
        self.assertNotEqual(board, clone)
        self.assertEqual(clone.occupied_rows(), 0)

    def test_given_rows_of_wrong_width_when_parsing_then_assertion_error(self):
        with self.assertRaises(AssertionError):
            Board.from_rows(["....", "..."])

    def test_board_is_only_emptied_by_clearing_rows(self):
        # A fresh session builds a fresh board; there is no in-place wipe
        self.assertFalse(hasattr(Board, "reset"))


if __name__ == "__main__":
    unittest.main()
