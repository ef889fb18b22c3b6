import unittest

from game import (
    Board,
    CellOccupied,
    InvalidPath,
    O,
    X,
    check_path,
    empty_board,
    is_board,
    read_at,
    write_at,
)

_ = None
E1 = [_] * 9
E2 = [E1] * 9


class TestPathAddressing(unittest.TestCase):
    def setUp(self):
        self.nested = [
            E1, E1, E1,
            E1, E1, E1,
            E1, E1, [
                _, _, _,
                X, _, _,
                _, _, O,
            ],
        ]
        self.board = Board.from_nested(self.nested)

    def test_given_path_when_reading_then_nested_node_returned(self):
        self.assertEqual(read_at(self.board, (8, 3)), X)
        self.assertEqual(read_at(self.board, [8, 8]), O)
        self.assertIsNone(read_at(self.board, (0, 0)))
        self.assertEqual(read_at(self.board, (8,)), self.board[8])
        self.assertIs(read_at(self.board, ()), self.board)

    def test_given_bad_path_when_reading_then_invalid_path(self):
        with self.assertRaises(InvalidPath):
            read_at(self.board, (9,))
        with self.assertRaises(InvalidPath):
            read_at(self.board, (-1, 0))
        with self.assertRaises(InvalidPath):
            read_at(self.board, (8, 3, 0))  # below a leaf

    def test_given_path_when_checking_then_every_index_validated(self):
        self.assertEqual(check_path([8, 3]), (8, 3))
        self.assertEqual(check_path([]), ())
        for bad in ([9], [0, -3], [True], [1.5]):
            with self.assertRaises(InvalidPath):
                check_path(bad)

    def test_given_two_level_board_when_writing_then_only_target_changes(self):
        board = empty_board(2)
        new_board = write_at(board, (8, 3), X)
        expected = Board.from_nested(E2[:8] + [[_, _, _, X, _, _, _, _, _]])
        self.assertEqual(new_board, expected)
        self.assertTrue(is_board(new_board))

    def test_given_three_level_board_when_writing_then_nested_leaf_set(self):
        new_board = write_at(empty_board(3), (8, 8, 4), X)
        expected = Board.from_nested(
            [E2] * 8 + [[E1] * 8 + [[_, _, _, _, X, _, _, _, _]]]
        )
        self.assertEqual(new_board, expected)

    def test_given_board_when_writing_then_input_unchanged_and_siblings_shared(self):
        before = Board.from_nested(self.nested)
        new_board = write_at(self.board, (8, 0), O)
        self.assertEqual(self.board, before)
        self.assertEqual(self.board.to_nested(), self.nested)
        self.assertNotEqual(new_board, self.board)
        self.assertIs(new_board[0], self.board[0])
        self.assertEqual(read_at(new_board, (8, 0)), O)
        self.assertIsNone(read_at(self.board, (8, 0)))

    def test_given_taken_cell_when_writing_then_cell_occupied(self):
        with self.assertRaises(CellOccupied):
            write_at(self.board, (8, 3), O)

    def test_given_wrong_length_path_when_writing_then_invalid_path(self):
        with self.assertRaises(InvalidPath):
            write_at(self.board, (8,), X)  # ends on a sub-board
        with self.assertRaises(InvalidPath):
            write_at(empty_board(1), (0, 0), X)  # continues below a leaf
        with self.assertRaises(InvalidPath):
            write_at(self.board, (), X)
        with self.assertRaises(InvalidPath):
            write_at(self.board, (0, 9), X)

    def test_given_bad_mark_when_writing_then_value_error(self):
        with self.assertRaises(ValueError):
            write_at(self.board, (0, 0), None)


if __name__ == '__main__':
    unittest.main(verbosity=2)
