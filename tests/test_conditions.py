import json
import os
import random
import tempfile
import unittest

from fractal_core.conditions import (
    condition_of,
    enumerate_single_level_states,
    is_reachable,
    load_states,
    states_to_json,
)
from game import (
    Board,
    BoardCondition,
    O,
    X,
    GameState,
    depth_of,
    empty_board,
    evaluate,
    force_condition,
    generate_board,
    single_level_states,
)

_ = None


def is_board_empty(board):
    return all(is_board_empty(c) if isinstance(c, Board) else c is None for c in board.cells)


class TestSingleLevelStates(unittest.TestCase):
    def test_given_boards_when_checking_reachability_then_alternating_play_enforced(self):
        self.assertTrue(is_reachable(Board.from_nested([X, X, X, O, O, _, _, _, _])))
        self.assertTrue(is_reachable(Board.from_nested([_] * 9)))
        # O cannot move first
        self.assertFalse(is_reachable(Board.from_nested([O, _, _, _, _, _, _, _, _])))
        # Both players holding a line
        self.assertFalse(is_reachable(Board.from_nested([X, X, X, O, O, O, _, _, _])))
        # O won but X moved afterwards
        self.assertFalse(is_reachable(Board.from_nested([O, O, O, X, X, _, X, X, _])))
        # X won but O moved afterwards
        self.assertFalse(is_reachable(Board.from_nested([X, X, X, O, O, _, O, _, _])))

    def test_given_enumeration_when_bucketing_then_each_bucket_matches_its_condition(self):
        table = enumerate_single_level_states()
        self.assertEqual(set(table), set(BoardCondition))
        self.assertEqual(table[BoardCondition.EMPTY], (Board.from_nested([_] * 9),))
        self.assertEqual(len(table[BoardCondition.DRAWN]), 16)
        for condition, boards in table.items():
            self.assertTrue(boards)
            for board in boards:
                self.assertEqual(condition_of(board), condition)
                self.assertTrue(is_reachable(board))

    def test_given_written_table_when_loading_then_same_buckets(self):
        table = enumerate_single_level_states()
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'states.json')
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(states_to_json(table), f)
            loaded = load_states(path)
        self.assertEqual(loaded, table)

    def test_given_table_missing_condition_when_loading_then_value_error(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, 'states.json')
            with open(path, 'w', encoding='utf-8') as f:
                json.dump({'Empty': [[None] * 9]}, f)
            with self.assertRaises(ValueError):
                load_states(path)


class TestGenerateBoard(unittest.TestCase):
    def test_given_condition_and_depth_when_generating_then_board_matches(self):
        rng = random.Random(42)
        for condition in BoardCondition:
            for depth in (1, 2, 3):
                for _i in range(3):
                    board = generate_board(condition, depth, rng=rng)
                    self.assertEqual(depth_of(board), depth)
                    outcome = evaluate(board)
                    if condition == BoardCondition.EMPTY:
                        self.assertFalse(outcome.decided)
                        self.assertTrue(is_board_empty(board))
                    elif condition == BoardCondition.IN_PROGRESS:
                        self.assertFalse(outcome.decided)
                        self.assertFalse(is_board_empty(board))
                    elif condition == BoardCondition.DRAWN:
                        self.assertTrue(outcome.is_draw)
                    elif condition == BoardCondition.WON_X:
                        self.assertEqual(outcome.player, X)
                    else:
                        self.assertEqual(outcome.player, O)

    def test_given_same_seed_when_generating_then_same_board(self):
        a = generate_board(BoardCondition.IN_PROGRESS, 2, rng=random.Random(7))
        b = generate_board('InProgress', 2, rng=random.Random(7))
        self.assertEqual(a, b)

    def test_given_bad_arguments_when_generating_then_value_error(self):
        with self.assertRaises(ValueError):
            generate_board(BoardCondition.EMPTY, 0)
        with self.assertRaises(ValueError):
            generate_board('Sideways', 1)

    def test_given_state_when_forcing_condition_then_constraint_dropped(self):
        s = GameState(board=empty_board(2), next_player=O, turn_path=(3,), previous_turn=(8, 3))
        forced = force_condition(s, BoardCondition.WON_X, 1, rng=random.Random(3))
        self.assertEqual(forced.turn_path, ())
        self.assertIsNone(forced.previous_turn)
        self.assertEqual(forced.next_player, O)
        self.assertEqual(forced.outcome.player, X)

    def test_given_cache_when_reading_twice_then_same_table(self):
        self.assertIs(single_level_states(), single_level_states())


if __name__ == '__main__':
    unittest.main(verbosity=2)
