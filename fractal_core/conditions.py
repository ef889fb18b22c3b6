"""
Development helpers to put a game into a chosen condition at any depth.

All single-level boards reachable by alternating play (X first) are enumerated
once and bucketed by condition. Deeper boards are composed from those buckets:
every X mark becomes a sub-board won by X, every O mark one won by O, and every
empty cell an empty or in-progress sub-board, so the composed board keeps the
condition of the single-level board it was built from.

The table can also be loaded from a JSON file written by
tools/generate_board_states.py (set FRACTAL_TTT_STATES to its path).
"""
from __future__ import annotations

import itertools
import json
import os
import random
from dataclasses import replace
from enum import Enum
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from .board import Board, EMPTY, O, X, assert_board
from .outcome import check_lines, evaluate
from .state import GameState


class BoardCondition(str, Enum):
    EMPTY = 'Empty'
    IN_PROGRESS = 'InProgress'
    DRAWN = 'Drawn'
    WON_X = 'WonX'
    WON_O = 'WonO'


StateTable = Dict[BoardCondition, Tuple[Board, ...]]


def condition_of(board: Board) -> BoardCondition:
    outcome = evaluate(board)
    if outcome.is_draw:
        return BoardCondition.DRAWN
    if outcome.is_win:
        return BoardCondition.WON_X if outcome.player == X else BoardCondition.WON_O
    if all(c is EMPTY for c in board.cells):
        return BoardCondition.EMPTY
    return BoardCondition.IN_PROGRESS


def is_reachable(board: Board) -> bool:
    """Could this single-level board arise from alternating play starting with X?"""
    x_count = sum(1 for c in board.cells if c == X)
    o_count = sum(1 for c in board.cells if c == O)
    if x_count not in (o_count, o_count + 1):
        return False
    winners = {player for player, _ in check_lines(board)}
    if len(winners) > 1:
        return False
    if X in winners and x_count != o_count + 1:
        return False
    if O in winners and x_count != o_count:
        return False
    return True


def enumerate_single_level_states() -> StateTable:
    """Brute-force all 3^9 single-level boards, keep reachable ones, bucket by condition."""
    buckets: Dict[BoardCondition, List[Board]] = {c: [] for c in BoardCondition}
    for cells in itertools.product((EMPTY, X, O), repeat=9):
        board = Board(cells)
        if is_reachable(board):
            buckets[condition_of(board)].append(board)
    return {c: tuple(boards) for c, boards in buckets.items()}


def load_states(path: str) -> StateTable:
    with open(path, 'r', encoding='utf-8') as f:
        raw = json.load(f)
    table: StateTable = {}
    for condition in BoardCondition:
        boards = tuple(Board.from_nested(b) for b in raw.get(condition.value, []))
        if not boards:
            raise ValueError(f'No boards for condition {condition.value} in {path}')
        table[condition] = boards
    return table


def states_to_json(table: StateTable) -> Dict[str, List[list]]:
    return {c.value: [b.to_nested() for b in boards] for c, boards in table.items()}


@lru_cache(maxsize=1)
def single_level_states() -> StateTable:
    path = os.getenv('FRACTAL_TTT_STATES')
    if path:
        return load_states(path)
    return enumerate_single_level_states()


_OPEN_CONDITIONS = (BoardCondition.EMPTY, BoardCondition.IN_PROGRESS)


def generate_board(
    condition: BoardCondition,
    depth: int,
    rng: Optional[random.Random] = None,
) -> Board:
    """A random board of the given depth that evaluates to condition."""
    if depth < 1:
        raise ValueError('Depth must be 1 or greater')
    condition = BoardCondition(condition)
    rng = rng or random.Random()

    base = rng.choice(single_level_states()[condition])
    if depth == 1:
        return base

    children = []
    for cell in base.cells:
        if cell == X:
            children.append(generate_board(BoardCondition.WON_X, depth - 1, rng))
        elif cell == O:
            children.append(generate_board(BoardCondition.WON_O, depth - 1, rng))
        else:
            sub = condition if condition == BoardCondition.EMPTY else rng.choice(_OPEN_CONDITIONS)
            children.append(generate_board(sub, depth - 1, rng))

    board = Board(tuple(children))
    assert_board(board)
    return board


def force_condition(
    state: GameState,
    condition: BoardCondition,
    depth: int,
    rng: Optional[random.Random] = None,
) -> GameState:
    """Replaces the board; the move constraint and last move no longer apply."""
    board = generate_board(condition, depth, rng=rng)
    return replace(state, board=board, turn_path=(), previous_turn=None)
