from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .board import Board, EMPTY, Node, SIZE, _assert_level
from .errors import InvalidBoardShape

WIN = 'win'
DRAW = 'draw'
IN_PROGRESS = 'in_progress'

# Resolved value of a drawn sub-board: cannot complete a line, is not open.
BLOCKED = '#'

# The minimal forward neighbours of each cell that cover all 8 lines.
# For a pair (i, j) the third cell of the line is j + (j - i).
NEIGHBOURS: Dict[int, Tuple[int, ...]] = {
    0: (1, 3, 4), 1: (4,), 2: (4, 5),
    3: (4,), 4: (), 5: (),
    6: (7,), 7: (), 8: (),
}


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating a board: a win with its line, a draw, or still open."""
    status: str
    player: Optional[str] = None
    cells: Optional[Tuple[int, int, int]] = None

    @classmethod
    def win(cls, player: str, cells: Tuple[int, int, int]) -> 'Outcome':
        return cls(WIN, player, cells)

    @property
    def is_win(self) -> bool:
        return self.status == WIN

    @property
    def is_draw(self) -> bool:
        return self.status == DRAW

    @property
    def decided(self) -> bool:
        return self.status != IN_PROGRESS

    def to_json(self) -> Dict[str, object]:
        return {
            "status": self.status,
            "player": self.player,
            "cells": list(self.cells) if self.cells is not None else None,
        }


DRAWN = Outcome(DRAW)
OPEN = Outcome(IN_PROGRESS)


def resolve(node: Node) -> Optional[str]:
    """The cell-equivalent value a child contributes to its parent's lines."""
    if not isinstance(node, Board):
        return node
    outcome = evaluate(node)
    if outcome.is_win:
        return outcome.player
    if outcome.is_draw:
        return BLOCKED
    return EMPTY


def evaluate(board: Board) -> Outcome:
    """
    Determines win / draw / in-progress for a board of any depth.
    Sub-boards count as their winner's mark, a drawn sub-board blocks every line
    through it, and an undecided sub-board is open like an empty cell.
    When several lines are complete the first one in scan order is reported.
    """
    if not isinstance(board, Board):
        raise InvalidBoardShape('Not a board', context={'value': repr(board)})
    _assert_level(board)

    resolved: List[Optional[str]] = [resolve(c) for c in board.cells]

    for i in range(SIZE):
        value = resolved[i]
        if value is EMPTY or value == BLOCKED:
            continue
        for j in NEIGHBOURS[i]:
            if resolved[j] != value:
                continue
            k = j + (j - i)
            if resolved[k] == value:
                return Outcome.win(value, (i, j, k))

    if any(v is EMPTY for v in resolved):
        return OPEN
    return DRAWN


def check_lines(board: Board) -> List[Tuple[str, Tuple[int, int, int]]]:
    """Every complete line at this level as (player, cells), in row/column/diagonal order."""
    lines = [
        (0, 1, 2), (3, 4, 5), (6, 7, 8),
        (0, 3, 6), (1, 4, 7), (2, 5, 8),
        (0, 4, 8), (2, 4, 6),
    ]
    resolved = [resolve(c) for c in board.cells]
    found: List[Tuple[str, Tuple[int, int, int]]] = []
    for a, b, c in lines:
        value = resolved[a]
        if value is EMPTY or value == BLOCKED:
            continue
        if value == resolved[b] == resolved[c]:
            found.append((value, (a, b, c)))
    return found
