from __future__ import annotations

from typing import Optional, Sequence

from .board import Board
from .outcome import evaluate
from .paths import Path, read_at


def is_turn_legal(path: Sequence[int], turn_path: Sequence[int]) -> bool:
    """
    A move is legal if it agrees with the turn path at every level both share.
    An empty turn path allows any location.
    """
    return all(p == t for p, t in zip(path, turn_path))


def _decided_within(board: Board, path: Sequence[int], stop: int) -> Optional[Path]:
    for n in range(1, stop + 1):
        prefix = tuple(path[:n])
        node = read_at(board, prefix)
        if isinstance(node, Board) and evaluate(node).decided:
            return prefix
    return None


def first_decided_prefix(board: Board, path: Sequence[int]) -> Optional[Path]:
    """
    Shortest prefix of a leaf path naming a sub-board that is already won or
    drawn, or None. The root and the leaf itself are not considered.
    """
    return _decided_within(board, path, len(path) - 1)


def next_turn_path(path: Sequence[int], board: Board) -> Path:
    """
    Locality constraint for the opponent after path was played on board.

    The forced sub-board keeps every index above the move's parent board and
    replaces the parent's index by the leaf index just played. When that
    sub-board, or one enclosing it, is already decided the next move is free.
    """
    if len(path) <= 1:
        return ()
    target = tuple(path[:-2]) + (path[-1],)
    if _decided_within(board, target, len(target)) is not None:
        return ()
    return target
