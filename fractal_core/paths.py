from __future__ import annotations

from typing import Sequence, Tuple

from .board import Board, EMPTY, Node, PLAYERS, SIZE, _assert_level
from .errors import CellOccupied, InvalidPath

Path = Tuple[int, ...]


def _check_index(index: object, path: Sequence[int]) -> int:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < SIZE:
        raise InvalidPath('Path index out of range', context={'path': list(path), 'index': index})
    return index


def check_path(path: Sequence[int]) -> Path:
    """Validates every index of path without following it."""
    return tuple(_check_index(i, path) for i in path)


def read_at(board: Board, path: Sequence[int]) -> Node:
    """Follows path from the root; an empty path returns the root itself."""
    node: Node = board
    for level, index in enumerate(path):
        if not isinstance(node, Board):
            raise InvalidPath(
                'Path continues below a leaf cell',
                context={'path': list(path), 'level': level},
            )
        node = node.cells[_check_index(index, path)]
    return node


def write_at(board: Board, path: Sequence[int], mark: str) -> Board:
    """
    Returns a new board with the leaf at path set to mark. The input is never
    modified; untouched siblings are shared with it.
    """
    if mark not in PLAYERS:
        raise ValueError(f'Invalid mark: {mark!r}')
    if len(path) == 0:
        raise InvalidPath('Path cannot be empty', context={'path': []})
    return _write(board, tuple(path), 0, mark)


def _write(board: Board, path: Path, level: int, mark: str) -> Board:
    if not isinstance(board, Board):
        raise InvalidPath(
            'Attempted to set nested state for non-nested cell',
            context={'path': list(path), 'level': level},
        )
    i = _check_index(path[level], path)
    target = board.cells[i]

    if level == len(path) - 1:
        if isinstance(target, Board):
            raise InvalidPath(
                'Path ends above the leaf level',
                context={'path': list(path), 'level': level},
            )
        if target is not EMPTY:
            raise CellOccupied(
                'Attempted to set state for non-empty cell',
                context={'path': list(path), 'cell': target, 'mark': mark},
            )
        new_board = board.replace(i, mark)
    else:
        new_board = board.replace(i, _write(target, path, level + 1, mark))

    _assert_level(new_board)
    return new_board
