from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Tuple, Union

from .errors import InvalidBoardShape

Cell = Optional[str]  # None (empty), 'X', 'O'
EMPTY: Cell = None
X = 'X'
O = 'O'
PLAYERS: Tuple[str, str] = (X, O)

SIZE = 9  # 3x3, row-major


@dataclass(frozen=True)
class Board:
    """A 3x3 grid whose nine children are either all cells or all sub-boards."""
    cells: Tuple['Node', ...]

    def __post_init__(self) -> None:
        # Accept any sequence but always store an immutable tuple.
        if not isinstance(self.cells, tuple):
            object.__setattr__(self, 'cells', tuple(self.cells))

    def __len__(self) -> int:
        return len(self.cells)

    def __getitem__(self, index: int) -> 'Node':
        return self.cells[index]

    def __iter__(self) -> Iterator['Node']:
        return iter(self.cells)

    @property
    def depth(self) -> int:
        return depth_of(self)

    def replace(self, index: int, node: 'Node') -> 'Board':
        """Returns a copy with the child at index swapped for node."""
        return Board(self.cells[:index] + (node,) + self.cells[index + 1:])

    def to_nested(self) -> List[Any]:
        """Nested lists of None/'X'/'O', the JSON shape of a board."""
        return [c.to_nested() if isinstance(c, Board) else c for c in self.cells]

    @classmethod
    def from_nested(cls, value: Any) -> 'Board':
        """Builds a board from nested lists/tuples and validates its shape."""
        board = _build(value)
        assert_board(board)
        return board


Node = Union[Cell, Board]


def _build(value: Any) -> Node:
    if isinstance(value, Board) or is_cell(value):
        return value
    if isinstance(value, (list, tuple)):
        return Board(tuple(_build(v) for v in value))
    raise InvalidBoardShape('Unrecognised board value', context={'value': repr(value)})


def is_cell(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value in PLAYERS)


def _shape_depth(value: Any) -> Optional[int]:
    """Depth of a well-formed board, or None if value is not one."""
    if not isinstance(value, Board) or len(value.cells) != SIZE:
        return None
    if all(is_cell(c) for c in value.cells):
        return 1
    depths = {_shape_depth(c) for c in value.cells}
    if len(depths) != 1 or None in depths:
        return None
    return depths.pop() + 1


def is_board(value: Any) -> bool:
    """True if value has 9 children that are all cells or all boards of one depth."""
    return _shape_depth(value) is not None


def assert_board(value: Any) -> None:
    if not is_board(value):
        raise InvalidBoardShape('Board state is invalid', context={'value': repr(value)})


def _assert_level(board: Board) -> None:
    # One-node check for freshly rebuilt ancestors whose children were already valid.
    cells = board.cells
    if len(cells) != SIZE or not (
        all(is_cell(c) for c in cells) or all(isinstance(c, Board) for c in cells)
    ):
        raise InvalidBoardShape('Board level is invalid', context={'value': repr(board)})


def depth_of(board: Board) -> int:
    """Walks first children down to a cell: 1 for a plain grid, N for N levels."""
    if not isinstance(board, Board) or len(board.cells) != SIZE:
        raise InvalidBoardShape('Not a board', context={'value': repr(board)})
    depth = 1
    node = board.cells[0]
    while isinstance(node, Board):
        depth += 1
        node = node.cells[0]
    return depth


def empty_board(depth: int = 1) -> Board:
    if depth < 1:
        raise ValueError('Depth must be 1 or greater')
    if depth == 1:
        return Board((EMPTY,) * SIZE)
    child = empty_board(depth - 1)
    # Shared subtree is safe: boards are immutable.
    return Board((child,) * SIZE)


def clear_board(board: Board) -> Board:
    """Same shape as board with every leaf emptied."""
    return empty_board(depth_of(board))


def other_player(player: str) -> str:
    return O if player == X else X
