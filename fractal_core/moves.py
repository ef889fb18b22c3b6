from __future__ import annotations

from dataclasses import replace
from typing import Iterator, List, Sequence

from .board import Board, EMPTY, Node, X, assert_board, clear_board, empty_board
from .errors import IllegalMove
from .locality import first_decided_prefix, is_turn_legal, next_turn_path
from .outcome import evaluate
from .paths import Path, check_path, write_at
from .state import GameState

CENTRE = 4


def initial_state(depth: int = 1) -> GameState:
    """A fresh game: empty board of the given depth, X to move, no constraint."""
    return GameState(board=empty_board(depth), next_player=X, turn_path=(), previous_turn=None)


def take_turn(state: GameState, path: Sequence[int]) -> GameState:
    """Places the next player's mark at path and returns the following state."""
    move: Path = tuple(path)
    if state.is_decided():
        raise IllegalMove('Game is already decided', context={'path': list(move)})
    if not is_turn_legal(move, state.turn_path):
        raise IllegalMove(
            'Attempted to take turn in invalid cell',
            context={
                'next_player': state.next_player,
                'path': list(move),
                'turn_path': list(state.turn_path),
            },
        )

    new_board = write_at(state.board, move, state.next_player)

    decided = first_decided_prefix(state.board, move)
    if decided is not None:
        raise IllegalMove(
            'Attempted to take turn in a decided sub-board',
            context={'path': list(move), 'decided': list(decided)},
        )

    return GameState(
        board=new_board,
        next_player=state.other_player(),
        turn_path=next_turn_path(move, new_board),
        previous_turn=move,
    )


def descend(state: GameState) -> GameState:
    """
    Nests a decided board one level deeper so play can continue.
    A won board is embedded at the slot of the last leaf index played; a drawn
    board is discarded and every slot starts empty.
    """
    outcome = state.outcome
    if not outcome.decided:
        raise IllegalMove('Cannot descend while the game is in progress')

    empty = clear_board(state.board)
    if outcome.is_draw:
        cells = (empty,) * 9
    else:
        slot = check_path(state.previous_turn)[-1] if state.previous_turn else CENTRE
        cells = tuple(state.board if i == slot else empty for i in range(9))

    new_board = Board(cells)
    assert_board(new_board)
    return replace(state, board=new_board, turn_path=())


def clear(state: GameState) -> GameState:
    """Empties every leaf but keeps the current depth."""
    return initial_state(state.depth)


def _open_leaves(node: Node, prefix: Path) -> Iterator[Path]:
    if isinstance(node, Board):
        if prefix and evaluate(node).decided:
            return
        for i, child in enumerate(node.cells):
            yield from _open_leaves(child, prefix + (i,))
    elif node is EMPTY:
        yield prefix


def legal_moves(state: GameState) -> List[Path]:
    """Every leaf path take_turn would accept, in lexicographic order."""
    if state.is_decided():
        return []
    return [p for p in _open_leaves(state.board, ()) if is_turn_legal(p, state.turn_path)]
