from __future__ import annotations

# Facade module that re-exports the fractal tic-tac-toe engine.
# Used by the Flask app, tools and tests.
# Single-responsibility modules live under fractal_core/*.

from fractal_core.board import (  # noqa: F401
    Board,
    Cell,
    EMPTY,
    Node,
    O,
    PLAYERS,
    X,
    assert_board,
    clear_board,
    depth_of,
    empty_board,
    is_board,
    is_cell,
    other_player,
)
from fractal_core.errors import (  # noqa: F401
    CellOccupied,
    FractalError,
    IllegalMove,
    InvalidBoardShape,
    InvalidPath,
)
from fractal_core.outcome import (  # noqa: F401
    DRAW,
    IN_PROGRESS,
    WIN,
    Outcome,
    check_lines,
    evaluate,
    resolve,
)
from fractal_core.paths import Path, check_path, read_at, write_at  # noqa: F401
from fractal_core.locality import (  # noqa: F401
    first_decided_prefix,
    is_turn_legal,
    next_turn_path,
)
from fractal_core.state import GameState  # noqa: F401
from fractal_core.moves import (  # noqa: F401
    clear,
    descend,
    initial_state,
    legal_moves,
    take_turn,
)
from fractal_core.session import GameSession  # noqa: F401
from fractal_core.conditions import (  # noqa: F401
    BoardCondition,
    force_condition,
    generate_board,
    single_level_states,
)
