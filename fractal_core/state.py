from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .board import Board, X, depth_of, other_player
from .outcome import Outcome, evaluate
from .paths import Path


@dataclass(frozen=True)
class GameState:
    """Board plus whose turn it is, where they must play, and the last move."""
    board: Board
    next_player: str = X
    turn_path: Path = ()
    previous_turn: Optional[Path] = None

    @property
    def depth(self) -> int:
        return depth_of(self.board)

    @property
    def outcome(self) -> Outcome:
        return evaluate(self.board)

    def is_decided(self) -> bool:
        return self.outcome.decided

    def other_player(self) -> str:
        return other_player(self.next_player)
