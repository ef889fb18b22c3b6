"""
Error hierarchy for the fractal tic-tac-toe engine.

All engine failures inherit from FractalError so callers can catch them in one
place. Every error carries a machine-readable code for the JSON service.

- InvalidBoardShape: a board broke the 9-children / homogeneity invariant.
  Indicates a bug; callers should surface it loudly.
- InvalidPath: a path points outside the board or through a leaf.
- CellOccupied: a write targeted a leaf that already holds a mark.
- IllegalMove: the move breaks the locality constraint or the game state.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "FractalError",
    "InvalidBoardShape",
    "InvalidPath",
    "CellOccupied",
    "IllegalMove",
]


class FractalError(Exception):
    """Base exception for all engine errors."""
    code: str = "FRACTAL_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dict for JSON responses."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


class InvalidBoardShape(FractalError):
    code: str = "INVALID_BOARD_SHAPE"


class InvalidPath(FractalError):
    code: str = "INVALID_PATH"


class CellOccupied(FractalError):
    code: str = "CELL_OCCUPIED"


class IllegalMove(FractalError):
    code: str = "ILLEGAL_MOVE"
