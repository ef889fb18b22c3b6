from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Sequence

from . import conditions
from .board import Board
from .errors import InvalidBoardShape
from .moves import clear, descend, initial_state, take_turn
from .outcome import Outcome
from .paths import Path
from .state import GameState

logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


class GameSession:
    """
    Owns the state of one game. Every operation builds the next state first and
    swaps it in with a single assignment, so a failed call leaves nothing
    half-applied. Listeners are called with the new state after each change;
    a listener that raises is logged and skipped, the change stands.

    Not thread-safe: callers sharing a session must serialise access.
    """

    def __init__(self, state: Optional[GameState] = None) -> None:
        self._state = state if state is not None else initial_state()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def board(self) -> Board:
        return self._state.board

    @property
    def next_player(self) -> str:
        return self._state.next_player

    @property
    def turn_path(self) -> Path:
        return self._state.turn_path

    @property
    def previous_turn(self) -> Optional[Path]:
        return self._state.previous_turn

    @property
    def outcome(self) -> Outcome:
        return self._state.outcome

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Registers listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, new_state: GameState) -> GameState:
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("Listener %r failed; state change kept", listener)
        return new_state

    def _apply(self, name: str, transition: Callable[[], GameState]) -> GameState:
        try:
            new_state = transition()
        except InvalidBoardShape:
            logger.exception("Board invariant broken during %s; state=%r", name, self._state)
            raise
        return self._commit(new_state)

    def take_turn(self, path: Sequence[int]) -> GameState:
        player = self._state.next_player
        new_state = self._apply("take_turn", lambda: take_turn(self._state, path))
        logger.debug("%s played %s; turn path now %s", player, list(path), list(new_state.turn_path))
        return new_state

    def descend(self) -> GameState:
        new_state = self._apply("descend", lambda: descend(self._state))
        logger.info("Descended to depth %d", new_state.depth)
        return new_state

    def reset(self) -> GameState:
        logger.info("Game reset")
        return self._apply("reset", initial_state)

    def clear(self) -> GameState:
        return self._apply("clear", lambda: clear(self._state))

    def force_condition(
        self,
        condition: str,
        depth: int,
        rng: Optional[random.Random] = None,
    ) -> GameState:
        """Development helper: replaces the board with one in the given condition."""
        logger.info("Forcing %s board at depth %d", condition, depth)
        return self._apply(
            "force_condition",
            lambda: conditions.force_condition(self._state, condition, depth, rng=rng),
        )
