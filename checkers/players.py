"""
Move sources for a driver loop: humans, remote peers and scripted sequences.

The rules engine never calls players itself. A driver asks the player whose
turn it is for a move and hands it to GameState.apply_move. Remote peers
instead push whole serialized states, applied through `sync`.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Iterable, Optional

from checkers.engine import move_to_str
from checkers.game_state import GameState
from checkers.types import Move

logger = logging.getLogger(__name__)


class PlayerBase(ABC):
    """Abstract interface for anything that proposes moves."""

    @property
    @abstractmethod
    def is_human(self) -> bool:  # pragma: no cover
        raise NotImplementedError

    @abstractmethod
    def propose(self, game: GameState) -> Optional[Move]:  # pragma: no cover
        """Given a snapshot of the game, optionally produce a move."""
        raise NotImplementedError

    def sync(self, game: GameState) -> bool:
        """Bring `game` up to date with state held outside it. Returns True if it changed."""
        return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(is_human={self.is_human})"


class HumanPlayer(PlayerBase):
    """Moves arrive from a UI via `submit` and are proposed in order."""

    def __init__(self) -> None:
        self._pending: Deque[Move] = deque()

    @property
    def is_human(self) -> bool:
        return True

    def submit(self, move: Move) -> None:
        self._pending.append(move)

    def propose(self, game: GameState) -> Optional[Move]:
        return self._pending.popleft() if self._pending else None


class NetworkPlayer(PlayerBase):
    """A remote peer. It sends whole serialized game states instead of moves.

    States received with `receive` replace the local game on the next
    `sync`, so the peer's own client stays authoritative for its turns.
    """

    def __init__(self) -> None:
        self._pending: Deque[str] = deque()

    @property
    def is_human(self) -> bool:
        return False

    def receive(self, state: str) -> bool:
        """Queue a serialized state from the peer. Returns False for an empty message."""
        if not state or not state.strip():
            logger.warning("Ignoring empty state from peer")
            return False
        self._pending.append(state.strip())
        return True

    def sync(self, game: GameState) -> bool:
        if not self._pending:
            return False
        game.deserialize(self._pending.popleft())
        logger.debug("Replaced local state from peer; %s to move", game.turn)
        return True

    def propose(self, game: GameState) -> Optional[Move]:
        return None


class ScriptedPlayer(PlayerBase):
    """Replays a fixed sequence of moves."""

    def __init__(self, moves: Iterable[Move]) -> None:
        self._moves: Deque[Move] = deque(moves)

    @property
    def is_human(self) -> bool:
        return False

    @property
    def remaining(self) -> int:
        return len(self._moves)

    def propose(self, game: GameState) -> Optional[Move]:
        return self._moves.popleft() if self._moves else None


def play_turn(game: GameState, player: PlayerBase) -> bool:
    """Sync from `player`, or ask it for a move and apply it. Returns True if the game changed."""
    if player.sync(game):
        return True
    if game.is_game_over():
        return False
    move = player.propose(game.copy())
    if move is None:
        return False
    if not game.apply_move(move.start, move.end):
        logger.info("%r proposed illegal move %s", player, move_to_str(move))
        return False
    return True
