"""
Engine errors.

Every rejection carries a RejectKind so callers can map it to a response
without parsing messages. A raised GameError never leaves a half-applied
session behind: validation always runs before any state change.
"""

from __future__ import annotations
from enum import Enum


class RejectKind(Enum):
    """Why the engine refused an operation."""
    # Move validation
    GAME_ALREADY_COMPLETE = "GameAlreadyComplete"
    BOARD_FULL = "BoardFull"
    INVALID_POSITION = "InvalidPosition"
    POSITION_OCCUPIED = "PositionOccupied"

    # Player capacity and identity
    MAX_PLAYERS_REACHED = "MaxPlayersReached"
    DUPLICATE_PLAYER = "DuplicatePlayer"
    UNKNOWN_PLAYER = "UnknownPlayer"
    INVALID_PLAYER_ID = "InvalidPlayerId"

    # Computer move selection
    NO_MOVES_AVAILABLE = "NoMovesAvailable"


REJECT_MESSAGES = {
    RejectKind.GAME_ALREADY_COMPLETE: "Game is already complete",
    RejectKind.BOARD_FULL: "Board is full",
    RejectKind.INVALID_POSITION: "Position must be between 1 and 9",
    RejectKind.POSITION_OCCUPIED: "Position is already occupied",
    RejectKind.MAX_PLAYERS_REACHED: "Game already has two players",
    RejectKind.DUPLICATE_PLAYER: "Player has already joined this game",
    RejectKind.UNKNOWN_PLAYER: "Player is not part of this game",
    RejectKind.INVALID_PLAYER_ID: "Player id must not be empty",
    RejectKind.NO_MOVES_AVAILABLE: "No moves available for the computer",
}


class GameError(Exception):
    """Base class for engine rejections."""

    def __init__(self, kind: RejectKind, message: str | None = None):
        self.kind = kind
        self.message = message or REJECT_MESSAGES[kind]
        super().__init__(self.message)


class MoveRejected(GameError):
    """A candidate move failed validation."""


class PlayerRejected(GameError):
    """A player could not join, or is not part of, the session."""


class SelectionError(GameError):
    """The computer could not produce a legal move. Always an internal fault."""
