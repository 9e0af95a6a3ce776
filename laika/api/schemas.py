"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Game responses use the same layout as stored records (see
storage.records.SessionRecord).

Error Codes:
- GAME_NOT_FOUND: No game exists with that id
- GAME_CORRUPT: The stored game could not be read back
- STORAGE_UNAVAILABLE: Storage could not be read or written
- GAME_ALREADY_COMPLETE, BOARD_FULL, INVALID_POSITION, POSITION_OCCUPIED:
  the move was rejected
- MAX_PLAYERS_REACHED, DUPLICATE_PLAYER, UNKNOWN_PLAYER: player rejected
- NO_MOVES_AVAILABLE: the computer could not move (internal fault)
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..engine_core.errors import RejectKind
from ..storage.records import SessionRecord


# =============================================================================
# Enums
# =============================================================================

class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    GAME_CORRUPT = "GAME_CORRUPT"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    GAME_ALREADY_COMPLETE = "GAME_ALREADY_COMPLETE"
    BOARD_FULL = "BOARD_FULL"
    INVALID_POSITION = "INVALID_POSITION"
    POSITION_OCCUPIED = "POSITION_OCCUPIED"
    MAX_PLAYERS_REACHED = "MAX_PLAYERS_REACHED"
    DUPLICATE_PLAYER = "DUPLICATE_PLAYER"
    UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
    INVALID_PLAYER_ID = "INVALID_PLAYER_ID"
    NO_MOVES_AVAILABLE = "NO_MOVES_AVAILABLE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"

    @classmethod
    def from_reject(cls, kind: RejectKind) -> "ErrorCode":
        return cls[kind.name]


# =============================================================================
# Request Models
# =============================================================================

class StartGameRequest(BaseModel):
    """Request to start a new game against the computer."""
    player_id: str = Field(min_length=1, description="Identifier of the human player")
    move_position: Optional[int] = Field(
        None, description="Optional first move, 1-9 in row-major order"
    )


class UpdateGameRequest(BaseModel):
    """Request to play a move in an existing game."""
    player_id: str = Field(min_length=1, description="Identifier of the human player")
    move_position: int = Field(description="Position to play, 1-9 in row-major order")


# =============================================================================
# Response Models
# =============================================================================

class GameResponse(SessionRecord):
    """
    A full game: moves in play order, players in join order, status and
    winner (null until someone wins).
    """


class GameListResponse(BaseModel):
    """Ids of stored games."""
    games: list[str] = Field(default_factory=list)
    count: int = 0


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    service: str = "laika"
    version: str
