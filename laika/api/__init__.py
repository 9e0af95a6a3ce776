"""
API Module - REST interface.

Exposes the session manager over HTTP:
1. Start a game (optionally with the first move)
2. Play moves; the computer replies in the same request
3. Fetch, list and delete stored games
"""

from .schemas import (
    # Requests
    StartGameRequest,
    UpdateGameRequest,
    # Responses
    GameResponse,
    GameListResponse,
    ErrorResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)
from .app import create_app

__all__ = [
    "StartGameRequest",
    "UpdateGameRequest",
    "GameResponse",
    "GameListResponse",
    "ErrorResponse",
    "HealthResponse",
    "ErrorCode",
    "create_app",
]
