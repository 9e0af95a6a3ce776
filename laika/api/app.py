"""
FastAPI Application - REST API for Tic-Tac-Toe games.

Endpoints:
    POST   /api/v1/games            Start a game (optional first move)
    GET    /api/v1/games            List stored game ids
    GET    /api/v1/games/{id}       Get a game
    PUT    /api/v1/games/{id}       Play a move (computer replies)
    DELETE /api/v1/games/{id}       Delete a game
    GET    /health                  Health check

Move flow:
    1. The player's move is validated and committed
    2. If the game is not over, the computer replies in the same request
    3. The game is saved and returned in full

Handlers are plain functions (not async): storage does blocking file I/O,
and FastAPI runs sync handlers in its thread pool.
Every request is logged with its status and latency.

Run with:
    uvicorn --factory laika.api.app:create_app
"""

import logging
import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..bots import create_policy
from ..config import Config
from ..engine_core.errors import GameError, RejectKind, SelectionError
from ..session import SessionManager
from ..storage import (
    SessionCorrupt,
    SessionNotFound,
    StorageError,
    StorageUnavailable,
    create_backend,
)
from .schemas import (
    ErrorCode,
    ErrorResponse,
    GameListResponse,
    GameResponse,
    HealthResponse,
    StartGameRequest,
    UpdateGameRequest,
)

logger = logging.getLogger(__name__)

REJECT_STATUS = {
    RejectKind.GAME_ALREADY_COMPLETE: status.HTTP_409_CONFLICT,
    RejectKind.BOARD_FULL: status.HTTP_409_CONFLICT,
    RejectKind.INVALID_POSITION: status.HTTP_400_BAD_REQUEST,
    RejectKind.POSITION_OCCUPIED: status.HTTP_409_CONFLICT,
    RejectKind.MAX_PLAYERS_REACHED: status.HTTP_409_CONFLICT,
    RejectKind.DUPLICATE_PLAYER: status.HTTP_409_CONFLICT,
    RejectKind.UNKNOWN_PLAYER: status.HTTP_403_FORBIDDEN,
    RejectKind.INVALID_PLAYER_ID: status.HTTP_400_BAD_REQUEST,
    RejectKind.NO_MOVES_AVAILABLE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_app(manager: Optional[SessionManager] = None, config: Optional[Config] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        manager: Optional SessionManager (built from config if not provided)
        config: Optional Config (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    config = config or Config.from_env()
    if manager is None:
        manager = SessionManager(
            storage=create_backend(config),
            policy=create_policy(config.bot_policy, seed=config.bot_seed),
        )

    app = FastAPI(
        title="Laika Tic-Tac-Toe API",
        description="""
Play Tic-Tac-Toe against a deterministic computer opponent.

Positions are numbered 1-9, left to right and top to bottom.
Every successful call returns the whole game.

## Error Codes

| Code | Status | Description |
|------|--------|-------------|
| `GAME_NOT_FOUND` | 404 | No game with that id |
| `INVALID_POSITION` | 400 | Position outside 1-9 |
| `INVALID_PLAYER_ID` | 400 | Empty player id |
| `UNKNOWN_PLAYER` | 403 | Player is not in this game |
| `POSITION_OCCUPIED` | 409 | Cell already taken |
| `GAME_ALREADY_COMPLETE` | 409 | Game has finished |
| `GAME_CORRUPT` | 500 | Stored game cannot be read |
| `STORAGE_UNAVAILABLE` | 503 | Storage failed |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %d in %.4fs",
            request.method,
            request.url.path,
            response.status_code,
            time.perf_counter() - started,
        )
        return response

    app.state.manager = manager

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(GameError)
    def handle_game_error(request: Request, exc: GameError) -> JSONResponse:
        if isinstance(exc, SelectionError):
            logger.error("Computer move failed on %s: %s", request.url.path, exc.message)
        return make_error_response(
            ErrorCode.from_reject(exc.kind),
            exc.message,
            status_code=REJECT_STATUS[exc.kind],
            details={"reason": exc.kind.value},
        )

    @app.exception_handler(RequestValidationError)
    def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Invalid request body",
            422,
            {"errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StorageError)
    def handle_storage_error(request: Request, exc: StorageError) -> JSONResponse:
        details = {"game_id": exc.session_id} if exc.session_id else None
        if isinstance(exc, SessionNotFound):
            return make_error_response(
                ErrorCode.GAME_NOT_FOUND, str(exc), status.HTTP_404_NOT_FOUND, details
            )
        if isinstance(exc, SessionCorrupt):
            logger.error("Corrupt game record: %s", exc)
            return make_error_response(
                ErrorCode.GAME_CORRUPT, str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR, details
            )
        if isinstance(exc, StorageUnavailable):
            logger.error("Storage unavailable: %s", exc)
            return make_error_response(
                ErrorCode.STORAGE_UNAVAILABLE, str(exc), status.HTTP_503_SERVICE_UNAVAILABLE, details
            )
        logger.error("Storage error: %s", exc)
        return make_error_response(
            ErrorCode.INTERNAL_ERROR, str(exc), status.HTTP_500_INTERNAL_SERVER_ERROR, details
        )

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=GameResponse,
        status_code=status.HTTP_201_CREATED,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid first move"},
            503: {"model": ErrorResponse, "description": "Storage unavailable"},
        },
        tags=["Games"],
        summary="Start a new game",
    )
    def start_game(body: StartGameRequest) -> GameResponse:
        """
        Start a game against the computer.

        If `move_position` is given it is played as the first move and the
        computer's reply is included in the response.
        """
        session = manager.start_game(body.player_id, body.move_position)
        return GameResponse.from_session(session)

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List stored games",
    )
    def list_games() -> GameListResponse:
        games = manager.list_games()
        return GameListResponse(games=games, count=len(games))

    @app.get(
        "/api/v1/games/{game_id}",
        response_model=GameResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get a game",
    )
    def get_game(game_id: str) -> GameResponse:
        """Get the full state of a game."""
        return GameResponse.from_session(manager.get_game(game_id))

    @app.put(
        "/api/v1/games/{game_id}",
        response_model=GameResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Invalid position"},
            403: {"model": ErrorResponse, "description": "Player not in game"},
            404: {"model": ErrorResponse, "description": "Game not found"},
            409: {"model": ErrorResponse, "description": "Move not allowed"},
        },
        tags=["Games"],
        summary="Play a move",
    )
    def update_game(game_id: str, body: UpdateGameRequest) -> GameResponse:
        """
        Play a move for `player_id`.

        Unless the move ends the game, the computer replies before the
        response is returned.
        """
        session = manager.play_move(game_id, body.player_id, body.move_position)
        return GameResponse.from_session(session)

    @app.delete(
        "/api/v1/games/{game_id}",
        status_code=status.HTTP_204_NO_CONTENT,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Delete a game",
    )
    def delete_game(game_id: str) -> None:
        manager.delete_game(game_id)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(version=__version__)

    @app.get("/", tags=["System"])
    def root():
        """Root endpoint with API info."""
        return {
            "name": "Laika Tic-Tac-Toe API",
            "version": __version__,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app
