"""
Move Validator - Checks a candidate move before it is committed.

Checks run in a fixed order and the first failure wins:
1. Game must not be complete
2. Board must not be full
3. Position must be on the board
4. Position must not be occupied

Validation only looks at committed moves. It never changes the session.
"""

from __future__ import annotations

from .board import POSITIONS, is_on_board
from .errors import RejectKind
from .state import MAX_MOVES, Move, Session, Status


def validate_move(session: Session, move: Move) -> RejectKind | None:
    """
    Validate a candidate move against the current session.

    Returns the reason for rejection, or None if the move is legal.
    """
    if session.status == Status.COMPLETE:
        return RejectKind.GAME_ALREADY_COMPLETE

    if len(session.moves) >= MAX_MOVES:
        return RejectKind.BOARD_FULL

    if not is_on_board(move.position):
        return RejectKind.INVALID_POSITION

    if move.position in occupied_positions(session):
        return RejectKind.POSITION_OCCUPIED

    return None


def occupied_positions(session: Session) -> set[int]:
    """Positions taken by committed moves."""
    return {move.position for move in session.moves}


def empty_positions(session: Session) -> list[int]:
    """Open positions in ascending order."""
    taken = occupied_positions(session)
    return [p for p in POSITIONS if p not in taken]
