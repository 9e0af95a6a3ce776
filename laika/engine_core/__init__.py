"""
Engine Core - Deterministic Tic-Tac-Toe state management.

The engine:
1. Holds the Session aggregate (players, moves, status, winner)
2. Validates candidate moves
3. Commits moves via the reducer
4. Detects wins and draws after every commit
"""

from .state import Session, Move, Player, Human, Computer, Status, check_invariants
from .errors import RejectKind, GameError, MoveRejected, PlayerRejected, SelectionError
from .validator import validate_move, occupied_positions, empty_positions
from .outcome import Outcome, OutcomeKind, evaluate, winning_line
from .reducer import Reducer, MoveResult, commit, finalize, apply_move

__all__ = [
    "Session",
    "Move",
    "Player",
    "Human",
    "Computer",
    "Status",
    "check_invariants",
    "RejectKind",
    "GameError",
    "MoveRejected",
    "PlayerRejected",
    "SelectionError",
    "validate_move",
    "occupied_positions",
    "empty_positions",
    "Outcome",
    "OutcomeKind",
    "evaluate",
    "winning_line",
    "Reducer",
    "MoveResult",
    "commit",
    "finalize",
    "apply_move",
]
