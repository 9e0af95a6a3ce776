"""
Reducer - Applies moves to a session.

The reducer is the single point of state change.
All moves, human or computer, go through Reducer.apply().

Design principles:
- Pure function: (session, move) -> new session
- Validates before applying, so a rejected move changes nothing
- Always evaluates the outcome right after a commit
- Returns MoveResult with success/failure
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .errors import REJECT_MESSAGES, RejectKind
from .outcome import Outcome, OutcomeKind, evaluate
from .state import Move, Session, Status
from .validator import validate_move


@dataclass
class MoveResult:
    """
    Result of applying a move.

    On success new_session and outcome are set. On failure error_code holds
    the rejection and the caller keeps its original session.
    """
    success: bool
    new_session: Session | None = None
    outcome: Outcome | None = None
    error: str | None = None
    error_code: RejectKind | None = None

    # Human-readable changes, for logs and the CLI
    changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error_code: RejectKind, error: str | None = None) -> MoveResult:
        """Create a failure result."""
        return cls(
            success=False,
            error=error or REJECT_MESSAGES[error_code],
            error_code=error_code,
        )

    @classmethod
    def success_with_session(
        cls,
        session: Session,
        outcome: Outcome,
        changes: list[str] | None = None,
    ) -> MoveResult:
        """Create a success result with the new session."""
        return cls(
            success=True,
            new_session=session,
            outcome=outcome,
            changes=changes or [],
        )


def commit(session: Session, move: Move) -> Session:
    """
    Append a validated move.

    The first move starts the game. Completion is not detected here;
    see finalize().
    """
    moves = list(session.moves)
    moves.append(move)

    status = session.status
    if status == Status.NOT_STARTED:
        status = Status.IN_PROGRESS

    return session._copy_with(moves=moves, status=status)


def finalize(session: Session, outcome: Outcome) -> Session:
    """Record a terminal outcome. Ongoing outcomes return the session as is."""
    if outcome.kind == OutcomeKind.ONGOING:
        return session
    return session._copy_with(status=Status.COMPLETE, winner=outcome.winner)


class Reducer:
    """
    Reducer applies moves to sessions.

    Stateless - all state is in the Session.
    """

    def apply(self, session: Session, move: Move) -> MoveResult:
        """
        Apply a move to the session.

        Returns MoveResult with the new session or the rejection.
        """
        reject = validate_move(session, move)
        if reject is not None:
            return MoveResult.failure(reject)

        new_session = commit(session, move)
        outcome = evaluate(new_session)
        new_session = finalize(new_session, outcome)

        changes = [f"{move.player} played position {move.position} on turn {move.turn}"]
        if outcome.kind == OutcomeKind.WON:
            changes.append(f"{outcome.winner} won")
        elif outcome.kind == OutcomeKind.DRAW:
            changes.append("Game ended in a draw")

        return MoveResult.success_with_session(new_session, outcome, changes=changes)


def apply_move(session: Session, move: Move) -> MoveResult:
    """
    Convenience function to apply a move.

    Creates a Reducer and applies the move.
    """
    return Reducer().apply(session, move)
