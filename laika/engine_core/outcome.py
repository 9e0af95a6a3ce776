"""
Win/Draw Detector - Decides whether a session has finished.

A player wins by owning all three positions of a line. The first such line
in board order (rows, columns, diagonals) names the winner. With no winning
line and nine committed moves the game is a draw.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from .board import LINES
from .state import MAX_MOVES, Player, Session


class OutcomeKind(Enum):
    ONGOING = "ongoing"
    WON = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class Outcome:
    """Result of evaluating a session. winner is only set for WON."""
    kind: OutcomeKind
    winner: Player | None = None

    @classmethod
    def ongoing(cls) -> Outcome:
        return cls(kind=OutcomeKind.ONGOING)

    @classmethod
    def won(cls, player: Player) -> Outcome:
        return cls(kind=OutcomeKind.WON, winner=player)

    @classmethod
    def draw(cls) -> Outcome:
        return cls(kind=OutcomeKind.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.ONGOING


def evaluate(session: Session) -> Outcome:
    """Evaluate the committed moves of a session."""
    line = winning_line(session)
    if line is not None:
        return Outcome.won(session.board[line[0]])

    if len(session.moves) == MAX_MOVES:
        return Outcome.draw()

    return Outcome.ongoing()


def winning_line(session: Session) -> tuple[int, int, int] | None:
    """Get the first line owned entirely by one player, if any."""
    board = session.board
    for line in LINES:
        owner = board.get(line[0])
        if owner is None:
            continue
        if all(board.get(p) == owner for p in line[1:]):
            return line
    return None
