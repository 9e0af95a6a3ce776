"""
Game State - The Session aggregate and its value types.

Design principles:
- Immutable-friendly: all mutations return a new Session
- Serializable: storage rebuilds a Session from its record on every load
- Closed player type: a participant is either Computer or Human(id)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Union
import uuid

from .board import LINES, is_on_board

MAX_PLAYERS = 2
MAX_MOVES = 9


@dataclass(frozen=True)
class Computer:
    """The heuristic opponent. All Computer values are equal."""

    def __str__(self) -> str:
        return "Computer"


@dataclass(frozen=True)
class Human:
    """A human participant, identified by an opaque player id."""
    id: str

    def __str__(self) -> str:
        return f"Player({self.id})"


Player = Union[Computer, Human]


class Status(Enum):
    """Lifecycle of a session. COMPLETE is terminal."""
    NOT_STARTED = "NotStarted"
    IN_PROGRESS = "InProgress"
    COMPLETE = "Complete"


@dataclass(frozen=True)
class Move:
    """
    One placement of a mark.

    position is 1-9 (row-major), turn counts from 1 in play order.
    """
    player: Player
    position: int
    turn: int


@dataclass
class Session:
    """
    One game instance.

    The session exclusively owns its moves and players. Moves are kept in
    play order and only ever appended. Operations in the engine never
    modify a Session in place; they return a new one via _copy_with().
    """
    id: str
    moves: list[Move] = field(default_factory=list)
    players: list[Player] = field(default_factory=list)
    status: Status = Status.NOT_STARTED
    winner: Player | None = None

    @classmethod
    def new(cls, players: list[Player] | None = None) -> Session:
        """Create an empty session with a fresh identifier."""
        return cls(id=str(uuid.uuid4()), players=list(players or []))

    @property
    def is_complete(self) -> bool:
        return self.status == Status.COMPLETE

    @property
    def next_turn(self) -> int:
        """Turn number the next committed move will carry."""
        return len(self.moves) + 1

    @property
    def board(self) -> dict[int, Player]:
        """Map of occupied position -> owning player."""
        return {move.position: move.player for move in self.moves}

    def has_player(self, player: Player) -> bool:
        return player in self.players

    def opponent_of(self, player: Player) -> Player | None:
        """Get the other participant, whichever slot they joined in."""
        for p in self.players:
            if p != player:
                return p
        return None

    def _copy_with(self, **kwargs) -> Session:
        """Create a copy with some fields replaced."""
        return Session(
            id=kwargs.get("id", self.id),
            moves=kwargs.get("moves", list(self.moves)),
            players=kwargs.get("players", list(self.players)),
            status=kwargs.get("status", self.status),
            winner=kwargs.get("winner", self.winner),
        )


def check_invariants(session: Session) -> list[str]:
    """
    Check a session against the rules every stored game must satisfy.

    Returns a list of violations; empty means the session is consistent.
    """
    problems = []

    if len(session.players) > MAX_PLAYERS:
        problems.append(f"{len(session.players)} players, at most {MAX_PLAYERS} allowed")

    if len(set(session.players)) != len(session.players):
        problems.append("A player joined more than once")

    if len(session.moves) > MAX_MOVES:
        problems.append(f"{len(session.moves)} moves, at most {MAX_MOVES} allowed")

    positions = [move.position for move in session.moves]
    if len(set(positions)) != len(positions):
        problems.append("Two moves share a position")

    for index, move in enumerate(session.moves, start=1):
        if not is_on_board(move.position):
            problems.append(f"Move {index} is off the board at position {move.position}")
        if move.turn != index:
            problems.append(f"Move {index} is recorded as turn {move.turn}")
        if move.player not in session.players:
            problems.append(f"Move {index} was made by non-participant {move.player}")

    if session.status == Status.NOT_STARTED and session.moves:
        problems.append("Session has moves but is not started")

    if session.status == Status.IN_PROGRESS and not session.moves:
        problems.append("Session is in progress without any moves")

    owners = _line_owners(session)
    finished = bool(owners) or len(session.moves) == MAX_MOVES

    if len(owners) > 1:
        problems.append("More than one player owns a line")

    if finished and session.status != Status.COMPLETE:
        problems.append(f"Board is finished but session is {session.status.value}")

    if session.status == Status.COMPLETE and not finished:
        problems.append("Complete session has neither a winning line nor a full board")

    if session.status != Status.COMPLETE and session.winner is not None:
        problems.append("Winner recorded on a session that is not complete")

    # The first owned line in board order names the winner
    expected_winner = owners[0] if owners else None
    if session.status == Status.COMPLETE and session.winner != expected_winner:
        problems.append(f"Recorded winner {session.winner} but the board says {expected_winner}")
    elif session.winner is not None and session.winner not in owners:
        problems.append(f"Recorded winner {session.winner} does not own a line")

    return problems


def _line_owners(session: Session) -> list[Player]:
    """Players owning a full line, in the order their first line appears."""
    board = session.board
    owners = []
    for line in LINES:
        owner = board.get(line[0])
        if owner is not None and owner not in owners and all(board.get(p) == owner for p in line[1:]):
            owners.append(owner)
    return owners
