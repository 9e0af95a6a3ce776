"""
Session records - The JSON shape of a stored (and served) session.

The persisted record and the API response share one layout:

    {
        "id": "3f2c...",
        "moves": [{"player": {"Player": "p1"}, "position": 5, "turn": 1},
                  {"player": "Computer", "position": 1, "turn": 2}],
        "players": [{"Player": "p1"}, "Computer"],
        "status": "InProgress",
        "winner": null
    }

A player is either the bare tag "Computer" or an object tagged "Player"
carrying the human's id.
"""

from __future__ import annotations
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from ..engine_core.state import Computer, Human, Move, Player, Session, Status

COMPUTER_TAG = "Computer"


class HumanRecord(BaseModel):
    """A human player, serialized as {"Player": "<id>"}."""
    player_id: str = Field(alias="Player", min_length=1)

    model_config = {"populate_by_name": True, "extra": "forbid"}


PlayerRecord = Union[Literal["Computer"], HumanRecord]


class MoveRecord(BaseModel):
    """One committed move."""
    player: PlayerRecord
    position: int
    turn: int


class SessionRecord(BaseModel):
    """A full session, as stored and as returned by the API."""
    id: str
    moves: list[MoveRecord] = Field(default_factory=list)
    players: list[PlayerRecord] = Field(default_factory=list)
    status: Status = Status.NOT_STARTED
    winner: Optional[PlayerRecord] = None

    @classmethod
    def from_session(cls, session: Session) -> SessionRecord:
        return cls(
            id=session.id,
            moves=[
                MoveRecord(player=player_to_record(m.player), position=m.position, turn=m.turn)
                for m in session.moves
            ],
            players=[player_to_record(p) for p in session.players],
            status=session.status,
            winner=player_to_record(session.winner) if session.winner is not None else None,
        )

    def to_session(self) -> Session:
        return Session(
            id=self.id,
            moves=[
                Move(player=player_from_record(m.player), position=m.position, turn=m.turn)
                for m in self.moves
            ],
            players=[player_from_record(p) for p in self.players],
            status=self.status,
            winner=player_from_record(self.winner) if self.winner is not None else None,
        )

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)


def player_to_record(player: Player) -> PlayerRecord:
    if isinstance(player, Computer):
        return COMPUTER_TAG
    return HumanRecord(player_id=player.id)


def player_from_record(record: PlayerRecord) -> Player:
    if isinstance(record, HumanRecord):
        return Human(record.player_id)
    return Computer()
