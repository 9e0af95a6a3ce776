"""
Pytest fixtures for Laika tests.
"""

import pytest

from ..engine_core.state import Computer, Human, Move, Session, Status
from ..session import SessionManager
from ..storage import InMemoryBackend, LocalJsonBackend

P1 = Human("p1")
CPU = Computer()


def build_session(*plays, players=None, status=None, winner=None) -> Session:
    """
    Build a session from (player, position) pairs in play order.

    Turn numbers follow the order given. Status defaults to NOT_STARTED for
    an empty board and IN_PROGRESS otherwise.
    """
    moves = [
        Move(player=player, position=position, turn=turn)
        for turn, (player, position) in enumerate(plays, start=1)
    ]
    if status is None:
        status = Status.IN_PROGRESS if moves else Status.NOT_STARTED
    return Session(
        id="test-game",
        moves=moves,
        players=list(players) if players is not None else [P1, CPU],
        status=status,
        winner=winner,
    )


@pytest.fixture
def human() -> Human:
    return P1


@pytest.fixture
def computer() -> Computer:
    return CPU


@pytest.fixture
def empty_session() -> Session:
    """A fresh human-vs-computer session with no moves."""
    return build_session()


@pytest.fixture
def memory_storage() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def json_storage(tmp_path) -> LocalJsonBackend:
    return LocalJsonBackend(tmp_path / "games")


@pytest.fixture
def manager(memory_storage) -> SessionManager:
    return SessionManager(storage=memory_storage)
