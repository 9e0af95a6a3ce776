"""
Session Manager - Loads, plays and saves games.

LIFECYCLE:
1. Player starts a game -> new session (optionally with a first move) -> saved
2. Player plays a move -> load -> validate/commit/evaluate -> computer reply
   -> save
3. Game completes -> record stays in storage as a finished game

PERSISTENCE RULES:
- The in-memory Session is a working copy, rebuilt on every load
- Nothing is saved when a move is rejected
- Mutations of one game id are serialized inside this process; separate
  processes sharing a storage path are not coordinated
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
import logging
import threading

from . import game
from ..bots import BotPolicy, HeuristicPolicy
from ..engine_core.outcome import OutcomeKind
from ..engine_core.state import Session, Status
from ..storage import StorageBackend

logger = logging.getLogger(__name__)


@dataclass
class _GameLock:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class SessionManager:
    """
    Manages stored game sessions.

    Responsibilities:
    - Start games and persist them
    - Apply player moves and the computer's reply
    - Serialize concurrent updates to the same game

    The storage backend and bot policy are passed in; nothing is global.
    """

    def __init__(self, storage: StorageBackend, policy: BotPolicy | None = None):
        self.storage = storage
        self.policy = policy or HeuristicPolicy()
        self._locks: dict[str, _GameLock] = {}
        self._locks_guard = threading.Lock()

    def start_game(self, player_id: str, move_position: int | None = None) -> Session:
        """
        Create and save a new game.

        If move_position is given the player makes the first move and the
        computer replies before the game is saved. A rejected first move
        means nothing is saved.
        """
        session = game.start(player_id)
        if move_position is not None:
            session = game.apply_player_move(session, move_position, player_id, self.policy)

        self.storage.save(session)
        logger.info("Started game %s for player %s", session.id, player_id)
        self._log_completion(session)
        return session

    def get_game(self, game_id: str) -> Session:
        """Load a game. Raises SessionNotFound / SessionCorrupt."""
        return self.storage.load(game_id)

    def play_move(self, game_id: str, player_id: str, move_position: int) -> Session:
        """
        Play a move in an existing game and save the result.

        Raises the engine's GameError subclasses on rejected moves and the
        storage errors on load/save failures.
        """
        with self._locked(game_id):
            session = self.storage.load(game_id)
            session = game.apply_player_move(session, move_position, player_id, self.policy)
            self.storage.save(session)

        self._log_completion(session)
        return session

    def delete_game(self, game_id: str):
        """Remove a stored game."""
        with self._locked(game_id):
            self.storage.delete(game_id)
        logger.info("Deleted game %s", game_id)

    def list_games(self) -> list[str]:
        """List ids of stored games."""
        return self.storage.list_ids()

    @contextmanager
    def _locked(self, game_id: str):
        """Hold the lock for one game id; the entry is dropped once unused."""
        with self._locks_guard:
            entry = self._locks.get(game_id)
            if entry is None:
                entry = self._locks[game_id] = _GameLock()
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._locks_guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._locks[game_id]

    def _log_completion(self, session: Session):
        if session.status != Status.COMPLETE:
            return
        outcome = game.evaluate_outcome(session)
        if outcome.kind == OutcomeKind.WON:
            logger.info("Game %s won by %s in %d moves", session.id, outcome.winner, len(session.moves))
        else:
            logger.info("Game %s ended in a draw", session.id)
