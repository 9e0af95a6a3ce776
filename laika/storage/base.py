"""
Storage Backend - The persistence port the session layer depends on.

A backend stores one record per session, addressed by the session id.
Two operations are required:
- load(id)       -> Session, or SessionNotFound / SessionCorrupt
- save(session)  -> None, or StorageUnavailable (create-or-replace)

Backends never retry. Retry policy, if any, belongs to the caller.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from ..engine_core.state import Session


class StorageError(Exception):
    """Base class for persistence failures."""

    def __init__(self, message: str, session_id: str | None = None):
        self.session_id = session_id
        super().__init__(message)


class SessionNotFound(StorageError):
    """No record exists for the requested id."""

    def __init__(self, session_id: str):
        super().__init__(f"Game {session_id} not found", session_id=session_id)


class SessionCorrupt(StorageError):
    """A stored record could not be decoded into a valid Session."""


class StorageUnavailable(StorageError):
    """The backend could not read or write."""


class StorageBackend(ABC):
    """
    Interface for session storage.

    Implementations:
    - LocalJsonBackend: one JSON file per session
    - InMemoryBackend: dict-backed, for tests and throwaway servers
    """

    @abstractmethod
    def load(self, session_id: str) -> Session:
        """Load a session by id."""

    @abstractmethod
    def save(self, session: Session) -> None:
        """Create or replace the record for session.id."""

    @abstractmethod
    def delete(self, session_id: str) -> None:
        """Remove a session. Raises SessionNotFound if absent."""

    @abstractmethod
    def list_ids(self) -> list[str]:
        """List the ids of stored sessions."""

    def exists(self, session_id: str) -> bool:
        try:
            self.load(session_id)
        except SessionNotFound:
            return False
        return True
