"""
In-memory storage - Sessions held in a dict for the life of the process.

Records are kept in their serialized form so a loaded session never
aliases one that was saved, matching the file backend.
"""

from __future__ import annotations

from .base import SessionNotFound, StorageBackend
from .json_file import decode_session
from .records import SessionRecord
from ..engine_core.state import Session


class InMemoryBackend(StorageBackend):
    """Dict-backed storage. Nothing survives a restart."""

    def __init__(self):
        self._records: dict[str, str] = {}

    def load(self, session_id: str) -> Session:
        raw = self._records.get(session_id)
        if raw is None:
            raise SessionNotFound(session_id)
        return decode_session(raw, session_id)

    def save(self, session: Session) -> None:
        self._records[session.id] = SessionRecord.from_session(session).to_json()

    def delete(self, session_id: str) -> None:
        if self._records.pop(session_id, None) is None:
            raise SessionNotFound(session_id)

    def list_ids(self) -> list[str]:
        return sorted(self._records)
