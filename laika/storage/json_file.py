"""
Local JSON storage - One file per session on local disk.

The store:
- Uses the session id as the file name (<id>.json)
- Writes through a temp file and os.replace, so a crash never leaves a
  half-written record behind
- Rejects ids that are not uuids before touching the filesystem
- Validates every record it loads against the Session invariants
"""

from __future__ import annotations
import logging
import os
import tempfile
import uuid
from pathlib import Path

from pydantic import ValidationError

from .base import SessionCorrupt, SessionNotFound, StorageBackend, StorageUnavailable
from .records import SessionRecord
from ..engine_core.state import Session, check_invariants

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_PATH = "_gamedata"


class LocalJsonBackend(StorageBackend):
    """
    File-based session storage.

    Usage:
        storage = LocalJsonBackend("_gamedata")
        storage.save(session)
        session = storage.load(session.id)
    """

    def __init__(self, storage_path: str | Path = DEFAULT_STORAGE_PATH):
        self.storage_path = Path(storage_path)

    def load(self, session_id: str) -> Session:
        path = self._get_path(session_id)
        if path is None or not path.exists():
            raise SessionNotFound(session_id)

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageUnavailable(f"Could not read game {session_id}: {e}", session_id) from e

        return decode_session(raw, session_id)

    def save(self, session: Session) -> None:
        path = self._get_path(session.id)
        if path is None:
            raise StorageUnavailable(f"Refusing to store game with id {session.id!r}", session.id)

        payload = SessionRecord.from_session(session).to_json()
        try:
            self.storage_path.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.storage_path, prefix=".", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error("Failed to write game %s to %s: %s", session.id, path, e)
            raise StorageUnavailable(f"Could not save game {session.id}: {e}", session.id) from e

    def delete(self, session_id: str) -> None:
        path = self._get_path(session_id)
        if path is None or not path.exists():
            raise SessionNotFound(session_id)
        try:
            path.unlink()
        except OSError as e:
            raise StorageUnavailable(f"Could not delete game {session_id}: {e}", session_id) from e

    def list_ids(self) -> list[str]:
        if not self.storage_path.exists():
            return []
        return sorted(f.stem for f in self.storage_path.glob("*.json"))

    def _get_path(self, session_id: str) -> Path | None:
        """Get the file path for a session, or None if the id is not a uuid."""
        try:
            canonical = str(uuid.UUID(session_id))
        except (ValueError, TypeError, AttributeError):
            return None
        if canonical != session_id:
            return None
        return self.storage_path / f"{session_id}.json"


def decode_session(raw: str, session_id: str) -> Session:
    """
    Decode a stored record.

    Raises SessionCorrupt if the JSON is malformed, belongs to another id,
    or describes an impossible game.
    """
    try:
        record = SessionRecord.model_validate_json(raw)
    except ValidationError as e:
        logger.warning("Game %s has an unreadable record: %s", session_id, e)
        raise SessionCorrupt(f"Game {session_id} could not be decoded", session_id) from e

    if record.id != session_id:
        logger.warning("Game %s is stored under the wrong id %s", record.id, session_id)
        raise SessionCorrupt(f"Game {session_id} holds a record for {record.id}", session_id)

    session = record.to_session()
    problems = check_invariants(session)
    if problems:
        logger.warning("Game %s failed consistency checks: %s", session_id, "; ".join(problems))
        raise SessionCorrupt(
            f"Game {session_id} is inconsistent: {'; '.join(problems)}", session_id
        )
    return session
