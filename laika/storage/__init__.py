"""
Storage Module - Durable session records.

The session layer only needs load and save. Backends:
- json:   LocalJsonBackend, one <id>.json file per game under STORAGE_PATH
- memory: InMemoryBackend, lost when the process exits
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .base import (
    StorageBackend,
    StorageError,
    SessionNotFound,
    SessionCorrupt,
    StorageUnavailable,
)
from .records import SessionRecord, MoveRecord, HumanRecord, PlayerRecord
from .json_file import LocalJsonBackend, decode_session
from .memory import InMemoryBackend

if TYPE_CHECKING:
    from ..config import Config


def create_backend(config: Config) -> StorageBackend:
    """Build the backend named by config.storage_kind."""
    if config.storage_kind == "json":
        return LocalJsonBackend(config.storage_path)
    if config.storage_kind == "memory":
        return InMemoryBackend()
    raise ValueError(f"Unknown storage kind: {config.storage_kind}")


__all__ = [
    "StorageBackend",
    "StorageError",
    "SessionNotFound",
    "SessionCorrupt",
    "StorageUnavailable",
    "SessionRecord",
    "MoveRecord",
    "HumanRecord",
    "PlayerRecord",
    "LocalJsonBackend",
    "InMemoryBackend",
    "decode_session",
    "create_backend",
]
