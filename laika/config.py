"""
Configuration - Process settings read from environment variables.

    LAIKA_HOST        Interface to bind (default: localhost)
    PORT              Port to listen on (default: 3000)
    STORAGE_PATH      Directory for game files (default: _gamedata)
    LAIKA_STORAGE     Storage backend: json | memory (default: json)
    LAIKA_BOT_POLICY  Computer opponent: heuristic | random (default: heuristic)
    LAIKA_BOT_SEED    Seed for the random opponent (default: unset)
    LAIKA_LOG_LEVEL   Logging level name (default: INFO)
    ALLOWED_ORIGINS   Comma-separated CORS origins (default: *)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import os

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3000
DEFAULT_STORAGE_PATH = "_gamedata"


@dataclass
class Config:
    """The running service configuration."""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    storage_path: str = DEFAULT_STORAGE_PATH
    storage_kind: str = "json"
    bot_policy: str = "heuristic"
    bot_seed: int | None = None
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> Config:
        """Create a config from environment variables, falling back to defaults."""
        seed = os.getenv("LAIKA_BOT_SEED")
        return cls(
            host=os.getenv("LAIKA_HOST", DEFAULT_HOST),
            port=int(os.getenv("PORT", str(DEFAULT_PORT))),
            storage_path=os.getenv("STORAGE_PATH", DEFAULT_STORAGE_PATH),
            storage_kind=os.getenv("LAIKA_STORAGE", "json"),
            bot_policy=os.getenv("LAIKA_BOT_POLICY", "heuristic"),
            bot_seed=int(seed) if seed else None,
            log_level=os.getenv("LAIKA_LOG_LEVEL", "INFO").upper(),
            allowed_origins=os.getenv("ALLOWED_ORIGINS", "*").split(","),
        )

    @property
    def address(self) -> str:
        """host:port for the server to bind to."""
        return f"{self.host}:{self.port}"
