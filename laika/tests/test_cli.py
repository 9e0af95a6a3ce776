"""
Tests for configuration and the command-line interface.
"""

import pytest

from ..cli import main
from ..config import Config
from ..session import apply_player_move, start
from ..storage import LocalJsonBackend


class TestConfig:
    """Tests for environment configuration."""

    def test_defaults(self, monkeypatch):
        for name in ("LAIKA_HOST", "PORT", "STORAGE_PATH", "LAIKA_STORAGE", "LAIKA_BOT_SEED"):
            monkeypatch.delenv(name, raising=False)
        config = Config.from_env()

        assert config.address == "localhost:3000"
        assert config.storage_path == "_gamedata"
        assert config.storage_kind == "json"
        assert config.bot_seed is None

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("STORAGE_PATH", "/var/games")
        monkeypatch.setenv("LAIKA_BOT_POLICY", "random")
        monkeypatch.setenv("LAIKA_BOT_SEED", "3")
        monkeypatch.setenv("ALLOWED_ORIGINS", "http://a,http://b")
        config = Config.from_env()

        assert config.port == 8080
        assert config.storage_path == "/var/games"
        assert config.bot_policy == "random"
        assert config.bot_seed == 3
        assert config.allowed_origins == ["http://a", "http://b"]


class TestCLI:
    """Tests for CLI commands."""

    def test_show(self, tmp_path, capsys):
        storage = LocalJsonBackend(tmp_path)
        session = apply_player_move(start("p1"), 5, "p1")
        storage.save(session)

        main(["--storage-path", str(tmp_path), "show", session.id])

        out = capsys.readouterr().out
        assert "InProgress" in out
        assert " O | 2 | 3 " in out

    def test_show_missing(self, tmp_path):
        with pytest.raises(SystemExit):
            main(["--storage-path", str(tmp_path), "show", "00000000-0000-4000-8000-000000000000"])

    def test_play_until_win(self, tmp_path, monkeypatch, capsys):
        answers = iter(["1", "x", "9", "7", "4"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
        monkeypatch.setenv("LAIKA_BOT_POLICY", "heuristic")

        main(["--storage-path", str(tmp_path), "play", "--player-id", "p1"])

        out = capsys.readouterr().out
        assert "Please enter a number" in out
        assert "Player(p1) wins!" in out
        assert len(LocalJsonBackend(tmp_path).list_ids()) == 1

    def test_play_with_empty_player_id(self, tmp_path, capsys):
        with pytest.raises(SystemExit):
            main(["--storage-path", str(tmp_path), "play", "--player-id", ""])

        assert "must not be empty" in capsys.readouterr().out
        assert LocalJsonBackend(tmp_path).list_ids() == []

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])
