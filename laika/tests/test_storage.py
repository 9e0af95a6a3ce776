"""
Tests for session storage.

Tests:
- Save/load round trip on both backends
- Record layout on disk
- Missing, corrupt and inconsistent records
"""

import json

import pytest

from .conftest import CPU, P1
from ..config import Config
from ..engine_core.state import Human, Status
from ..session import apply_player_move, start
from ..storage import (
    InMemoryBackend,
    LocalJsonBackend,
    SessionCorrupt,
    SessionNotFound,
    SessionRecord,
    StorageUnavailable,
    create_backend,
)


@pytest.fixture
def finished_game():
    """A game the human won with a fork down the left column."""
    session = start("p1")
    # Computer answers 5, 3, then blocks 8; 4 completes 1-4-7
    for position in (1, 9, 7, 4):
        session = apply_player_move(session, position, "p1")
    assert session.winner == Human("p1")
    return session


@pytest.fixture(params=["json", "memory"])
def storage(request, tmp_path):
    if request.param == "json":
        return LocalJsonBackend(tmp_path / "games")
    return InMemoryBackend()


class TestRoundTrip:
    """Tests that saved sessions load back equal."""

    def test_new_session(self, storage):
        session = start("p1")
        storage.save(session)
        assert storage.load(session.id) == session

    def test_in_progress_session(self, storage):
        session = apply_player_move(start("p1"), 5, "p1")
        storage.save(session)

        loaded = storage.load(session.id)
        assert loaded == session
        assert loaded.status == Status.IN_PROGRESS

    def test_save_replaces(self, storage):
        session = start("p1")
        storage.save(session)
        updated = apply_player_move(session, 5, "p1")
        storage.save(updated)

        assert storage.load(session.id) == updated
        assert storage.list_ids() == [session.id]

    def test_missing_session(self, storage):
        with pytest.raises(SessionNotFound):
            storage.load("00000000-0000-4000-8000-000000000000")

    def test_delete(self, storage):
        session = start("p1")
        storage.save(session)
        storage.delete(session.id)

        assert not storage.exists(session.id)
        with pytest.raises(SessionNotFound):
            storage.delete(session.id)


class TestRecordLayout:
    """Tests for the JSON shape of a stored session."""

    def test_player_tags(self):
        session = apply_player_move(start("p1"), 5, "p1")
        data = json.loads(SessionRecord.from_session(session).to_json())

        assert data["players"] == [{"Player": "p1"}, "Computer"]
        assert data["moves"] == [
            {"player": {"Player": "p1"}, "position": 5, "turn": 1},
            {"player": "Computer", "position": 1, "turn": 2},
        ]
        assert data["status"] == "InProgress"
        assert data["winner"] is None

    def test_winner_recorded(self, finished_game):
        data = json.loads(SessionRecord.from_session(finished_game).to_json())
        assert data["status"] == "Complete"
        assert data["winner"] == {"Player": "p1"}

    def test_record_to_session(self):
        record = SessionRecord.model_validate({
            "id": "abc",
            "moves": [{"player": "Computer", "position": 5, "turn": 1}],
            "players": ["Computer", {"Player": "p1"}],
            "status": "InProgress",
        })
        session = record.to_session()
        assert session.players == [CPU, P1]
        assert session.moves[0].player == CPU
        assert session.winner is None


class TestLocalJsonBackend:
    """Tests specific to file storage."""

    def test_file_per_session(self, json_storage):
        session = start("p1")
        json_storage.save(session)

        path = json_storage.storage_path / f"{session.id}.json"
        assert path.exists()
        assert json.loads(path.read_text())["id"] == session.id

    def test_no_temp_files_left(self, json_storage):
        json_storage.save(start("p1"))
        assert [p.suffix for p in json_storage.storage_path.iterdir()] == [".json"]

    def test_malformed_json_is_corrupt(self, json_storage):
        session = start("p1")
        json_storage.save(session)
        (json_storage.storage_path / f"{session.id}.json").write_text("{not json")

        with pytest.raises(SessionCorrupt):
            json_storage.load(session.id)

    def test_inconsistent_record_is_corrupt(self, json_storage):
        """A record that decodes but breaks game rules is rejected."""
        session = apply_player_move(start("p1"), 5, "p1")
        json_storage.save(session)
        path = json_storage.storage_path / f"{session.id}.json"

        data = json.loads(path.read_text())
        data["moves"][1]["position"] = 5
        path.write_text(json.dumps(data))

        with pytest.raises(SessionCorrupt):
            json_storage.load(session.id)

    @pytest.mark.parametrize("status", ["InProgress", "Complete"])
    def test_won_board_without_winner_is_corrupt(self, json_storage, status):
        """The human owns the top row but the record names no winner."""
        session = start("p1")
        json_storage.save(session)
        human, computer = {"Player": "p1"}, "Computer"
        plays = [
            (human, 1), (computer, 4), (human, 2), (computer, 5), (human, 3),
            (computer, 7), (human, 6), (computer, 8), (human, 9),
        ]
        record = {
            "id": session.id,
            "moves": [
                {"player": player, "position": position, "turn": turn}
                for turn, (player, position) in enumerate(plays, start=1)
            ],
            "players": [human, computer],
            "status": status,
            "winner": None,
        }
        path = json_storage.storage_path / f"{session.id}.json"
        path.write_text(json.dumps(record))

        with pytest.raises(SessionCorrupt):
            json_storage.load(session.id)

    def test_duplicate_players_are_corrupt(self, json_storage):
        session = start("p1")
        json_storage.save(session)
        path = json_storage.storage_path / f"{session.id}.json"

        data = json.loads(path.read_text())
        data["players"] = [{"Player": "p1"}, {"Player": "p1"}]
        path.write_text(json.dumps(data))

        with pytest.raises(SessionCorrupt):
            json_storage.load(session.id)

    def test_record_under_wrong_id_is_corrupt(self, json_storage):
        first, second = start("p1"), start("p2")
        json_storage.save(first)
        json_storage.save(second)
        first_path = json_storage.storage_path / f"{first.id}.json"
        second_path = json_storage.storage_path / f"{second.id}.json"
        first_path.write_text(second_path.read_text())

        with pytest.raises(SessionCorrupt):
            json_storage.load(first.id)

    def test_path_like_id_is_not_found(self, json_storage):
        with pytest.raises(SessionNotFound):
            json_storage.load("../../etc/passwd")

    def test_unwritable_directory(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        storage = LocalJsonBackend(blocker / "games")

        with pytest.raises(StorageUnavailable):
            storage.save(start("p1"))

    def test_list_ids_without_directory(self, tmp_path):
        assert LocalJsonBackend(tmp_path / "missing").list_ids() == []


class TestCreateBackend:
    """Tests for backend selection from config."""

    def test_json(self, tmp_path):
        storage = create_backend(Config(storage_path=str(tmp_path)))
        assert isinstance(storage, LocalJsonBackend)

    def test_memory(self):
        assert isinstance(create_backend(Config(storage_kind="memory")), InMemoryBackend)

    def test_unknown(self):
        with pytest.raises(ValueError):
            create_backend(Config(storage_kind="postgres"))
