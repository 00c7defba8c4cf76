import json
import os

import pytest

from poker_league.core.errors import ConcurrentModificationError, StorageError
from poker_league.models import DocumentModel, TournamentModel, UserModel
from poker_league.services.store import DocumentStore


class TestDocumentStore:

    def test_creates_empty_document_on_first_use(self, store: DocumentStore, temp_data_file):
        assert os.path.exists(temp_data_file)
        with open(temp_data_file, "r") as f:
            on_disk = json.load(f)
        assert on_disk["tournaments"] == []
        assert on_disk["registrations"] == []
        assert on_disk["users"] == {}

    def test_load_returns_independent_copies(self, store: DocumentStore):
        first = store.load()
        first.users[7] = UserModel(id=7, username="seven")

        second = store.load()
        assert 7 not in second.users

    def test_save_persists_camel_case_keys(self, store: DocumentStore, temp_data_file):
        document = store.load()
        document.tournaments.append(
            TournamentModel(id=10, title="Deepstack", date="2024-06-01", buyin="50", prize="500", max_players=9)
        )
        store.save(document)

        with open(temp_data_file, "r") as f:
            on_disk = json.load(f)
        assert on_disk["tournaments"][0]["maxPlayers"] == 9
        assert on_disk["tournaments"][0]["status"] == "open"

        reloaded = store.load()
        assert reloaded.find_tournament(10).max_players == 9

    def test_user_keys_round_trip_as_ints(self, store: DocumentStore):
        document = store.load()
        document.users[42] = UserModel(id=42, username="alice", nickname="alice")
        store.save(document)

        reloaded = store.load()
        assert list(reloaded.users.keys()) == [42]
        assert reloaded.users[42].nickname == "alice"

    def test_save_bumps_version(self, store: DocumentStore):
        document = store.load()
        start = document.version
        store.save(document)
        assert document.version == start + 1
        assert store.load().version == start + 1

    def test_stale_document_is_rejected(self, store: DocumentStore):
        first = store.load()
        second = store.load()

        store.save(first)
        with pytest.raises(ConcurrentModificationError):
            store.save(second)

    def test_corrupt_file_raises_storage_error(self, store: DocumentStore, temp_data_file):
        with open(temp_data_file, "w") as f:
            f.write("{not json")

        with pytest.raises(StorageError):
            store.load()

    def test_empty_file_loads_as_empty_document(self, store: DocumentStore, temp_data_file):
        with open(temp_data_file, "w") as f:
            f.write("")

        document = store.load()
        assert document == DocumentModel()

    def test_transaction_saves_on_success(self, store: DocumentStore):
        with store.transaction() as document:
            document.users[5] = UserModel(id=5)

        assert 5 in store.load().users

    def test_transaction_discards_changes_on_error(self, store: DocumentStore):
        version_before = store.load().version
        with pytest.raises(RuntimeError):
            with store.transaction() as document:
                document.users[5] = UserModel(id=5)
                raise RuntimeError("boom")

        reloaded = store.load()
        assert 5 not in reloaded.users
        assert reloaded.version == version_before

    def test_creates_missing_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "data.json"
        DocumentStore(data_file_path=str(path))
        assert path.exists()

    def test_undecodable_file_raises_storage_error(self, store: DocumentStore, temp_data_file):
        with open(temp_data_file, "wb") as f:
            f.write(b'\xff\xfe{"tournaments": []}')

        with pytest.raises(StorageError):
            store.load()

    def test_non_numeric_version_raises_storage_error_on_save(self, store: DocumentStore, temp_data_file):
        document = store.load()
        with open(temp_data_file, "w") as f:
            json.dump({"version": None, "tournaments": [], "registrations": [], "users": {}}, f)

        with pytest.raises(StorageError):
            store.save(document)
