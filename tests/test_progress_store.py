"""
Tests for ProgressStore and its blob stores.
"""

import json
from datetime import date

from englishai.classroom import STORAGE_KEY, MemoryBlobStore, ProgressStore, SQLiteBlobStore
from englishai.schemas import Level, User, UserProgress


class TestMemoryStore:

    def test_missing_record_gives_defaults(self):
        store = ProgressStore(MemoryBlobStore())
        user = store.load()
        assert user.total_xp == 0
        assert user.badges == []

    def test_save_then_load(self):
        blobs = MemoryBlobStore()
        store = ProgressStore(blobs)
        user = User(
            total_xp=120,
            streak=3,
            last_active_date=date(2024, 5, 1),
            badges=["first-steps", "streak-3"],
            grammar=UserProgress(level=Level.INTERMEDIATE, xp=120, completed=["grammar-beginner-1"]),
        )
        store.save(user)
        assert blobs.get(STORAGE_KEY) is not None
        assert store.load() == user

    def test_corrupt_json_gives_defaults(self):
        store = ProgressStore(MemoryBlobStore({STORAGE_KEY: "{not json"}))
        assert store.load().total_xp == 0

    def test_non_object_gives_defaults(self):
        store = ProgressStore(MemoryBlobStore({STORAGE_KEY: "[1, 2, 3]"}))
        assert store.load().streak == 0

    def test_invalid_values_give_defaults(self):
        saved = json.dumps({"total_xp": -10})
        store = ProgressStore(MemoryBlobStore({STORAGE_KEY: saved}))
        assert store.load().total_xp == 0

    def test_partial_record_merged_over_defaults(self):
        saved = json.dumps({"total_xp": 40, "streak": 2})
        user = ProgressStore(MemoryBlobStore({STORAGE_KEY: saved})).load()
        assert user.total_xp == 40
        assert user.streak == 2
        assert user.reading == UserProgress()
        assert user.badges == []

    def test_custom_key(self):
        blobs = MemoryBlobStore()
        ProgressStore(blobs, key="other").save(User(total_xp=5))
        assert blobs.get(STORAGE_KEY) is None
        assert ProgressStore(blobs, key="other").load().total_xp == 5


class TestSQLiteStore:

    def test_creates_database(self, tmp_path):
        db_path = tmp_path / "nested" / "progress.db"
        SQLiteBlobStore(db_path)
        assert db_path.exists()

    def test_get_missing_key(self, tmp_path):
        assert SQLiteBlobStore(tmp_path / "progress.db").get("nope") is None

    def test_set_overwrites(self, tmp_path):
        blobs = SQLiteBlobStore(tmp_path / "progress.db")
        blobs.set("k", "one")
        blobs.set("k", "two")
        assert blobs.get("k") == "two"

    def test_persists_across_instances(self, tmp_path):
        db_path = tmp_path / "progress.db"
        ProgressStore(SQLiteBlobStore(db_path)).save(User(total_xp=75, streak=4))

        user = ProgressStore(SQLiteBlobStore(db_path)).load()
        assert user.total_xp == 75
        assert user.streak == 4
