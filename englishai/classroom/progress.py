"""
ProgressStore - Persist the learner's progress record as a single JSON blob.

The record lives under one key in a key-value blob store:
- SQLiteBlobStore: ~/.englishai/progress.db (default)
- MemoryBlobStore: in-process dict, for tests and throwaway sessions

Loading never fails: a missing record yields defaults, and a corrupt one is
discarded in favour of defaults.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from englishai.config import DEFAULT_PROGRESS_DB
from englishai.schemas import User


logger = logging.getLogger(__name__)

STORAGE_KEY = "english-learning-progress"


class SQLiteBlobStore:
    """
    Key-value blob store backed by SQLite.

    Each call opens its own connection, so the store can be shared across
    Streamlit reruns.
    """

    def __init__(self, db_path: Optional[Path] = None):
        """
        Args:
            db_path: Path to progress.db (default: ~/.englishai/progress.db)
        """
        self.db_path = Path(db_path) if db_path else DEFAULT_PROGRESS_DB
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def get(self, key: str) -> Optional[str]:
        conn = self._get_connection()
        try:
            cursor = conn.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set(self, key: str, value: str):
        conn = self._get_connection()
        try:
            conn.execute(
                """INSERT INTO kv (key, value) VALUES (?, ?)
                   ON CONFLICT(key) DO UPDATE SET value = excluded.value""",
                (key, value)
            )
            conn.commit()
        finally:
            conn.close()


class MemoryBlobStore:
    """Dict-backed blob store."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str):
        self._data[key] = value


class ProgressStore:
    """
    Owns the persisted User record.

    The store is handed to whoever needs progress (the app, scripts, tests);
    there is no module-level user object.
    """

    def __init__(self, blob_store=None, key: str = STORAGE_KEY):
        self.blob_store = blob_store if blob_store is not None else SQLiteBlobStore()
        self.key = key

    def load(self) -> User:
        """Load the user record, merging saved fields over defaults."""
        defaults = User()
        saved = self.blob_store.get(self.key)
        if saved is None:
            return defaults

        try:
            data = json.loads(saved)
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            merged = {**defaults.model_dump(mode="json"), **data}
            return User.model_validate(merged)
        except (json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning(f"Discarding corrupt progress record: {e}")
            return defaults

    def save(self, user: User):
        """Persist the user record."""
        self.blob_store.set(self.key, user.model_dump_json())
