# src/storage/sqlite_store.py
"""SQLite-based profile store (STORE_BACKEND=sqlite).

Uses stdlib sqlite3. Embeddings are stored as raw BLOBs in the
little-endian float32 layout of core.vector_codec; they are returned
untouched so that corrupt buffers surface at decode time.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from creditai.core.models import Profile
from creditai.storage.base_profile_store import BaseProfileStore, DuplicateProfileError

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS profiles (
    identity TEXT PRIMARY KEY,
    display_name TEXT NOT NULL,
    numeric_score INTEGER NOT NULL CHECK (numeric_score BETWEEN 0 AND 1000),
    behavior_text TEXT NOT NULL,
    embedding BLOB,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_profiles_display_name ON profiles(display_name);
"""

_COLUMNS = "identity, display_name, numeric_score, behavior_text, embedding, created_at"


class SqliteProfileStore(BaseProfileStore):
    """SQLite-backed profile store."""

    def __init__(self, db_path: Path | str) -> None:
        if str(db_path) == ":memory:":
            target = ":memory:"
        else:
            path = Path(db_path).expanduser()
            path.parent.mkdir(parents=True, exist_ok=True)
            target = str(path)
        self._conn = sqlite3.connect(target)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.executescript(_SCHEMA)

    async def get(self, identity: str) -> Profile | None:
        cursor = self._conn.execute(
            f"SELECT {_COLUMNS} FROM profiles WHERE identity = ?", (identity,)
        )
        row = cursor.fetchone()
        return _row_to_profile(row) if row else None

    async def list_candidates(self, exclude_identity: str) -> list[Profile]:
        cursor = self._conn.execute(
            f"SELECT {_COLUMNS} FROM profiles "
            "WHERE identity != ? AND embedding IS NOT NULL",
            (exclude_identity,),
        )
        return [_row_to_profile(row) for row in cursor.fetchall()]

    async def insert(self, profile: Profile) -> None:
        try:
            with self._conn:
                self._conn.execute(
                    f"INSERT INTO profiles ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
                    (
                        profile.identity,
                        profile.display_name,
                        profile.numeric_score,
                        profile.behavior_text,
                        profile.embedding,
                        profile.created_at.isoformat(),
                    ),
                )
        except sqlite3.IntegrityError as e:
            if "UNIQUE" in str(e):
                raise DuplicateProfileError(profile.identity) from e
            raise
        logger.debug("Inserted profile %s", profile.identity)

    async def list_profiles(self, offset: int = 0, limit: int = 20) -> list[Profile]:
        cursor = self._conn.execute(
            f"SELECT {_COLUMNS} FROM profiles "
            "ORDER BY display_name, identity LIMIT ? OFFSET ?",
            (limit, offset),
        )
        return [_row_to_profile(row) for row in cursor.fetchall()]

    async def count(self) -> int:
        cursor = self._conn.execute("SELECT COUNT(*) FROM profiles")
        return int(cursor.fetchone()[0])

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()


def _row_to_profile(row: tuple) -> Profile:
    identity, name, score, text, embedding, created_at = row
    return Profile(
        identity=identity,
        display_name=name,
        numeric_score=score,
        behavior_text=text,
        embedding=bytes(embedding) if embedding is not None else None,
        created_at=datetime.fromisoformat(created_at),
    )
