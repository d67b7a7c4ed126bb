"""Persistence for the best streak across sessions."""

from __future__ import annotations

import logging
import sqlite3
from datetime import UTC, datetime
from pathlib import Path

SCHEMA_VERSION = 1
HIGH_SCORE_KEY = "spellingBees_highScore"

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """Raised when the score store cannot be read or written."""


def _score_from_raw(raw: str | None) -> int:
    """Return a stored score as a non-negative int, 0 when missing or unusable."""
    if raw is None:
        return 0
    try:
        value = int(raw.strip())
    except ValueError:
        value = -1
    if value < 0:
        logger.warning("Ignoring unparsable stored high score %r", raw)
        return 0
    return value


class HighScoreStore:
    """SQLite key-value store holding the persisted high score."""

    def __init__(self, db_path: Path | str) -> None:
        """Open the database and bring its schema up to date.

        Raises PersistenceError when the file cannot be opened or migrated.
        """
        target = str(db_path)
        conn: sqlite3.Connection | None = None
        try:
            if isinstance(db_path, Path):
                db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(target)
            conn.row_factory = sqlite3.Row
            self._conn = conn
            self._apply_migrations()
        except PersistenceError:
            if conn is not None:
                conn.close()
            raise
        except (sqlite3.Error, OSError) as exc:
            if conn is not None:
                conn.close()
            raise PersistenceError(f"Could not open score database {target}: {exc}") from exc

    def _apply_migrations(self) -> None:
        """Apply forward-only schema migrations to latest version."""
        current = int(self._conn.execute("PRAGMA user_version").fetchone()[0])
        if current > SCHEMA_VERSION:
            raise PersistenceError(f"Database schema version {current} is newer than supported {SCHEMA_VERSION}.")

        with self._conn:
            self._conn.execute("""
                CREATE TABLE IF NOT EXISTS schema_migrations (
                    version INTEGER PRIMARY KEY,
                    applied_at TEXT NOT NULL
                )
                """)

        for version in range(current + 1, SCHEMA_VERSION + 1):
            if version == 1:
                self._migrate_to_v1()
            with self._conn:
                self._conn.execute(f"PRAGMA user_version = {version}")
                self._conn.execute(
                    "INSERT OR REPLACE INTO schema_migrations (version, applied_at) VALUES (?, ?)",
                    (version, datetime.now(UTC).isoformat()),
                )

    def _migrate_to_v1(self) -> None:
        """Create the key-value settings table."""
        with self._conn:
            self._conn.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """)

    def get_value(self, key: str) -> str | None:
        """Return the raw stored value for a key."""
        try:
            row = self._conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not read '{key}': {exc}") from exc
        if row is None:
            return None
        return str(row["value"])

    def set_value(self, key: str, value: str) -> None:
        """Insert or overwrite one key."""
        now = datetime.now(UTC).isoformat()
        try:
            with self._conn:
                self._conn.execute(
                    """
                    INSERT INTO settings (key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value, now),
                )
        except sqlite3.Error as exc:
            raise PersistenceError(f"Could not write '{key}': {exc}") from exc

    def load_high_score(self) -> int:
        """Return the stored high score, 0 when absent or unparsable."""
        return _score_from_raw(self.get_value(HIGH_SCORE_KEY))

    def save_high_score(self, value: int) -> None:
        """Persist a new high score."""
        self.set_value(HIGH_SCORE_KEY, str(int(value)))

    def close(self) -> None:
        """Close db connection."""
        self._conn.close()


class MemoryScoreStore:
    """In-process score store for runs without a database."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(values or {})

    def load_high_score(self) -> int:
        return _score_from_raw(self.values.get(HIGH_SCORE_KEY))

    def save_high_score(self, value: int) -> None:
        self.values[HIGH_SCORE_KEY] = str(int(value))

    def close(self) -> None:
        pass
