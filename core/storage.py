"""
Key/value persistence for session preferences (the last search term).

Schema
──────
table: settings
  key   TEXT PRIMARY KEY
  value TEXT NOT NULL
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from config.settings import DEFAULT_DB_PATH

logger = logging.getLogger(__name__)


class SqliteStorage:
    """SQLite-backed string store used to remember the search term."""

    def __init__(self, path: Path = DEFAULT_DB_PATH) -> None:
        self.path = Path(path)

    @contextmanager
    def _connect(self):
        """Yield a connected sqlite3.Connection, creating the file/dir if needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(str(self.path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        """Create the settings table if it doesn't exist yet."""
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS settings (
                    key   TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
        logger.info("Session DB initialised at %s", self.path)

    def load_string(self, key: str) -> Optional[str]:
        """Return the value stored under *key*, or None if absent."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM settings WHERE key = ?", (key,)
            ).fetchone()
        return None if row is None else row["value"]

    def save_string(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO settings (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
        logger.debug("Saved %s=%r", key, value)


class MemoryStorage:
    """Dict-backed stand-in for :class:`SqliteStorage`."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def load_string(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def save_string(self, key: str, value: str) -> None:
        self.values[key] = value
