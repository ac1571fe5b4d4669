"""Key-value stores backing attempt state."""

import sqlite3
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import structlog

from ..errors import PersistenceError


class AttemptStore(ABC):
    """String key-value store that outlives a single timer instance."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Removing an absent key is a no-op."""


class InMemoryAttemptStore(AttemptStore):
    """Dict-backed store. Lives as long as the process, like a browser session."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = str(value)

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def clear(self) -> None:
        """Drop everything, as when the user clears site data or the session ends."""
        with self._lock:
            self._data.clear()

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._data)

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data


class SqliteAttemptStore(AttemptStore):
    """SQLite-based store. Survives process restarts, the analogue of a page reload."""

    def __init__(self, db_path: str = "attempts.db"):
        self.db_path = Path(db_path)
        self.logger = structlog.get_logger("attempt.store")
        self._lock = threading.Lock()

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        if self.db_path.parent and not self.db_path.parent.exists():
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with self._get_connection("init") as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.commit()

    @contextmanager
    def _get_connection(self, operation: str, key: Optional[str] = None) -> Iterator[sqlite3.Connection]:
        """Get database connection, translating driver errors."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error", operation=operation, key=key, error=str(e))
            raise PersistenceError(
                f"Attempt store {operation} failed: {e}",
                operation=operation,
                target=key or str(self.db_path)
            ) from e
        finally:
            if conn:
                conn.close()

    def get(self, key: str) -> Optional[str]:
        with self._get_connection("get", key) as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            with self._get_connection("set", key) as conn:
                conn.execute(
                    "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
                    (key, str(value))
                )
                conn.commit()

    def remove(self, key: str) -> None:
        with self._lock:
            with self._get_connection("remove", key) as conn:
                conn.execute("DELETE FROM kv WHERE key = ?", (key,))
                conn.commit()

    def keys(self, prefix: str = "") -> list[str]:
        """List stored keys, optionally restricted to a prefix."""
        with self._get_connection("keys") as conn:
            rows = conn.execute("SELECT key FROM kv ORDER BY key").fetchall()
            return [row[0] for row in rows if row[0].startswith(prefix)]

    def clear(self) -> int:
        """Delete every key and return how many were removed."""
        with self._lock:
            with self._get_connection("clear") as conn:
                cursor = conn.execute("DELETE FROM kv")
                conn.commit()
                deleted = cursor.rowcount
                self.logger.info("Cleared attempt store", deleted=deleted)
                return deleted
