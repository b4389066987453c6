"""SQLite cache of the last good CV record per data source."""

from __future__ import annotations

import sqlite3
import time
from pathlib import Path

from cv_renderer.models.cv import CVData

DEFAULT_DB_PATH = Path.home() / ".cv-renderer" / "records.db"


class RecordCache:
    """SQLite-backed record cache; entries never expire unless ttl_days is set."""

    def __init__(
        self,
        db_path: str | Path = DEFAULT_DB_PATH,
        ttl_days: int | None = None,
    ):
        self.db_path = Path(db_path)
        self.ttl_seconds = ttl_days * 86400 if ttl_days is not None else None
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS cv_records (
                    source TEXT PRIMARY KEY,
                    record_json TEXT NOT NULL,
                    cached_at REAL NOT NULL
                )
            """)

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(str(self.db_path))

    def _expired(self, cached_at: float) -> bool:
        return self.ttl_seconds is not None and time.time() - cached_at > self.ttl_seconds

    def get(self, source: str) -> CVData | None:
        """Get the cached record for a source if present and not expired."""
        key = source.strip()
        with self._connect() as conn:
            row = conn.execute(
                "SELECT record_json, cached_at FROM cv_records WHERE source = ?",
                (key,),
            ).fetchone()

        if row is None:
            return None

        record_json, cached_at = row
        if self._expired(cached_at):
            self.delete(source)
            return None

        return CVData.model_validate_json(record_json)

    def put(self, source: str, cv: CVData) -> None:
        """Cache a validated record."""
        key = source.strip()
        with self._connect() as conn:
            conn.execute(
                """INSERT OR REPLACE INTO cv_records
                   (source, record_json, cached_at)
                   VALUES (?, ?, ?)""",
                (key, cv.model_dump_json(by_alias=True), time.time()),
            )

    def delete(self, source: str) -> None:
        """Delete a cached record."""
        key = source.strip()
        with self._connect() as conn:
            conn.execute("DELETE FROM cv_records WHERE source = ?", (key,))

    def clear(self) -> int:
        """Clear all cached entries. Returns count of deleted rows."""
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM cv_records")
            return cursor.rowcount

    def stats(self) -> dict:
        """Return cache statistics."""
        with self._connect() as conn:
            total = conn.execute("SELECT COUNT(*) FROM cv_records").fetchone()[0]
            if self.ttl_seconds is None:
                expired = 0
            else:
                expired = conn.execute(
                    "SELECT COUNT(*) FROM cv_records WHERE ? - cached_at > ?",
                    (time.time(), self.ttl_seconds),
                ).fetchone()[0]
        return {"total": total, "expired": expired, "active": total - expired}
