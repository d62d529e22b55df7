"""SQLite-based cache for downloaded license texts.

This module provides a persistent cache so that license texts fetched
from the SPDX license list are not downloaded again for every report.
"""

import contextlib
import sqlite3
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Optional


class LicenseTextCache:
    """SQLite cache for storing license texts.

    Entries expire after a TTL (30 days by default) so that corrections
    to the upstream license list are eventually picked up.

    Attributes:
        db_path: Path to the SQLite database file.
        ttl_days: Number of days before cache entries expire (default: 30).
    """

    DEFAULT_TTL_DAYS = 30

    def __init__(
        self,
        db_path: Optional[Path] = None,
        ttl_days: int = DEFAULT_TTL_DAYS,
    ):
        """Initialize the license text cache.

        Args:
            db_path: Path to SQLite database. If None, uses
                ~/.cache/attribution_document/license_texts.db.
            ttl_days: Number of days before cache entries expire.
        """
        if db_path is None:
            cache_dir = Path.home() / ".cache" / "attribution_document"
            cache_dir.mkdir(parents=True, exist_ok=True)
            db_path = cache_dir / "license_texts.db"

        self.db_path = db_path
        self.ttl_days = ttl_days
        self._conn: Optional[sqlite3.Connection] = None
        self._init_database()

    def __enter__(self) -> "LicenseTextCache":
        """Enter context manager, keeping connection open."""
        self._conn = sqlite3.connect(self.db_path)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager, closing connection."""
        if self._conn:
            self._conn.close()
            self._conn = None

    @contextlib.contextmanager
    def _connect(self):
        """Get a database connection.

        Reuses the connection opened by the context manager, otherwise
        opens a new one and closes it after use.
        """
        if self._conn:
            yield self._conn
        else:
            conn = sqlite3.connect(self.db_path)
            try:
                yield conn
            finally:
                conn.close()

    def _init_database(self) -> None:
        """Initialize the database schema if it doesn't exist."""
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS license_texts (
                    license_id TEXT NOT NULL PRIMARY KEY,
                    text TEXT NOT NULL,
                    fetched_at TEXT NOT NULL,
                    expires_at TEXT NOT NULL
                )
                """
            )
            cursor.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_expires
                ON license_texts(expires_at)
                """
            )
            conn.commit()

    def get(self, license_id: str) -> Optional[str]:
        """Retrieve the cached text of a license.

        Args:
            license_id: License identifier.

        Returns:
            The license text if cached and not expired, None otherwise.
        """
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT text, expires_at FROM license_texts WHERE license_id = ?",
                (license_id,),
            )
            row = cursor.fetchone()

        if row is None:
            return None

        text, expires_at_str = row
        if datetime.now(UTC) >= datetime.fromisoformat(expires_at_str):
            return None
        return text

    def get_batch(self, license_ids: list[str]) -> dict[str, str]:
        """Retrieve the cached texts of multiple licenses.

        Args:
            license_ids: License identifiers.

        Returns:
            Mapping of license identifier to text. Only hits are included.
        """
        results: dict[str, str] = {}
        ids = list(dict.fromkeys(license_ids))
        if not ids:
            return results

        now = datetime.now(UTC)

        # Chunk to avoid SQLite limits
        chunk_size = 900
        for i in range(0, len(ids), chunk_size):
            chunk = ids[i : i + chunk_size]
            placeholders = ",".join(["?"] * len(chunk))

            with self._connect() as conn:
                cursor = conn.cursor()
                cursor.execute(
                    f"""
                    SELECT license_id, text, expires_at
                    FROM license_texts
                    WHERE license_id IN ({placeholders})
                    """,
                    chunk,
                )
                rows = cursor.fetchall()

            for license_id, text, expires_at_str in rows:
                if now >= datetime.fromisoformat(expires_at_str):
                    continue
                results[license_id] = text

        return results

    def set(self, license_id: str, text: str) -> None:
        """Store the text of a license.

        Args:
            license_id: License identifier.
            text: License text.
        """
        self.set_batch({license_id: text})

    def set_batch(self, items: dict[str, str]) -> None:
        """Store the texts of multiple licenses.

        Args:
            items: Mapping of license identifier to text.
        """
        if not items:
            return

        fetched_at = datetime.now(UTC)
        expires_at = fetched_at + timedelta(days=self.ttl_days)
        rows = [
            (license_id, text, fetched_at.isoformat(), expires_at.isoformat())
            for license_id, text in items.items()
        ]

        with self._connect() as conn:
            cursor = conn.cursor()
            # REPLACE handles both insert and update
            cursor.executemany(
                """
                REPLACE INTO license_texts (license_id, text, fetched_at, expires_at)
                VALUES (?, ?, ?, ?)
                """,
                rows,
            )
            conn.commit()

    def clear(self, license_id: Optional[str] = None) -> None:
        """Clear cache entries.

        Args:
            license_id: If specified, clear only this license.
                If None, clear all entries.
        """
        with self._connect() as conn:
            cursor = conn.cursor()
            if license_id is None:
                cursor.execute("DELETE FROM license_texts")
            else:
                cursor.execute(
                    "DELETE FROM license_texts WHERE license_id = ?",
                    (license_id,),
                )
            conn.commit()

    def info(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with cache information:
                - path: Path to cache database file
                - count: Number of cached entries
                - size_bytes: Database file size in bytes
        """
        with self._connect() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT COUNT(*) FROM license_texts")
            count = cursor.fetchone()[0]

        size_bytes = self.db_path.stat().st_size if self.db_path.exists() else 0

        return {
            "path": str(self.db_path),
            "count": count,
            "size_bytes": size_bytes,
        }
