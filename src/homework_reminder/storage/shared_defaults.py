# src/homework_reminder/storage/shared_defaults.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import threading
import time
from pathlib import Path

logger = logging.getLogger(__name__)


class SqliteSharedDefaults:
    """
    Shared key-value namespace backed by a single SQLite file.

    Every surface (main list, glance, share ingest) opens its own instance on the
    same file, addressed by the same suite (app group) name. Values are opaque bytes.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection
    - each read or write is a single statement (atomic for the whole value)
    """

    def __init__(self, db_path: str | Path, suite_name: str) -> None:
        if not suite_name or not suite_name.strip():
            raise ValueError("suite_name is required")
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._suite = suite_name.strip()
        self._ensure_schema()
        logger.info("SharedDefaults ready db=%s suite=%s", self._db_path, self._suite)

    @property
    def suite_name(self) -> str:
        return self._suite

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS defaults (
                    suite TEXT NOT NULL,
                    key TEXT NOT NULL,
                    value BLOB,
                    updated_at REAL NOT NULL DEFAULT 0,
                    PRIMARY KEY (suite, key)
                )
                """
            )

            cur.execute("PRAGMA table_info(defaults)")
            cols = {row["name"] for row in cur.fetchall()}
            if "updated_at" not in cols:
                cur.execute("ALTER TABLE defaults ADD COLUMN updated_at REAL NOT NULL DEFAULT 0")
                logger.info("SharedDefaults migration: added column updated_at")

            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def data(self, key: str) -> bytes | None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                "SELECT value FROM defaults WHERE suite = ? AND key = ?",
                (self._suite, key),
            )
            row = cur.fetchone()
            if row is None or row["value"] is None:
                return None
            value = row["value"]
            return bytes(value) if not isinstance(value, str) else value.encode("utf-8")
        finally:
            conn.close()

    def set_data(self, key: str, value: bytes) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO defaults(suite, key, value, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(suite, key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (self._suite, key, sqlite3.Binary(value), time.time()),
            )
            conn.commit()
            logger.debug("SharedDefaults set suite=%s key=%s bytes=%d", self._suite, key, len(value))
        finally:
            conn.close()

    def remove(self, key: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM defaults WHERE suite = ? AND key = ?", (self._suite, key))
            conn.commit()
        finally:
            conn.close()


class InMemorySharedDefaults:
    """
    Dict-backed namespace.

    Share one instance between several surfaces to simulate separate processes
    that only see each other through the stored value.
    """

    def __init__(self, suite_name: str = "memory") -> None:
        self.suite_name = suite_name
        self._values: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def data(self, key: str) -> bytes | None:
        with self._lock:
            return self._values.get(key)

    def set_data(self, key: str, value: bytes) -> None:
        with self._lock:
            self._values[key] = bytes(value)

    def remove(self, key: str) -> None:
        with self._lock:
            self._values.pop(key, None)


def open_shared_defaults(db_path: str | Path, suite_name: str) -> SqliteSharedDefaults | None:
    """
    Open the shared namespace, or return None when it cannot be opened.

    Callers (TaskStore) treat None as "namespace unavailable": empty reads, no-op writes.
    """
    try:
        return SqliteSharedDefaults(db_path, suite_name)
    except Exception:
        logger.exception("Shared namespace unavailable db=%s suite=%s", db_path, suite_name)
        return None
