"""
SQLite-backed incident store.

Embedded-database alternative to the JSON file. Each record is one row
holding the same JSON document the file store writes, keyed by an
autoincrement id so that SELECT ... ORDER BY id is arrival order.

An append is a single INSERT in its own transaction, which makes it
atomic without rewriting the whole collection.
"""

import json
import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from pydantic import ValidationError

from incidents.base import IncidentStore, StorageReadError, StorageWriteError
from incidents.types import IncidentCollection, IncidentRecord

logger = logging.getLogger(__name__)


class SQLiteIncidentStore(IncidentStore):
    """
    SQLite incident storage.

    Design:
    - One table: incidents
    - Columns: id (order), data (JSON document), created_at
    - No UPDATE or DELETE statements anywhere: append-only
    """

    def __init__(self, db_path: Optional[str] = None):
        """
        Args:
            db_path: Path to SQLite database file.
                    If None, uses a shared in-memory database (tests only).
        """
        self.db_path = db_path or ":memory:"
        # A plain ":memory:" database disappears with its connection, so
        # in-memory mode keeps one connection open for the store's lifetime.
        # Executor threads share it, so every use holds _memory_lock.
        self._memory_lock = threading.Lock()
        self._memory_conn = (
            sqlite3.connect(self.db_path, check_same_thread=False)
            if self.db_path == ":memory:"
            else None
        )
        self._initialize_db()

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        if self._memory_conn is not None:
            with self._memory_lock:
                yield self._memory_conn
            return

        conn = sqlite3.connect(self.db_path)
        try:
            yield conn
        finally:
            conn.close()

    def _initialize_db(self) -> None:
        """
        Create schema if missing.

        Failures are logged, not raised; the store then fails on first use
        with StorageReadError/StorageWriteError.
        """
        try:
            with self._connection() as conn:
                cursor = conn.cursor()

                if self.db_path != ":memory:":
                    cursor.execute("PRAGMA journal_mode=WAL")
                    cursor.execute("PRAGMA synchronous=FULL")

                cursor.execute("""
                    CREATE TABLE IF NOT EXISTS incidents (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        data TEXT NOT NULL,
                        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                    )
                """)

                conn.commit()

            logger.debug(f"SQLite incident store initialized: {self.db_path}")
        except sqlite3.Error as e:
            logger.error(f"Failed to initialize SQLite incident store: {str(e)}")

    def load(self) -> IncidentCollection:
        try:
            with self._connection() as conn:
                rows = conn.execute("SELECT data FROM incidents ORDER BY id").fetchall()
        except sqlite3.Error as e:
            logger.error(f"SQLite error during incident load: {str(e)}")
            raise StorageReadError(f"Incident database unavailable: {e}") from e

        try:
            return [IncidentRecord.from_document(json.loads(row[0])) for row in rows]
        except (json.JSONDecodeError, ValidationError, TypeError) as e:
            logger.error(f"Corrupted incident row: {str(e)}")
            raise StorageReadError(f"Corrupted incident row: {e}") from e

    def append(self, record: IncidentRecord) -> None:
        data_json = json.dumps(record.to_document(), ensure_ascii=False)

        try:
            with self._connection() as conn:
                with conn:
                    conn.execute("INSERT INTO incidents (data) VALUES (?)", (data_json,))
        except sqlite3.Error as e:
            logger.error(
                f"SQLite error during incident append: {str(e)}",
                extra={"reporter_address": record.reporter_address},
            )
            raise StorageWriteError(f"Incident database unavailable: {e}") from e

        logger.info(f"Incident stored in SQLite: reporter={record.reporter_address}")
