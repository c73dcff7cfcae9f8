# File: slotbook/storage/database.py
"""
SQLite-backed persistence for slotbook.

One Database owns one connection to one file. All statements run under
an internal lock, and every sqlite3 failure surfaces as StorageError.
The layer never retries.

Schema history:
    v1  events carried a single `datetime` column
    v2  events carry `from_datetime` / `to_datetime`
"""

import sqlite3
import threading
from contextlib import contextmanager
from datetime import timedelta
from pathlib import Path
from typing import Iterator, List, Optional, Sequence, Union

from slotbook.models.common import coerce_datetime, format_datetime
from slotbook.models.errors import StorageError
from slotbook.utils.logger import LoggerMixin

SCHEMA_VERSION = 2
MEMORY = ":memory:"

# Duration given to single-instant events when upgrading from v1.
LEGACY_EVENT_DURATION = timedelta(minutes=60)

EVENTS_DDL = """
CREATE TABLE IF NOT EXISTS events (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    location TEXT NOT NULL DEFAULT '',
    status TEXT NOT NULL DEFAULT 'ongoing',
    from_datetime TEXT NOT NULL,
    to_datetime TEXT NOT NULL,
    created_at TEXT
)
"""

APPOINTMENTS_DDL = """
CREATE TABLE IF NOT EXISTS appointments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    first_name TEXT NOT NULL,
    last_name TEXT NOT NULL,
    phone TEXT NOT NULL,
    email TEXT,
    note TEXT NOT NULL DEFAULT '',
    "datetime" TEXT NOT NULL,
    created_at TEXT
)
"""

INDEXES_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_events_from ON events (from_datetime)",
    "CREATE INDEX IF NOT EXISTS idx_events_status ON events (status)",
    'CREATE INDEX IF NOT EXISTS idx_appointments_datetime ON appointments ("datetime")',
)


class Database(LoggerMixin):
    """Durable store for the events and appointments collections."""

    NAME = "slotbook"

    def __init__(self, path: Union[str, Path] = MEMORY):
        self.path = path if str(path) == MEMORY else Path(path)
        self._lock = threading.RLock()
        self._conn: Optional[sqlite3.Connection] = None
        self.open()

    # ==================== Connection ====================

    def open(self) -> None:
        """Open the connection and bring the schema up to date."""
        with self._lock:
            if self._conn is not None:
                return
            try:
                if isinstance(self.path, Path):
                    self.path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(
                    str(self.path),
                    check_same_thread=False,
                    isolation_level=None,
                )
                conn.row_factory = sqlite3.Row
            except (sqlite3.Error, OSError) as e:
                raise StorageError(f"Cannot open database {self.path}: {e}") from e
            self._conn = conn
            try:
                self._upgrade()
            except StorageError:
                self.close()
                raise
            self.logger.debug(f"Opened {self.NAME} database at {self.path}")

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            try:
                self._conn.close()
            except sqlite3.Error as e:
                raise StorageError(f"Cannot close database {self.path}: {e}") from e
            finally:
                self._conn = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StorageError(f"Database {self.path} is closed")
        return self._conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Run a block inside one write transaction.

        Commits on success, rolls back on any exception. sqlite3 errors are
        re-raised as StorageError.
        """
        with self._lock:
            conn = self._connection()
            try:
                conn.execute("BEGIN IMMEDIATE")
                yield conn
                conn.execute("COMMIT")
            except sqlite3.Error as e:
                self._rollback(conn)
                raise StorageError(f"{self.NAME} transaction failed: {e}") from e
            except BaseException:
                self._rollback(conn)
                raise

    def _rollback(self, conn: sqlite3.Connection) -> None:
        if not conn.in_transaction:
            return
        try:
            conn.execute("ROLLBACK")
        except sqlite3.Error as e:
            self.logger.error(f"Rollback failed on {self.path}: {e}", exc_info=True)

    def fetch_all(self, sql: str, params: Sequence = ()) -> List[sqlite3.Row]:
        """Run a read-only query outside of a transaction."""
        with self._lock:
            try:
                return self._connection().execute(sql, params).fetchall()
            except sqlite3.Error as e:
                raise StorageError(f"{self.NAME} query failed: {e}") from e

    def schema_version(self) -> int:
        return self.fetch_all("PRAGMA user_version")[0][0]

    # ==================== Schema ====================

    def _upgrade(self) -> None:
        with self.transaction() as conn:
            version = conn.execute("PRAGMA user_version").fetchone()[0]
            if version == SCHEMA_VERSION:
                return
            if version > SCHEMA_VERSION:
                raise StorageError(
                    f"Database {self.path} has schema v{version}, "
                    f"this release supports up to v{SCHEMA_VERSION}"
                )

            if "datetime" in _columns(conn, "events"):
                self._migrate_events_v1(conn)

            conn.execute(EVENTS_DDL)
            conn.execute(APPOINTMENTS_DDL)
            for ddl in INDEXES_DDL:
                conn.execute(ddl)
            conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")

        if version == 0:
            self.logger.info(f"Initialized {self.NAME} database schema v{SCHEMA_VERSION}")
        else:
            self.logger.info(f"Upgraded {self.NAME} database from v{version} to v{SCHEMA_VERSION}")

    def _migrate_events_v1(self, conn: sqlite3.Connection) -> None:
        """Turn each single-instant event into a [datetime, datetime + 60 min) block."""
        rows = conn.execute("SELECT * FROM events").fetchall()
        sequence = _sequence_value(conn, "events")

        conn.execute("ALTER TABLE events RENAME TO events_v1")
        conn.execute(EVENTS_DDL)

        for row in rows:
            legacy = dict(zip(row.keys(), row))
            try:
                start = coerce_datetime(legacy.get("datetime"), "datetime")
            except ValueError as e:
                raise StorageError(f"Cannot migrate event {legacy.get('id')}: {e}") from e
            if start is None:
                raise StorageError(f"Cannot migrate event {legacy.get('id')}: no datetime")

            conn.execute(
                "INSERT INTO events (id, title, description, location, status, "
                "from_datetime, to_datetime, created_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    legacy.get("id"),
                    legacy.get("title") or "",
                    legacy.get("description") or "",
                    legacy.get("location") or "",
                    legacy.get("status") or "ongoing",
                    format_datetime(start),
                    format_datetime(start + LEGACY_EVENT_DURATION),
                    legacy.get("created_at"),
                ),
            )

        conn.execute("DROP TABLE events_v1")
        # Keep ids strictly increasing across the migration.
        if sequence > _sequence_value(conn, "events"):
            if conn.execute("SELECT 1 FROM sqlite_sequence WHERE name = 'events'").fetchone():
                conn.execute("UPDATE sqlite_sequence SET seq = ? WHERE name = 'events'", (sequence,))
            else:
                conn.execute("INSERT INTO sqlite_sequence (name, seq) VALUES ('events', ?)", (sequence,))
        self.logger.info(f"Migrated {len(rows)} legacy events to the from/to layout")


def _columns(conn: sqlite3.Connection, table: str) -> List[str]:
    return [row["name"] for row in conn.execute(f'PRAGMA table_info("{table}")').fetchall()]


def _sequence_value(conn: sqlite3.Connection, table: str) -> int:
    exists = conn.execute(
        "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = 'sqlite_sequence'"
    ).fetchone()
    if not exists:
        return 0
    row = conn.execute("SELECT seq FROM sqlite_sequence WHERE name = ?", (table,)).fetchone()
    return row["seq"] if row else 0
