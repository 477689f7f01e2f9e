"""
SQLite connection, schema and transaction handling for the snapshot store.

The connection runs with isolation_level=None so that transactions are only
ever opened explicitly through transaction().
"""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from scrapeyourcity.exceptions import IntegrityViolation, StorageError
from scrapeyourcity.snapshots.fingerprint import FINGERPRINT_VERSION

logger = logging.getLogger(__name__)

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS store_metadata (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS contents (
        id INTEGER PRIMARY KEY,
        hash TEXT UNIQUE NOT NULL,
        html TEXT NOT NULL,
        markdown TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS projects (
        id INTEGER PRIMARY KEY,
        url TEXT UNIQUE NOT NULL,
        title TEXT NOT NULL,
        state TEXT NOT NULL,
        content_hash TEXT NOT NULL REFERENCES contents (hash)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS project_observations (
        id INTEGER PRIMARY KEY,
        project_id INTEGER NOT NULL REFERENCES projects (id),
        observed_at TEXT NOT NULL,
        content_hash TEXT NOT NULL REFERENCES contents (hash)
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_project_observations_project
        ON project_observations (project_id, id)
    """,
)


def open_database(path: str | Path) -> sqlite3.Connection:
    """
    Open (and if needed create) a snapshot database.

    Args:
        path: Database file path, or ":memory:"

    Returns:
        Connection with foreign keys enforced and sqlite3.Row rows

    Raises:
        StorageError: If the file cannot be opened or was written with a
            different fingerprint version
    """
    try:
        conn = sqlite3.connect(str(path), isolation_level=None)
    except sqlite3.Error as e:
        raise StorageError(f"Failed to open database {path}: {e}") from e

    try:
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        for statement in SCHEMA:
            conn.execute(statement)
        conn.execute(
            "INSERT OR IGNORE INTO store_metadata (key, value) VALUES ('fingerprint_version', ?)",
            (FINGERPRINT_VERSION,),
        )
        row = conn.execute(
            "SELECT value FROM store_metadata WHERE key = 'fingerprint_version'"
        ).fetchone()
    except sqlite3.Error as e:
        conn.close()
        raise StorageError(f"Failed to initialize database {path}: {e}") from e

    if row["value"] != FINGERPRINT_VERSION:
        conn.close()
        raise StorageError(
            f"Database {path} uses fingerprint version {row['value']}, "
            f"expected {FINGERPRINT_VERSION}; migrate it before recording new snapshots"
        )

    logger.debug(f"Opened snapshot database: {path}")
    return conn


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """
    Run a block inside one IMMEDIATE transaction.

    Commits on success. On any exception the transaction is rolled back and
    SQLite errors are re-raised as IntegrityViolation or StorageError.
    """
    try:
        conn.execute("BEGIN IMMEDIATE")
    except sqlite3.Error as e:
        raise StorageError(f"Failed to begin transaction: {e}") from e

    try:
        yield conn
        conn.execute("COMMIT")
    except BaseException as e:
        if conn.in_transaction:
            conn.execute("ROLLBACK")
        if isinstance(e, sqlite3.IntegrityError):
            raise IntegrityViolation(str(e)) from e
        if isinstance(e, sqlite3.Error):
            raise StorageError(str(e)) from e
        raise
