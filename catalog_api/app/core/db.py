"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a cursor context manager that commits on success
(``get_cursor``) and applying migrations on application start
(``init_db``).  It uses SQLite as a lightweight embedded database; to
switch to another DBMS you would replace connection logic and adapt SQL
syntax accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from .config import settings
from .exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        -- The UNIQUE constraint on users.email is the source of truth for
        -- email uniqueness; the service level check is only a fast path.
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE,
            password TEXT,
            created_at TEXT,
            updated_at TEXT
        );

        CREATE TABLE IF NOT EXISTS products (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            description TEXT,
            price TEXT NOT NULL,
            quantity INTEGER NOT NULL DEFAULT 0,
            category TEXT,
            created_at TEXT,
            updated_at TEXT
        );
        """,
    ),
    # Migration 2: indexes for name filtering
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_users_name ON users(name);
        CREATE INDEX IF NOT EXISTS idx_products_name ON products(name);
        """,
    ),
]


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the configured path is absolute, use it directly.  Otherwise
    resolve it relative to the project root.
    """
    db_url = database_url or settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection(
    database_path: Optional[str] = None, timeout: Optional[float] = None
) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.
    ``timeout`` is how long to wait on a locked database and defaults
    to ``settings.db_timeout_seconds``.
    Failures to open the database are reported as
    ``StoreUnavailableError``.
    """
    db_path = database_path or get_database_path()
    if timeout is None:
        timeout = settings.db_timeout_seconds
    try:
        conn = sqlite3.connect(db_path, timeout=timeout)
    except sqlite3.Error as e:
        raise StoreUnavailableError(f"Cannot open database: {e}") from e
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(
    database_path: Optional[str] = None, timeout: Optional[float] = None
) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit.

    The transaction is committed when the block exits normally and rolled
    back otherwise.
    """
    conn = get_connection(database_path, timeout)
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(database_path: Optional[str] = None) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  If you add a new migration, append it with an
    incremented version number.
    """
    db_path = database_path or get_database_path()
    with get_cursor(db_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                logger.info("Applying migration %s to %s", version, db_path)
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
