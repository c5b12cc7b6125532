"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), running a block of statements as one write
transaction (``transaction``), applying migrations on application
start (``init_db``) and a per-request connection dependency for FastAPI
routes (``get_db``).

Connections are opened in autocommit mode so that transactions are
started explicitly.  ``transaction`` begins with ``BEGIN IMMEDIATE``,
which takes SQLite's write lock before the first read: two writers can
never both pass a check such as "fewer than 100 pictures" and then act
on it, because the second one waits until the first has committed or
rolled back.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator

from .config import settings

logger = logging.getLogger(__name__)


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative ones are resolved against
    the current working directory.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    return os.path.abspath(db_url)


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  The connection may be handed between threads (FastAPI runs
    the dependency and the endpoint in its thread pool) but is never
    used by two threads at once.
    """
    db_path = get_database_path()
    conn = sqlite3.connect(
        db_path,
        timeout=settings.database_timeout,
        isolation_level=None,
        check_same_thread=False,
    )
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Cursor]:
    """Run the enclosed block as a single write transaction.

    Commits when the block finishes normally and rolls back when it
    raises; the exception is propagated either way.
    """
    conn.execute("BEGIN IMMEDIATE")
    cursor = conn.cursor()
    try:
        yield cursor
    except BaseException:
        conn.rollback()
        raise
    else:
        conn.commit()
    finally:
        cursor.close()


def get_db() -> Iterator[sqlite3.Connection]:
    """FastAPI dependency yielding a connection closed after the request."""
    conn = get_connection()
    try:
        yield conn
    finally:
        conn.close()


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS post (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title_fr TEXT NOT NULL,
            title_de TEXT NOT NULL,
            content_fr TEXT NOT NULL,
            content_de TEXT NOT NULL,
            image_url TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        CREATE TABLE IF NOT EXISTS concert (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            city TEXT NOT NULL,
            event_date TIMESTAMP NOT NULL,
            venue TEXT,
            event_name TEXT,
            event_url TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        -- No CHECK on position: swapping two pictures parks one of them
        -- on a sentinel slot outside the visible range.
        CREATE TABLE IF NOT EXISTS carousel_picture (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            url TEXT NOT NULL UNIQUE,
            position INTEGER NOT NULL UNIQUE,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: indices used by the list endpoints
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_post_created_at ON post(created_at);
        CREATE INDEX IF NOT EXISTS idx_concert_event_date ON concert(event_date);
        CREATE INDEX IF NOT EXISTS idx_concert_city ON concert(city);
        """,
    ),
]


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entries of
    ``MIGRATIONS``.  To change the schema, append a migration with an
    incremented version number.
    """
    db_path = get_database_path()
    os.makedirs(os.path.dirname(db_path), exist_ok=True)
    conn = get_connection()
    try:
        conn.execute("CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)")
        row = conn.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                # executescript commits on its own, so each migration is
                # recorded right after its statements ran.
                conn.executescript(sql)
                conn.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
                logger.info("Applied database migration %s", version)
                current_version = version
    finally:
        conn.close()
