"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), applying migrations on application start
(``init_db``) and seeding the sample song catalogue.  It uses SQLite
as a lightweight embedded database; to switch to another DBMS you
would replace connection logic and adapt SQL syntax accordingly.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings

logger = logging.getLogger(__name__)

# Version of the migration that creates the ``songs`` table.  Seeding
# only happens in the ``init_db`` call that applies it.
SONGS_SCHEMA_VERSION = 1

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: songs table
    (
        SONGS_SCHEMA_VERSION,
        """
        CREATE TABLE IF NOT EXISTS songs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            artist TEXT NOT NULL,
            release_date TIMESTAMP NOT NULL
        );
        """,
    ),
]

# Sample catalogue: three artists with three tracks each.  Release
# dates are midnight UTC.
SEED_SONGS: list[tuple[str, str, str]] = [
    ("Me Myself and I", "De La Soul", "1989-03-14T00:00:00Z"),
    ("The Magic Number", "De La Soul", "1989-03-14T00:00:00Z"),
    ("Buddy", "De La Soul", "1989-03-14T00:00:00Z"),
    ("I Choose You", "TimeFlies", "2011-06-06T00:00:00Z"),
    ("Just a Little Bit", "TimeFlies", "2011-06-06T00:00:00Z"),
    ("Turn Back Time", "TimeFlies", "2011-06-06T00:00:00Z"),
    ("Weir", "Killing Heidi", "2000-03-20T00:00:00Z"),
    ("Mascara", "Killing Heidi", "2000-03-20T00:00:00Z"),
    ("Superman", "Killing Heidi", "2000-03-20T00:00:00Z"),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the package root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # song_library_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.  No
    type detection/parsing is enabled; release dates are stored and
    returned as ISO‑8601 text and parsed by the schemas.
    """
    conn = sqlite3.connect(get_database_path(), timeout=settings.database_timeout)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def seed_songs(cursor: sqlite3.Cursor) -> int:
    """Insert the sample catalogue and return the number of rows added."""
    cursor.executemany(
        "INSERT INTO songs (title, artist, release_date) VALUES (?, ?, ?)",
        SEED_SONGS,
    )
    return len(SEED_SONGS)


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  When the songs schema is created by this call and
    ``settings.seed_database`` is enabled, the empty table is filled
    with ``SEED_SONGS``.  Later starts never reseed, even if every
    song has since been deleted.
    """
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        created_schema = False
        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                logger.info("Applied migration %s", version)
                if version == SONGS_SCHEMA_VERSION:
                    created_schema = True
                current_version = version

        if created_schema and settings.seed_database:
            count = cursor.execute("SELECT COUNT(*) AS n FROM songs").fetchone()["n"]
            if count == 0:
                inserted = seed_songs(cursor)
                logger.info("Seeded %s sample songs", inserted)
