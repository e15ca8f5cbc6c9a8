"""
Service layer for songs.

This module provides the CRUD operations behind the ``/songs``
routes.  Every method opens its own connection and closes it before
returning, so requests never share database state.

Validation happens before any persistence attempt and is reported by
raising ``SongValidationError``.  A missing record is not an error:
``get_song`` returns ``None`` and ``update_song``/``delete_song``
return ``False``.  Backend failures (``sqlite3.Error``) propagate to
the caller.

All queries use parameterized statements to avoid SQL injection
vulnerabilities.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional, Union

from song_library_api.app.core.db import get_connection
from song_library_api.app.core.exceptions import SongConflictError, SongValidationError
from song_library_api.app.schemas.song import SongCreate, SongRead, SongUpdate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Title and Artist are required"
ID_MISMATCH_MESSAGE = "ID mismatch"

# SQLite INTEGER is a signed 64-bit value; larger ids cannot be stored.
MIN_SONG_ID = -(2 ** 63)
MAX_SONG_ID = 2 ** 63 - 1


class SongService:
    """Service class for managing songs."""

    @classmethod
    async def list_songs(cls) -> List[SongRead]:
        """Return every stored song ordered by id."""
        conn = get_connection()
        try:
            rows = conn.execute("SELECT * FROM songs ORDER BY id ASC").fetchall()
            return [cls._row_to_song_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def get_song(cls, song_id: int) -> Optional[SongRead]:
        """Retrieve a single song by its ID, or ``None`` if absent."""
        if not cls._is_storable_id(song_id):
            return None
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM songs WHERE id = ?", (song_id,)).fetchone()
            if not row:
                return None
            return cls._row_to_song_read(row)
        finally:
            conn.close()

    @classmethod
    async def create_song(cls, data: SongCreate) -> SongRead:
        """Insert a new song and return the stored record.

        Any ``id`` carried by ``data`` is discarded; the database
        assigns a fresh one.
        """
        cls._validate_fields(data)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT INTO songs (title, artist, release_date) VALUES (?, ?, ?)",
                (data.title, data.artist, data.release_date.isoformat()),
            )
            song_id = cursor.lastrowid
            conn.commit()
            logger.info("Created song %s ('%s' by %s)", song_id, data.title, data.artist)
            row = cursor.execute("SELECT * FROM songs WHERE id = ?", (song_id,)).fetchone()
            return cls._row_to_song_read(row)
        finally:
            conn.close()

    @classmethod
    async def update_song(cls, song_id: int, data: SongUpdate) -> bool:
        """Replace title, artist and release date of an existing song.

        Raises ``SongValidationError`` when ``data.id`` differs from
        ``song_id`` or a required field is blank; neither check reads
        the database.  Returns ``False`` if the song does not exist.

        A write that loses a race is checked once more: if the song
        has vanished meanwhile the result is ``False``, otherwise
        ``SongConflictError`` is raised.
        """
        if data.id != song_id:
            raise SongValidationError(ID_MISMATCH_MESSAGE)
        cls._validate_fields(data)
        if not cls._is_storable_id(song_id):
            return False

        conn = get_connection()
        try:
            cursor = conn.cursor()
            existing = cursor.execute("SELECT id FROM songs WHERE id = ?", (song_id,)).fetchone()
            if not existing:
                return False
            try:
                cursor.execute(
                    "UPDATE songs SET title = ?, artist = ?, release_date = ? WHERE id = ?",
                    (data.title, data.artist, data.release_date.isoformat(), song_id),
                )
                affected = cursor.rowcount
                conn.commit()
            except sqlite3.OperationalError as exc:
                if not cls._is_write_conflict(exc):
                    raise
                conn.rollback()
                logger.warning("Write conflict updating song %s: %s", song_id, exc)
                affected = 0
        finally:
            conn.close()

        if affected:
            logger.info("Updated song %s", song_id)
            return True

        if not await cls.song_exists(song_id):
            logger.info("Song %s was deleted during update", song_id)
            return False
        raise SongConflictError(f"Song {song_id} could not be updated due to a concurrent write")

    @classmethod
    async def delete_song(cls, song_id: int) -> bool:
        """Delete a song by ID.

        Returns ``True`` if a record was deleted, ``False`` otherwise.
        """
        if not cls._is_storable_id(song_id):
            return False
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM songs WHERE id = ?", (song_id,))
            affected = cursor.rowcount
            conn.commit()
            if affected:
                logger.info("Deleted song %s", song_id)
            return affected > 0
        finally:
            conn.close()

    @classmethod
    async def song_exists(cls, song_id: int) -> bool:
        if not cls._is_storable_id(song_id):
            return False
        conn = get_connection()
        try:
            row = conn.execute("SELECT 1 FROM songs WHERE id = ? LIMIT 1", (song_id,)).fetchone()
            return row is not None
        finally:
            conn.close()

    @staticmethod
    def _is_storable_id(song_id: int) -> bool:
        return MIN_SONG_ID <= song_id <= MAX_SONG_ID

    @staticmethod
    def _validate_fields(data: Union[SongCreate, SongUpdate]) -> None:
        if not data.title.strip() or not data.artist.strip():
            raise SongValidationError(REQUIRED_FIELDS_MESSAGE)

    @staticmethod
    def _is_write_conflict(exc: sqlite3.OperationalError) -> bool:
        message = str(exc).lower()
        return "locked" in message or "busy" in message

    @staticmethod
    def _row_to_song_read(row: sqlite3.Row) -> SongRead:
        """Convert a database row to a SongRead schema instance."""
        return SongRead(
            id=row["id"],
            title=row["title"],
            artist=row["artist"],
            release_date=row["release_date"],
        )
