"""
Persistence for songs.

``SongRepository`` wraps the ``songs`` table.  Every call opens its own
SQLite connection, commits on success and closes it, so one repository
instance can be shared by concurrent requests.  All queries use
parameterized statements; any ``sqlite3.Error`` is logged and
re-raised as ``StoreError`` carrying a client-safe message.

``build_song_filter`` is the query builder behind the catalog listing:
it turns the optional group/song/release date filters into a WHERE
clause, and ``SongRepository.list_songs`` applies it twice, once to
count the whole filtered set and once to fetch a single page.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..core.db import MAX_SQLITE_INTEGER, get_cursor
from ..core.exceptions import Conflict, StoreError
from ..schemas.song import SongDetail, SongRead

logger = logging.getLogger(__name__)

SONG_COLUMNS = 'id, "group", song, release_date, text, link'

# Columns a partial update may touch, keyed by field name.
UPDATABLE_COLUMNS = {
    "group": '"group"',
    "song": "song",
    "release_date": "release_date",
    "text": "text",
    "link": "link",
}


@dataclass
class SongFilter:
    """Optional catalog filters.

    ``group`` and ``song`` are case-insensitive substrings;
    ``release_date`` must equal the stored text exactly.  Empty values
    are ignored.
    """

    group: Optional[str] = None
    song: Optional[str] = None
    release_date: Optional[str] = None


def build_song_filter(song_filter: SongFilter) -> Tuple[str, List[Any]]:
    """Return a WHERE clause (possibly empty) and its parameters."""
    where_clauses: List[str] = []
    params: List[Any] = []
    if song_filter.group:
        where_clauses.append('instr(casefold("group"), casefold(?)) > 0')
        params.append(song_filter.group)
    if song_filter.song:
        where_clauses.append("instr(casefold(song), casefold(?)) > 0")
        params.append(song_filter.song)
    if song_filter.release_date:
        where_clauses.append("release_date = ?")
        params.append(song_filter.release_date)
    if not where_clauses:
        return "", params
    return " WHERE " + " AND ".join(where_clauses), params


def page_offset(page: int, limit: int) -> int:
    """Offset of the first row on a 1-based ``page``.

    Capped at the largest SQLite integer; such a page is empty anyway.
    """
    return min((page - 1) * limit, MAX_SQLITE_INTEGER)


def is_storable_id(song_id: int) -> bool:
    """Whether ``song_id`` fits in a SQLite INTEGER and can name a row."""
    return -MAX_SQLITE_INTEGER - 1 <= song_id <= MAX_SQLITE_INTEGER


class SongRepository:
    """Data access for the ``songs`` table."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    @contextmanager
    def _cursor(self, failure_message: str) -> Iterator[sqlite3.Cursor]:
        try:
            with get_cursor(self.db_path) as cursor:
                yield cursor
        except sqlite3.Error as exc:
            logger.error("%s: %s", failure_message, exc)
            raise StoreError(failure_message) from exc

    def count(self, song_filter: Optional[SongFilter] = None) -> int:
        """Number of songs matching ``song_filter`` (all songs if omitted)."""
        where, params = build_song_filter(song_filter or SongFilter())
        with self._cursor("Failed to retrieve total count") as cursor:
            row = cursor.execute(f"SELECT COUNT(*) AS total FROM songs{where}", params).fetchone()
        return row["total"]

    def find(self, song_filter: SongFilter, offset: int, limit: int) -> List[SongRead]:
        """Songs matching ``song_filter`` ordered by id, sliced by offset/limit."""
        where, params = build_song_filter(song_filter)
        query = f"SELECT {SONG_COLUMNS} FROM songs{where} ORDER BY id ASC LIMIT ? OFFSET ?"
        with self._cursor("Failed to retrieve songs") as cursor:
            rows = cursor.execute(query, (*params, limit, offset)).fetchall()
        return [self._row_to_song(row) for row in rows]

    def list_songs(self, song_filter: SongFilter, page: int, limit: int) -> Tuple[int, List[SongRead]]:
        """Return the filtered total and the songs on ``page``."""
        total = self.count(song_filter)
        songs = self.find(song_filter, offset=page_offset(page, limit), limit=limit)
        return total, songs

    def get(self, song_id: int) -> Optional[SongRead]:
        """Retrieve a song by id or ``None``."""
        if not is_storable_id(song_id):
            return None
        with self._cursor("Failed to retrieve the song") as cursor:
            row = cursor.execute(
                f"SELECT {SONG_COLUMNS} FROM songs WHERE id = ?",
                (song_id,),
            ).fetchone()
        return self._row_to_song(row) if row else None

    def find_by_group_and_song(self, group: str, song: str) -> Optional[SongRead]:
        """Retrieve the song with exactly this group and title, if any."""
        with self._cursor("Failed to retrieve the song") as cursor:
            row = cursor.execute(
                f'SELECT {SONG_COLUMNS} FROM songs WHERE "group" = ? AND song = ?',
                (group, song),
            ).fetchone()
        return self._row_to_song(row) if row else None

    def insert(self, group: str, song: str, detail: SongDetail) -> SongRead:
        """Insert a new song and return it with its assigned id.

        Raises ``Conflict`` when the unique (group, song) index rejects
        the row, which happens when a concurrent request created the
        same song after the caller's existence check.
        """
        with self._cursor("Failed to save the song") as cursor:
            try:
                cursor.execute(
                    """
                    INSERT INTO songs ("group", song, release_date, text, link)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (group, song, detail.release_date, detail.text, detail.link),
                )
            except sqlite3.IntegrityError as exc:
                logger.warning("Duplicate song rejected by the database: %s by %s", song, group)
                raise Conflict(group, song) from exc
            song_id = cursor.lastrowid
        return SongRead(
            id=song_id,
            group=group,
            song=song,
            release_date=detail.release_date,
            text=detail.text,
            link=detail.link,
        )

    def update(self, song_id: int, changes: Dict[str, str]) -> Optional[SongRead]:
        """Apply ``changes`` (field name -> new value) to a song.

        Unknown field names are ignored.  Returns the updated song, or
        ``None`` if it does not exist.
        """
        if not is_storable_id(song_id):
            return None
        assignments = [f"{UPDATABLE_COLUMNS[name]} = ?" for name in changes if name in UPDATABLE_COLUMNS]
        values = [value for name, value in changes.items() if name in UPDATABLE_COLUMNS]
        with self._cursor("Failed to update the song") as cursor:
            if assignments:
                try:
                    cursor.execute(
                        f"UPDATE songs SET {', '.join(assignments)} WHERE id = ?",
                        (*values, song_id),
                    )
                except sqlite3.IntegrityError as exc:
                    logger.warning("Update of song %s collides with an existing song", song_id)
                    raise Conflict(changes.get("group", ""), changes.get("song", "")) from exc
            row = cursor.execute(
                f"SELECT {SONG_COLUMNS} FROM songs WHERE id = ?",
                (song_id,),
            ).fetchone()
        return self._row_to_song(row) if row else None

    def delete(self, song_id: int) -> bool:
        """Delete a song by id.

        Returns ``True`` if a record was deleted, ``False`` otherwise.
        """
        if not is_storable_id(song_id):
            return False
        with self._cursor("Failed to delete the song") as cursor:
            cursor.execute("DELETE FROM songs WHERE id = ?", (song_id,))
            affected = cursor.rowcount
        return affected > 0

    @staticmethod
    def _row_to_song(row: sqlite3.Row) -> SongRead:
        """Convert a database row to a SongRead schema instance."""
        return SongRead(
            id=row["id"],
            group=row["group"],
            song=row["song"],
            release_date=row["release_date"],
            text=row["text"],
            link=row["link"],
        )
