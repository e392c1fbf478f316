"""
SQLite database integration.

This module provides functions for resolving the database location
(``get_database_path``), obtaining a connection (``get_connection``),
a cursor context manager (``get_cursor``) and creating the schema on
application start (``init_db``).  SQLite is used as a lightweight
embedded database; to switch to another DBMS you would replace the
connection logic and adapt the SQL in ``SongRepository``.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


# Largest value SQLite can bind to an INTEGER parameter.
MAX_SQLITE_INTEGER = 2**63 - 1

SCHEMA = """
CREATE TABLE IF NOT EXISTS songs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    "group" TEXT NOT NULL,
    song TEXT NOT NULL,
    release_date TEXT NOT NULL DEFAULT '',
    text TEXT NOT NULL DEFAULT '',
    link TEXT NOT NULL DEFAULT ''
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_songs_group_song ON songs("group", song);
"""


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    If ``database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return str((base_dir / database_url).resolve())


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  A deterministic ``casefold`` SQL function is registered for
    case-insensitive matching; SQLite's own ``lower``/``LIKE`` only fold
    ASCII letters.
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    conn.create_function("casefold", 1, _casefold, deterministic=True)
    return conn


@contextmanager
def get_cursor(db_path: str) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, commit on success and always close the connection."""
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(db_path: str) -> None:
    """Create the ``songs`` table and its indices if they do not exist."""
    with get_cursor(db_path) as cursor:
        cursor.executescript(SCHEMA)
