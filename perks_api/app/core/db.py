"""
SQLite database integration and a simple migration system.

This module provides ``get_connection`` for the repository layer,
``get_cursor`` for short scripted work, and ``init_db`` which applies
pending migrations on application start.  Applied migration versions
are recorded in the ``migrations`` table and new ones are executed in
order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings


# Each entry is (version, sql).  Append new migrations with an
# incremented version number; never edit one that has shipped.
MIGRATIONS: list[tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS perks (
            id TEXT PRIMARY KEY,
            title TEXT NOT NULL CHECK (length(title) >= 2),
            description TEXT NOT NULL DEFAULT '',
            category TEXT NOT NULL DEFAULT 'other'
                CHECK (category IN ('food', 'tech', 'travel', 'fitness', 'other')),
            discount_percent REAL NOT NULL DEFAULT 0
                CHECK (discount_percent >= 0 AND discount_percent <= 100),
            merchant TEXT NOT NULL DEFAULT '',
            created_at TEXT NOT NULL,
            UNIQUE (merchant, title)
        );
        """,
    ),
    (
        2,
        """
        -- Title lookups and the default newest-first listing.
        CREATE INDEX IF NOT EXISTS idx_perks_title ON perks(title);
        CREATE INDEX IF NOT EXISTS idx_perks_created_at ON perks(created_at);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path,
    use it directly.  Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be read by name.
    """
    conn = sqlite3.connect(get_database_path())
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


def init_db() -> None:
    """Initialise the database and apply pending migrations."""
    with get_cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
