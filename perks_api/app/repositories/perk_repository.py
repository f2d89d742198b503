"""SQLite-backed store for perk records."""

from __future__ import annotations

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from perks_api.app.core.db import get_connection
from perks_api.app.core.exceptions import UniqueConstraintViolation


COLUMNS = ("id", "title", "description", "category", "discount_percent", "merchant", "created_at")
WRITABLE_COLUMNS = frozenset(COLUMNS) - {"id", "created_at"}

# Newest first; rowid breaks ties between records created in the same
# microsecond.
_ORDER_BY = "ORDER BY created_at DESC, rowid DESC"


class PerkRepository:
    """Persistence collaborator for the perk service.

    Every method opens its own connection and closes it before
    returning, so a repository instance holds no state between calls
    and can be shared freely across requests.

    Records are plain dicts keyed by column name.  A write that breaks
    the ``UNIQUE(merchant, title)`` index raises
    :class:`UniqueConstraintViolation`; any other database error
    propagates unchanged.
    """

    def __init__(self) -> None:
        self._log = logging.getLogger(f"{__name__}.{type(self).__name__}")

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert ``record`` with a fresh id and creation timestamp."""
        values = {key: value for key, value in record.items() if key in WRITABLE_COLUMNS}
        values["id"] = uuid.uuid4().hex
        values["created_at"] = datetime.now(timezone.utc).isoformat()
        columns = ", ".join(values)
        placeholders = ", ".join("?" for _ in values)
        conn = get_connection()
        try:
            try:
                conn.execute(
                    f"INSERT INTO perks ({columns}) VALUES ({placeholders})",
                    tuple(values.values()),
                )
            except sqlite3.IntegrityError as exc:
                self._raise_if_unique(exc)
                raise
            conn.commit()
            row = conn.execute("SELECT * FROM perks WHERE id = ?", (values["id"],)).fetchone()
            return dict(row)
        finally:
            conn.close()

    def find_by_id(self, perk_id: str) -> Optional[Dict[str, Any]]:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM perks WHERE id = ?", (perk_id,)).fetchone()
            return dict(row) if row else None
        finally:
            conn.close()

    def find_all(self) -> List[Dict[str, Any]]:
        conn = get_connection()
        try:
            rows = conn.execute(f"SELECT * FROM perks {_ORDER_BY}").fetchall()
            return [dict(row) for row in rows]
        finally:
            conn.close()

    def find_exact(self, field: str, value: Any) -> List[Dict[str, Any]]:
        """Return records whose ``field`` equals ``value`` exactly."""
        if field not in COLUMNS:
            raise ValueError(f"Unknown perk column: {field}")
        conn = get_connection()
        try:
            rows = conn.execute(
                f"SELECT * FROM perks WHERE {field} = ? {_ORDER_BY}",
                (value,),
            ).fetchall()
            return [dict(row) for row in rows]
        finally:
            conn.close()

    def update_by_id(self, perk_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Set exactly ``fields`` on the record and return it.

        Returns ``None`` when no record has ``perk_id``.  An empty
        ``fields`` mapping performs no write.
        """
        unknown = set(fields) - WRITABLE_COLUMNS
        if unknown:
            raise ValueError(f"Cannot update perk columns: {', '.join(sorted(unknown))}")
        conn = get_connection()
        try:
            if fields:
                assignments = ", ".join(f"{column} = ?" for column in fields)
                try:
                    conn.execute(
                        f"UPDATE perks SET {assignments} WHERE id = ?",
                        (*fields.values(), perk_id),
                    )
                except sqlite3.IntegrityError as exc:
                    self._raise_if_unique(exc)
                    raise
                conn.commit()
            row = conn.execute("SELECT * FROM perks WHERE id = ?", (perk_id,)).fetchone()
            return dict(row) if row else None
        finally:
            conn.close()

    def delete_by_id(self, perk_id: str) -> Optional[Dict[str, Any]]:
        """Remove the record and return it, or ``None`` if it did not exist."""
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM perks WHERE id = ?", (perk_id,)).fetchone()
            if row is None:
                return None
            conn.execute("DELETE FROM perks WHERE id = ?", (perk_id,))
            conn.commit()
            return dict(row)
        finally:
            conn.close()

    def _raise_if_unique(self, exc: sqlite3.IntegrityError) -> None:
        if "UNIQUE constraint failed" in str(exc):
            self._log.debug("Unique constraint violated: %s", exc)
            raise UniqueConstraintViolation(str(exc)) from exc
