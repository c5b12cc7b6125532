"""
Business logic for concerts.

Concerts have no auxiliary resources, so each mutation is a single
statement inside a transaction.  Event dates are stored normalised to
ISO 8601 (UTC, without offset) so that ordering by ``event_date``
sorts chronologically.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.db import transaction
from ..core.errors import AppError, NotFoundError
from ..schemas.concert import ConcertCreate, ConcertRead
from ..validation.common import parse_date
from .results import service_result

logger = logging.getLogger(__name__)

CONCERT_COLUMNS = "id, city, event_date, venue, event_name, event_url, created_at, updated_at"


def _row_to_concert_read(row: sqlite3.Row) -> ConcertRead:
    return ConcertRead(
        id=row["id"],
        city=row["city"],
        event_date=row["event_date"],
        venue=row["venue"],
        event_name=row["event_name"],
        event_url=row["event_url"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _fetch_concert(cursor: sqlite3.Cursor, concert_id: int) -> Optional[sqlite3.Row]:
    return cursor.execute(f"SELECT {CONCERT_COLUMNS} FROM concert WHERE id = ?", (concert_id,)).fetchone()


def _column_values(data: ConcertCreate) -> tuple:
    event_date = parse_date(data.event_date or "")
    return (
        data.city,
        event_date.isoformat() if event_date else data.event_date,
        data.venue or None,
        data.event_name or None,
        data.event_url,
    )


def get_all_concerts(conn: sqlite3.Connection) -> List[ConcertRead]:
    """Return all concerts, latest event first."""
    try:
        rows = conn.execute(f"SELECT {CONCERT_COLUMNS} FROM concert ORDER BY event_date DESC, id DESC").fetchall()
    except sqlite3.Error as exc:
        logger.exception("Failed to fetch concerts")
        raise AppError("Failed to fetch concerts") from exc
    return [_row_to_concert_read(row) for row in rows]


def get_concert_by_id(conn: sqlite3.Connection, concert_id: int) -> ConcertRead:
    try:
        row = _fetch_concert(conn.cursor(), concert_id)
    except OverflowError as exc:
        raise NotFoundError("Concert") from exc
    except sqlite3.Error as exc:
        logger.exception("Failed to fetch concert %s", concert_id)
        raise AppError("Failed to fetch concert") from exc
    if row is None:
        raise NotFoundError("Concert")
    return _row_to_concert_read(row)


@service_result("Failed to create concert")
def create_concert(conn: sqlite3.Connection, data: ConcertCreate) -> ConcertRead:
    with transaction(conn) as cursor:
        cursor.execute(
            """
            INSERT INTO concert (city, event_date, venue, event_name, event_url)
            VALUES (?, ?, ?, ?, ?)
            """,
            _column_values(data),
        )
        concert_id = cursor.lastrowid
        row = _fetch_concert(cursor, concert_id)
    logger.info("Created concert %s in %s", concert_id, data.city)
    return _row_to_concert_read(row)


@service_result("Failed to update concert")
def update_concert(conn: sqlite3.Connection, concert_id: int, data: ConcertCreate) -> ConcertRead:
    with transaction(conn) as cursor:
        cursor.execute(
            """
            UPDATE concert
            SET city = ?, event_date = ?, venue = ?, event_name = ?, event_url = ?,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
            """,
            (*_column_values(data), concert_id),
        )
        if cursor.rowcount == 0:
            raise NotFoundError("Concert")
        row = _fetch_concert(cursor, concert_id)
    logger.info("Updated concert %s", concert_id)
    return _row_to_concert_read(row)


@service_result("Failed to delete concert")
def delete_concert(conn: sqlite3.Connection, concert_id: int) -> None:
    with transaction(conn) as cursor:
        cursor.execute("DELETE FROM concert WHERE id = ?", (concert_id,))
        if cursor.rowcount == 0:
            raise NotFoundError("Concert")
    logger.info("Deleted concert %s", concert_id)
