"""
Business logic for the homepage carousel.

Pictures are ordered by a ``position`` column that is UNIQUE in the
database.  At rest the carousel holds between
``settings.carousel_min_pictures`` and ``settings.carousel_max_pictures``
pictures and no two share a position.  Every mutation below runs in a
single ``BEGIN IMMEDIATE`` transaction, so the count checks and the
position arithmetic of concurrent requests are serialised.

SQLite enforces UNIQUE constraints row by row while an UPDATE runs,
not at the end of the statement.  Position changes are therefore
ordered so that no intermediate row state ever holds a duplicate:

* moving a picture swaps it with its neighbour through a sentinel
  slot outside the visible range;
* closing the gap left by a deletion first parks the affected rows on
  negative slots and then moves them to their final positions.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.config import settings
from ..core.db import transaction
from ..core.errors import AppError, CapacityError, MinimumCountError, NotFoundError, PositionError
from ..schemas.carousel import CarouselCreate, CarouselRead
from .image_store import ImageStore, discard_image, store_image
from .results import service_result

logger = logging.getLogger(__name__)

CAROUSEL_COLUMNS = "id, url, position, created_at, updated_at"


def _image_name(picture_id: int) -> str:
    return f"carousel-{picture_id}.png"


def _row_to_carousel_read(row: sqlite3.Row) -> CarouselRead:
    return CarouselRead(
        id=row["id"],
        url=row["url"],
        position=row["position"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _fetch_picture(cursor: sqlite3.Cursor, picture_id: int) -> Optional[sqlite3.Row]:
    return cursor.execute(
        f"SELECT {CAROUSEL_COLUMNS} FROM carousel_picture WHERE id = ?",
        (picture_id,),
    ).fetchone()


def _count_pictures(cursor: sqlite3.Cursor) -> int:
    return cursor.execute("SELECT COUNT(*) AS total FROM carousel_picture").fetchone()["total"]


def _set_position(cursor: sqlite3.Cursor, picture_id: int, position: int) -> None:
    cursor.execute(
        "UPDATE carousel_picture SET position = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
        (position, picture_id),
    )


def _close_gap(cursor: sqlite3.Cursor, deleted_position: int) -> None:
    """Shift every picture after ``deleted_position`` down by one."""
    cursor.execute(
        "UPDATE carousel_picture SET position = -position WHERE position > ?",
        (deleted_position,),
    )
    cursor.execute(
        "UPDATE carousel_picture SET position = -position - 1, updated_at = CURRENT_TIMESTAMP WHERE position < 0"
    )


def get_all_pictures(conn: sqlite3.Connection) -> List[CarouselRead]:
    """Return all pictures in display order."""
    try:
        rows = conn.execute(f"SELECT {CAROUSEL_COLUMNS} FROM carousel_picture ORDER BY position ASC").fetchall()
    except sqlite3.Error as exc:
        logger.exception("Failed to fetch pictures")
        raise AppError("Failed to fetch pictures") from exc
    return [_row_to_carousel_read(row) for row in rows]


def get_picture_by_id(conn: sqlite3.Connection, picture_id: int) -> CarouselRead:
    try:
        row = _fetch_picture(conn.cursor(), picture_id)
    except OverflowError as exc:
        raise NotFoundError("Picture") from exc
    except sqlite3.Error as exc:
        logger.exception("Failed to fetch picture %s", picture_id)
        raise AppError("Failed to fetch picture") from exc
    if row is None:
        raise NotFoundError("Picture")
    return _row_to_carousel_read(row)


@service_result("Failed to add picture")
def add_picture(conn: sqlite3.Connection, data: CarouselCreate, image_store: ImageStore) -> CarouselRead:
    """Append a picture after the current last position.

    The row is inserted with a placeholder URL to obtain its id, which
    names the stored file.  If the upload fails the whole transaction is
    rolled back and no row remains.
    """
    with transaction(conn) as cursor:
        if _count_pictures(cursor) >= settings.carousel_max_pictures:
            raise CapacityError(f"You cannot add more than {settings.carousel_max_pictures} pictures")

        next_position = cursor.execute(
            "SELECT COALESCE(MAX(position), 0) + 1 AS next_position FROM carousel_picture"
        ).fetchone()["next_position"]
        if next_position > settings.carousel_max_position:
            raise CapacityError(
                f"No free carousel position left (highest position is {settings.carousel_max_position})"
            )

        cursor.execute(
            "INSERT INTO carousel_picture (url, position) VALUES (?, ?)",
            (settings.image_placeholder, next_position),
        )
        picture_id = cursor.lastrowid
        url = store_image(image_store, data.picture64, _image_name(picture_id))
        cursor.execute("UPDATE carousel_picture SET url = ? WHERE id = ?", (url, picture_id))
        row = _fetch_picture(cursor, picture_id)
    logger.info("Added carousel picture %s at position %s", picture_id, next_position)
    return _row_to_carousel_read(row)


@service_result("Failed to update picture")
def update_picture(
    conn: sqlite3.Connection, picture_id: int, data: CarouselCreate, image_store: ImageStore
) -> CarouselRead:
    """Replace the image of a picture, keeping its position.

    The file is overwritten under the same name, so repeating the call
    is harmless.
    """
    with transaction(conn) as cursor:
        if _fetch_picture(cursor, picture_id) is None:
            raise NotFoundError("Picture")
        url = store_image(image_store, data.picture64, _image_name(picture_id))
        cursor.execute(
            "UPDATE carousel_picture SET url = ?, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
            (url, picture_id),
        )
        row = _fetch_picture(cursor, picture_id)
    logger.info("Replaced image of carousel picture %s", picture_id)
    return _row_to_carousel_read(row)


@service_result("Failed to delete picture")
def delete_picture(conn: sqlite3.Connection, picture_id: int, image_store: ImageStore) -> None:
    """Remove a picture and close the gap it leaves.

    Only the pictures after the deleted one move; gaps that already
    existed elsewhere are left alone.  The image file is removed after
    the commit.
    """
    with transaction(conn) as cursor:
        if _count_pictures(cursor) <= settings.carousel_min_pictures:
            raise MinimumCountError(
                f"You need at least {settings.carousel_min_pictures} pictures in the carousel"
            )
        picture = _fetch_picture(cursor, picture_id)
        if picture is None:
            raise NotFoundError("Picture")

        cursor.execute("DELETE FROM carousel_picture WHERE id = ?", (picture_id,))
        _close_gap(cursor, picture["position"])
    logger.info("Deleted carousel picture %s from position %s", picture_id, picture["position"])
    discard_image(image_store, picture["url"])


@service_result("Failed to switch positions")
def switch_positions(conn: sqlite3.Connection, picture_id: int, direction: str) -> None:
    """Swap a picture with its neighbour on the ``left`` or ``right``.

    The neighbour must sit exactly one position away; there is no
    wraparound at either end.
    """
    with transaction(conn) as cursor:
        picture_a = _fetch_picture(cursor, picture_id)
        if picture_a is None:
            raise NotFoundError("Picture")

        position_a = picture_a["position"]
        target = position_a - 1 if direction == "left" else position_a + 1
        picture_b = cursor.execute(
            "SELECT id, position FROM carousel_picture WHERE position = ?",
            (target,),
        ).fetchone()
        if picture_b is None:
            raise PositionError(f"Cannot move picture {direction}. No picture found at target position.")

        _set_position(cursor, picture_id, settings.carousel_position_sentinel)
        _set_position(cursor, picture_b["id"], position_a)
        _set_position(cursor, picture_id, picture_b["position"])
    logger.info("Moved carousel picture %s %s to position %s", picture_id, direction, target)
