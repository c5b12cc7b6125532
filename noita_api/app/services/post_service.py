"""
Business logic for blog posts.

A post is inserted with a placeholder ``image_url``; when an image is
supplied it is uploaded as ``post-<id>.png`` and the row is pointed at
it before the transaction commits, so a failed upload leaves no post
behind.  Deleting a post removes the stored image afterwards on a
best-effort basis.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.config import settings
from ..core.db import transaction
from ..core.errors import AppError, NotFoundError
from ..schemas.post import PostCreate, PostRead
from .image_store import ImageStore, discard_image, store_image
from .results import service_result

logger = logging.getLogger(__name__)

POST_COLUMNS = "id, title_fr, title_de, content_fr, content_de, image_url, created_at, updated_at"


def _image_name(post_id: int) -> str:
    return f"post-{post_id}.png"


def _row_to_post_read(row: sqlite3.Row) -> PostRead:
    return PostRead(
        id=row["id"],
        title_fr=row["title_fr"],
        title_de=row["title_de"],
        content_fr=row["content_fr"],
        content_de=row["content_de"],
        image_url=row["image_url"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _fetch_post(cursor: sqlite3.Cursor, post_id: int) -> Optional[sqlite3.Row]:
    return cursor.execute(f"SELECT {POST_COLUMNS} FROM post WHERE id = ?", (post_id,)).fetchone()


def get_all_posts(conn: sqlite3.Connection) -> List[PostRead]:
    """Return all posts, newest first."""
    try:
        rows = conn.execute(f"SELECT {POST_COLUMNS} FROM post ORDER BY created_at DESC, id DESC").fetchall()
    except sqlite3.Error as exc:
        logger.exception("Failed to fetch posts")
        raise AppError("Failed to fetch posts") from exc
    return [_row_to_post_read(row) for row in rows]


def get_post_by_id(conn: sqlite3.Connection, post_id: int) -> PostRead:
    """Return a single post or raise ``NotFoundError``."""
    try:
        row = _fetch_post(conn.cursor(), post_id)
    except OverflowError as exc:
        raise NotFoundError("Post") from exc
    except sqlite3.Error as exc:
        logger.exception("Failed to fetch post %s", post_id)
        raise AppError("Failed to fetch post") from exc
    if row is None:
        raise NotFoundError("Post")
    return _row_to_post_read(row)


@service_result("Failed to create post")
def create_post(conn: sqlite3.Connection, data: PostCreate, image_store: ImageStore) -> PostRead:
    with transaction(conn) as cursor:
        cursor.execute(
            """
            INSERT INTO post (title_fr, title_de, content_fr, content_de, image_url)
            VALUES (?, ?, ?, ?, ?)
            """,
            (data.title_fr, data.title_de, data.content_fr, data.content_de, settings.image_placeholder),
        )
        post_id = cursor.lastrowid
        if data.img64:
            image_url = store_image(image_store, data.img64, _image_name(post_id))
            cursor.execute("UPDATE post SET image_url = ? WHERE id = ?", (image_url, post_id))
        row = _fetch_post(cursor, post_id)
    logger.info("Created post %s", post_id)
    return _row_to_post_read(row)


@service_result("Failed to update post")
def update_post(conn: sqlite3.Connection, post_id: int, data: PostCreate, image_store: ImageStore) -> PostRead:
    """Replace the texts of a post and, if ``img64`` is given, its image."""
    with transaction(conn) as cursor:
        current = _fetch_post(cursor, post_id)
        if current is None:
            raise NotFoundError("Post")
        image_url = current["image_url"]
        if data.img64:
            image_url = store_image(image_store, data.img64, _image_name(post_id))
        cursor.execute(
            """
            UPDATE post
            SET title_fr = ?, title_de = ?, content_fr = ?, content_de = ?, image_url = ?,
                updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
            """,
            (data.title_fr, data.title_de, data.content_fr, data.content_de, image_url, post_id),
        )
        row = _fetch_post(cursor, post_id)
    logger.info("Updated post %s", post_id)
    return _row_to_post_read(row)


@service_result("Failed to delete post")
def delete_post(conn: sqlite3.Connection, post_id: int, image_store: ImageStore) -> None:
    with transaction(conn) as cursor:
        current = _fetch_post(cursor, post_id)
        if current is None:
            raise NotFoundError("Post")
        cursor.execute("DELETE FROM post WHERE id = ?", (post_id,))
    logger.info("Deleted post %s", post_id)
    discard_image(image_store, current["image_url"])
