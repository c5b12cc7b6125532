"""
Post endpoints for API v1.

Anyone may list and read posts; creating, updating and deleting them
requires a bearer token.  Payload strings are trimmed before they are
validated and stored.
"""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends, status

from ....core.db import get_db
from ....core.security import get_current_user
from ....schemas.common import ApiResponse
from ....schemas.post import PostCreate, PostRead, PostUpdate
from ....services import post_service
from ....services.image_store import ImageStore, get_image_store
from ....validation.post import sanitize_post, validate_create_post, validate_update_post
from ..responses import ensure_valid, require_id, unwrap

router = APIRouter()


@router.get("", response_model=ApiResponse[List[PostRead]], response_model_exclude_unset=True)
def list_posts(conn: sqlite3.Connection = Depends(get_db)) -> ApiResponse[List[PostRead]]:
    """Return all posts, newest first."""
    posts = post_service.get_all_posts(conn)
    return ApiResponse(data=posts, message="Posts retrieved successfully")


@router.get("/{post_id}", response_model=ApiResponse[PostRead], response_model_exclude_unset=True)
def get_post(post_id: str, conn: sqlite3.Connection = Depends(get_db)) -> ApiResponse[PostRead]:
    """Retrieve a single post by ID.

    Returns HTTP 400 if the ID is not a number and 404 if the post does
    not exist.
    """
    post = post_service.get_post_by_id(conn, require_id(post_id, "Post"))
    return ApiResponse(data=post, message="Post retrieved successfully")


@router.post(
    "",
    response_model=ApiResponse[PostRead],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_post(
    post_in: PostCreate,
    conn: sqlite3.Connection = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
    current_user: dict = Depends(get_current_user),
) -> ApiResponse[PostRead]:
    """Create a post, uploading ``img64`` when present."""
    data = sanitize_post(post_in)
    ensure_valid(validate_create_post(data))
    post = unwrap(post_service.create_post(conn, data, image_store), "Failed to create post")
    return ApiResponse(data=post, message="Post created successfully")


@router.put("/{post_id}", response_model=ApiResponse[PostRead], response_model_exclude_unset=True)
def update_post(
    post_id: str,
    post_in: PostCreate,
    conn: sqlite3.Connection = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
    current_user: dict = Depends(get_current_user),
) -> ApiResponse[PostRead]:
    """Replace the texts of a post and optionally its image."""
    entity_id = require_id(post_id, "Post")
    data = sanitize_post(PostUpdate(**post_in.model_dump(), id=post_id))
    ensure_valid(validate_update_post(data))
    post = unwrap(post_service.update_post(conn, entity_id, data, image_store), "Failed to update post")
    return ApiResponse(data=post, message="Post updated successfully")


@router.delete("/{post_id}", response_model=ApiResponse, response_model_exclude_unset=True)
def delete_post(
    post_id: str,
    conn: sqlite3.Connection = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
    current_user: dict = Depends(get_current_user),
) -> ApiResponse:
    entity_id = require_id(post_id, "Post")
    unwrap(post_service.delete_post(conn, entity_id, image_store), "Failed to delete post")
    return ApiResponse(message="Post deleted successfully")
