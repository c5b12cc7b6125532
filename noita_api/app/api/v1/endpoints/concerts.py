"""
Concert endpoints for API v1.

Concert listings are public.  Administrators manage them through the
authenticated create, update and delete routes.
"""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends, status

from ....core.db import get_db
from ....core.security import get_current_user
from ....schemas.common import ApiResponse
from ....schemas.concert import ConcertCreate, ConcertRead, ConcertUpdate
from ....services import concert_service
from ....validation.concert import sanitize_concert, validate_create_concert, validate_update_concert
from ..responses import ensure_valid, require_id, unwrap

router = APIRouter()


@router.get("", response_model=ApiResponse[List[ConcertRead]], response_model_exclude_unset=True)
def list_concerts(conn: sqlite3.Connection = Depends(get_db)) -> ApiResponse[List[ConcertRead]]:
    """Return all concerts, latest event first."""
    concerts = concert_service.get_all_concerts(conn)
    return ApiResponse(data=concerts, message="Concerts retrieved successfully")


@router.get("/{concert_id}", response_model=ApiResponse[ConcertRead], response_model_exclude_unset=True)
def get_concert(concert_id: str, conn: sqlite3.Connection = Depends(get_db)) -> ApiResponse[ConcertRead]:
    concert = concert_service.get_concert_by_id(conn, require_id(concert_id, "Concert"))
    return ApiResponse(data=concert, message="Concert retrieved successfully")


@router.post(
    "",
    response_model=ApiResponse[ConcertRead],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def create_concert(
    concert_in: ConcertCreate,
    conn: sqlite3.Connection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> ApiResponse[ConcertRead]:
    data = sanitize_concert(concert_in)
    ensure_valid(validate_create_concert(data))
    concert = unwrap(concert_service.create_concert(conn, data), "Failed to create concert")
    return ApiResponse(data=concert, message="Concert created successfully")


@router.put("/{concert_id}", response_model=ApiResponse[ConcertRead], response_model_exclude_unset=True)
def update_concert(
    concert_id: str,
    concert_in: ConcertCreate,
    conn: sqlite3.Connection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> ApiResponse[ConcertRead]:
    """Replace every field of a concert.

    Returns HTTP 404 if the concert does not exist.
    """
    entity_id = require_id(concert_id, "Concert")
    data = sanitize_concert(ConcertUpdate(**concert_in.model_dump(), id=concert_id))
    ensure_valid(validate_update_concert(data))
    concert = unwrap(concert_service.update_concert(conn, entity_id, data), "Failed to update concert")
    return ApiResponse(data=concert, message="Concert updated successfully")


@router.delete("/{concert_id}", response_model=ApiResponse, response_model_exclude_unset=True)
def delete_concert(
    concert_id: str,
    conn: sqlite3.Connection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> ApiResponse:
    entity_id = require_id(concert_id, "Concert")
    unwrap(concert_service.delete_concert(conn, entity_id), "Failed to delete concert")
    return ApiResponse(message="Concert deleted successfully")
