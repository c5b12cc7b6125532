"""
Carousel endpoints for API v1.

The homepage carousel is read publicly in position order.  Adding,
replacing, moving and removing pictures requires a bearer token; the
count limits and position bookkeeping live in ``carousel_service``.
"""

import sqlite3
from typing import List

from fastapi import APIRouter, Depends, status

from ....core.db import get_db
from ....core.security import get_current_user
from ....schemas.carousel import CarouselCreate, CarouselRead, CarouselUpdate, SwitchPosition
from ....schemas.common import ApiResponse
from ....services import carousel_service
from ....services.image_store import ImageStore, get_image_store
from ....validation.carousel import (
    sanitize_carousel,
    validate_create_carousel,
    validate_switch_position,
    validate_update_carousel,
)
from ..responses import ensure_valid, require_id, unwrap

router = APIRouter()


@router.get("", response_model=ApiResponse[List[CarouselRead]], response_model_exclude_unset=True)
def list_pictures(conn: sqlite3.Connection = Depends(get_db)) -> ApiResponse[List[CarouselRead]]:
    """Return all carousel pictures ordered by ``position`` ascending."""
    pictures = carousel_service.get_all_pictures(conn)
    return ApiResponse(data=pictures, message="Pictures retrieved successfully")


@router.get("/{picture_id}", response_model=ApiResponse[CarouselRead], response_model_exclude_unset=True)
def get_picture(picture_id: str, conn: sqlite3.Connection = Depends(get_db)) -> ApiResponse[CarouselRead]:
    picture = carousel_service.get_picture_by_id(conn, require_id(picture_id, "Picture"))
    return ApiResponse(data=picture, message="Picture retrieved successfully")


@router.post(
    "",
    response_model=ApiResponse[CarouselRead],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
def add_picture(
    picture_in: CarouselCreate,
    conn: sqlite3.Connection = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
    current_user: dict = Depends(get_current_user),
) -> ApiResponse[CarouselRead]:
    """Append a picture at the end of the carousel.

    Fails with HTTP 400 once the carousel is full.
    """
    data = sanitize_carousel(picture_in)
    ensure_valid(validate_create_carousel(data))
    picture = unwrap(carousel_service.add_picture(conn, data, image_store), "Failed to add picture")
    return ApiResponse(data=picture, message="Picture added successfully")


@router.put("/position/{picture_id}", response_model=ApiResponse, response_model_exclude_unset=True)
def switch_positions(
    picture_id: str,
    move: SwitchPosition,
    conn: sqlite3.Connection = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> ApiResponse:
    """Swap a picture with its left or right neighbour.

    Fails with HTTP 400 when there is no neighbour in that direction.
    """
    entity_id = require_id(picture_id, "Picture")
    ensure_valid(validate_switch_position(move))
    unwrap(carousel_service.switch_positions(conn, entity_id, move.direction), "Failed to switch positions")
    return ApiResponse(message="Picture positions switched successfully")


@router.put("/{picture_id}", response_model=ApiResponse[CarouselRead], response_model_exclude_unset=True)
def change_image(
    picture_id: str,
    picture_in: CarouselCreate,
    conn: sqlite3.Connection = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
    current_user: dict = Depends(get_current_user),
) -> ApiResponse[CarouselRead]:
    """Replace the image of a picture without moving it."""
    entity_id = require_id(picture_id, "Picture")
    data = sanitize_carousel(CarouselUpdate(**picture_in.model_dump(), id=picture_id))
    ensure_valid(validate_update_carousel(data))
    picture = unwrap(
        carousel_service.update_picture(conn, entity_id, data, image_store), "Failed to update picture"
    )
    return ApiResponse(data=picture, message="Picture updated successfully")


@router.delete("/{picture_id}", response_model=ApiResponse, response_model_exclude_unset=True)
def delete_picture(
    picture_id: str,
    conn: sqlite3.Connection = Depends(get_db),
    image_store: ImageStore = Depends(get_image_store),
    current_user: dict = Depends(get_current_user),
) -> ApiResponse:
    """Remove a picture; the carousel must keep its minimum size."""
    entity_id = require_id(picture_id, "Picture")
    unwrap(carousel_service.delete_picture(conn, entity_id, image_store), "Failed to delete picture")
    return ApiResponse(message="Picture deleted successfully")
