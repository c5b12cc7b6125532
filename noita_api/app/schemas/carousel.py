"""
Pydantic schemas for the homepage carousel.

Each carousel picture has a unique ``url`` and a unique integer
``position``; pictures are displayed in ascending position order.
Pictures are moved one slot at a time with a ``direction`` of
``left`` (towards the start) or ``right`` (towards the end).
"""

from typing import Optional

from pydantic import BaseModel, Field


class CarouselCreate(BaseModel):
    """Schema for adding a picture to the carousel."""

    picture64: Optional[str] = Field(None, description="Base64 data URI of the picture")


class CarouselUpdate(CarouselCreate):
    """Schema for replacing the image of an existing picture."""

    id: Optional[str] = None


class SwitchPosition(BaseModel):
    """Schema for moving a picture by one slot."""

    direction: Optional[str] = Field(None, examples=["left"])


class CarouselRead(BaseModel):
    """Schema for reading a carousel picture."""

    id: int
    url: str
    position: int
    created_at: str
    updated_at: str

    model_config = {
        "from_attributes": True,
    }
