"""
Pydantic models for concert listings.

A concert happens in a ``city`` on an ``event_date`` and links to an
external ``event_url`` (usually the ticketing page).  It is identified
for visitors by a ``venue``, an ``event_name`` (e.g. a festival) or
both.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ConcertCreate(BaseModel):
    """Schema for creating a concert."""

    city: Optional[str] = Field(None, examples=["Lausanne"])
    event_date: Optional[str] = Field(None, examples=["2025-09-01T20:00:00Z"])
    venue: Optional[str] = Field(None, examples=["Les Docks"])
    event_name: Optional[str] = Field(None, examples=["Festival de la Cité"])
    event_url: Optional[str] = Field(None, examples=["https://example.com/tickets"])


class ConcertUpdate(ConcertCreate):
    """Schema for updating a concert; the id is taken from the URL."""

    id: Optional[str] = None


class ConcertRead(BaseModel):
    """Schema for reading a concert from the API."""

    id: int
    city: str
    event_date: str
    venue: Optional[str] = None
    event_name: Optional[str] = None
    event_url: str
    created_at: str
    updated_at: str

    model_config = {
        "from_attributes": True,
    }
