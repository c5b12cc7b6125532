"""
Pydantic models for blog posts.

Posts are bilingual: every post carries a French and a German title
and body.  An optional ``img64`` data URI attaches an image, which is
stored by the image store and referenced through ``image_url``.
"""

from typing import Optional

from pydantic import BaseModel, Field


class PostCreate(BaseModel):
    """Schema for creating a post."""

    title_fr: Optional[str] = Field(None, examples=["Nouvel album"])
    title_de: Optional[str] = Field(None, examples=["Neues Album"])
    content_fr: Optional[str] = Field(None, examples=["Notre nouvel album sort le 1er mai."])
    content_de: Optional[str] = Field(None, examples=["Unser neues Album erscheint am 1. Mai."])
    img64: Optional[str] = Field(None, description="Base64 data URI of the post image")


class PostUpdate(PostCreate):
    """Schema for updating a post; the id is taken from the URL."""

    id: Optional[str] = None


class PostRead(BaseModel):
    """Schema for reading a post from the API."""

    id: int
    title_fr: str
    title_de: str
    content_fr: str
    content_de: str
    image_url: str
    created_at: str
    updated_at: str

    model_config = {
        "from_attributes": True,
    }
