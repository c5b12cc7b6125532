"""
Top-level router for version 1 of the API.

This router aggregates the domain routers under their prefixes.  When
a new domain is introduced, include its router here.
"""

from fastapi import APIRouter

from .endpoints import carousel, concerts, posts

router = APIRouter()

router.include_router(posts.router, prefix="/posts", tags=["posts"])
router.include_router(concerts.router, prefix="/concerts", tags=["concerts"])
router.include_router(carousel.router, prefix="/carousel", tags=["carousel"])
