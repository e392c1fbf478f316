"""
Top‑level router for version 1 of the API.

This router aggregates the endpoint routers under their prefixes.
When new endpoints are added, update this file to include their
routers.
"""

from fastapi import APIRouter

from .endpoints import info, songs

router = APIRouter()

router.include_router(songs.router, prefix="/songs", tags=["songs"])
router.include_router(info.router, prefix="/info", tags=["info"])
