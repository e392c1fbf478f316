"""
Information endpoint for API v1.

Returns the service name and version together with the number of
songs in the catalog.  Useful as a liveness probe that also touches
the database.
"""

from fastapi import APIRouter, Depends, Request

from music_library_api.app.schemas.song import ServiceInfo
from music_library_api.app.services.song_service import SongService
from music_library_api.app.api.v1.endpoints.songs import get_song_service

router = APIRouter()


@router.get("", response_model=ServiceInfo)
async def get_info(
    request: Request,
    service: SongService = Depends(get_song_service),
) -> ServiceInfo:
    settings = request.app.state.settings
    return ServiceInfo(
        name=settings.project_name,
        version=settings.api_version,
        songs=await service.count_songs(),
    )
