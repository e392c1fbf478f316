"""
Song endpoints for API v1.

These routes expose the song catalog: a filtered, paginated listing,
paginated verses of a single song, and create/partial update/delete.
Handlers only parse the request and delegate to ``SongService``;
errors raised by the service are rendered by the application's
exception handler as ``{"error": "..."}``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, Request, status

from music_library_api.app.core.db import MAX_SQLITE_INTEGER
from music_library_api.app.schemas.song import (
    ErrorResponse,
    MessageResponse,
    SongCreate,
    SongList,
    SongRead,
    SongUpdate,
    SongVerses,
)
from music_library_api.app.services.song_service import SongService

router = APIRouter()

BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Invalid request parameter"}}
NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Song not found"}}
SERVER_ERROR = {status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Internal server error"}}
CONFLICT = {status.HTTP_409_CONFLICT: {"model": ErrorResponse, "description": "Song already exists"}}


def get_song_service(request: Request) -> SongService:
    """Return the ``SongService`` built by ``create_app``."""
    return request.app.state.song_service


@router.get("", response_model=SongList, responses={**BAD_REQUEST, **SERVER_ERROR})
async def list_songs(
    group: Optional[str] = Query(None, description="Substring of the group name, case insensitive"),
    song: Optional[str] = Query(None, description="Substring of the song title, case insensitive"),
    release_date: Optional[str] = Query(None, alias="releaseDate", description="Exact release date, DD.MM.YYYY"),
    page: int = Query(1, ge=1, le=MAX_SQLITE_INTEGER, description="Page number"),
    limit: int = Query(5, ge=1, le=MAX_SQLITE_INTEGER, description="Songs per page"),
    service: SongService = Depends(get_song_service),
) -> SongList:
    """Return songs matching the filters, one page at a time.

    ``total`` is the number of matching songs across all pages.  A
    release date in the future or in another format is rejected.
    """
    return await service.list_songs(
        page=page,
        limit=limit,
        group=group,
        song=song,
        release_date=release_date,
    )


@router.get(
    "/{song_id}/verses",
    response_model=SongVerses,
    responses={**BAD_REQUEST, **NOT_FOUND, **SERVER_ERROR},
)
async def get_song_verses(
    song_id: int = Path(..., description="Song ID"),
    page: int = Query(1, ge=1, le=MAX_SQLITE_INTEGER, description="Page number"),
    limit: int = Query(1, ge=1, le=MAX_SQLITE_INTEGER, description="Verses per page"),
    service: SongService = Depends(get_song_service),
) -> SongVerses:
    """Return a page of the song's verses.

    Verses are separated by a blank line in the lyrics.  Asking for a
    page past the end returns an empty ``verses`` list with status 200.
    """
    return await service.get_verses(song_id, page=page, limit=limit)


@router.post(
    "",
    response_model=SongRead,
    status_code=status.HTTP_200_OK,
    responses={
        **BAD_REQUEST,
        **CONFLICT,
        **SERVER_ERROR,
    },
)
async def create_song(
    song_in: SongCreate,
    service: SongService = Depends(get_song_service),
) -> SongRead:
    """Add a song to the library.

    Release date, lyrics and link are looked up in the enrichment
    service; the client supplies only ``group`` and ``song``.
    """
    return await service.create_song(song_in)


@router.patch(
    "/{song_id}",
    response_model=SongRead,
    responses={**BAD_REQUEST, **NOT_FOUND, **CONFLICT, **SERVER_ERROR},
)
async def update_song(
    song_in: SongUpdate,
    song_id: int = Path(..., description="Song ID; it cannot be changed"),
    service: SongService = Depends(get_song_service),
) -> SongRead:
    """Update only the supplied fields of a song.

    Omitted or empty fields keep their stored values.  ``release_date``
    must be DD.MM.YYYY and not in the future.
    """
    return await service.update_song(song_id, song_in)


@router.delete(
    "/{song_id}",
    response_model=MessageResponse,
    responses={**NOT_FOUND, **SERVER_ERROR},
)
async def delete_song(
    song_id: int = Path(..., description="Song ID"),
    service: SongService = Depends(get_song_service),
) -> MessageResponse:
    """Delete a song from the library."""
    await service.delete_song(song_id)
    return MessageResponse(message="Song deleted successfully")
