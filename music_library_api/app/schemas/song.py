"""
Pydantic models for song data.

``SongCreate`` is what a client posts: only the performer and the
title.  The remaining fields of a stored song come from the
enrichment service (``SongDetail``).  ``SongUpdate`` carries a partial
update in which every field is optional.  Response bodies use fixed
schemas (``SongRead``, ``SongList``, ``SongVerses``).
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class SongCreate(BaseModel):
    """Schema for adding a song to the library."""

    group: str = Field(..., min_length=1, examples=["Muse"])
    song: str = Field(..., min_length=1, examples=["Uprising"])

    model_config = {
        "str_strip_whitespace": True,
    }


class SongDetail(BaseModel):
    """Fields returned by the enrichment service for a group and song."""

    release_date: str = Field("", alias="releaseDate")
    text: str = ""
    link: str = ""

    model_config = {
        "populate_by_name": True,
    }


class SongRead(BaseModel):
    """A stored song."""

    id: int
    group: str = Field(..., examples=["Muse"])
    song: str = Field(..., examples=["Uprising"])
    release_date: str = Field(..., examples=["03.09.2009"])
    text: str = Field(..., examples=["verse one\n\nverse two"])
    link: str = Field(..., examples=["https://www.youtube.com/watch?v=w8KQmps-Sog"])

    model_config = {
        "from_attributes": True,
    }


class SongUpdate(BaseModel):
    """Schema for a partial song update.

    All fields are optional; empty strings and omitted fields leave the
    stored value untouched.  ``id`` is accepted only so that clients
    may echo back a full song: any non-zero value other than the
    stored id is rejected.
    """

    id: Optional[int] = None
    group: Optional[str] = None
    song: Optional[str] = None
    release_date: Optional[str] = Field(None, examples=["03.09.2009"])
    text: Optional[str] = None
    link: Optional[str] = None

    @field_validator("group", "song")
    @classmethod
    def strip_names(cls, v: Optional[str]) -> Optional[str]:
        # Whitespace-only names count as empty and leave the stored value alone.
        return v.strip() if v is not None else None


class SongList(BaseModel):
    """One page of songs plus the size of the whole filtered set."""

    total: int
    page: int
    limit: int
    songs: List[SongRead]


class SongVerses(BaseModel):
    """One page of a song's verses.

    ``verses`` is empty when the page lies beyond the last verse;
    ``total`` is always the number of verses in the song.
    """

    song: str
    group: str
    release_date: str
    verses: List[str]
    page: int
    limit: int
    total: int


class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Song deleted successfully"])


class ErrorResponse(BaseModel):
    error: str = Field(..., examples=["Song not found"])


class ServiceInfo(BaseModel):
    """Name, version and catalog size of the running service."""

    name: str
    version: str
    songs: int
