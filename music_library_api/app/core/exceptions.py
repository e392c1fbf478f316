"""
Error types raised by the service layer.

Every error carries the message shown to the client and the HTTP
status it maps to.  ``main.create_app`` registers a single handler
that renders any ``SongLibraryError`` as ``{"error": message}``.
Internal details (SQL errors, upstream responses) are logged where
they occur and never placed in ``message``.
"""

from fastapi import status


class SongLibraryError(Exception):
    """Base exception for the music library."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidParameter(SongLibraryError):
    """Raised when a request parameter or body field is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidDateFormat(InvalidParameter):
    """Raised when a release date does not match ``DD.MM.YYYY``."""

    def __init__(self, value: str):
        self.value = value
        super().__init__("Invalid date format. Expected format: DD.MM.YYYY")


class FutureReleaseDate(InvalidParameter):
    """Raised when a release date lies after today."""

    def __init__(self, value: str):
        self.value = value
        super().__init__("Release date cannot be in the future")


class NotFound(SongLibraryError):
    """Raised when the referenced song does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, song_id: int):
        self.song_id = song_id
        super().__init__("Song not found")


class Conflict(SongLibraryError):
    """Raised when a song with the same group and title already exists."""

    status_code = status.HTTP_409_CONFLICT

    def __init__(self, group: str, song: str):
        self.group = group
        self.song = song
        super().__init__("Song already exists in the library")


class UpstreamError(SongLibraryError):
    """Raised when the enrichment service call fails."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__("Failed to fetch song details")


class StoreError(SongLibraryError):
    """Raised when a database operation fails."""
