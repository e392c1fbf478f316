"""
Service layer.

Pure helpers (verse pagination, release date validation) live beside
the collaborators that touch the outside world (the SQLite repository
and the enrichment HTTP client).  ``SongService`` orchestrates them on
behalf of the API handlers.
"""
