"""
Application package for the Music Library API.

The service keeps a catalog of songs and is organised in layers:
``core`` (settings, logging, database and error types), ``schemas``
(request/response bodies), ``services`` (verse pagination, date
validation, persistence, enrichment and the orchestration that ties
them together) and ``api`` (versioned HTTP routes).
"""
