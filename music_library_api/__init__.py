"""
Top‑level package for the Music Library API.

All functionality lives in submodules under ``app``; import the ASGI
factory as ``music_library_api.app.main.create_app``.
"""

__all__ = []
