"""Entry point for the Music Library API.

Reads settings from the environment, builds the application and
serves it with Uvicorn on ``API_HOST``:``API_PORT`` (defaults
``0.0.0.0``:``8080``).  See ``music_library_api/app/core/config.py``
for the supported variables.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from music_library_api.app.core.config import Settings
from music_library_api.app.main import create_app


async def main() -> None:
    settings = Settings.from_env()
    app = create_app(settings)
    logging.getLogger(__name__).info("Starting server on port %s", settings.api_port)
    config = Config(
        app=app,
        host=settings.api_host,
        port=settings.api_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
