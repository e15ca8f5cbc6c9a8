"""Entry point for the Song Library API.

This script serves the FastAPI application with uvicorn.  It is
intended to be executed from the project root, for example inside a
container where you only specify a single Python file to run.

Host and port are read from the environment variables ``API_HOST``
and ``API_PORT``; other settings (database path, log level, seeding)
are described in ``song_library_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from song_library_api.app.main import app
from song_library_api.app.core.config import settings


async def run_api() -> None:
    """Start the API using Uvicorn.

    Defaults are ``0.0.0.0`` and ``8000``.
    """
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


async def main() -> None:
    try:
        await run_api()
    except Exception:
        logging.exception("Song Library API stopped unexpectedly")
        raise


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
