"""Entry point for the Catalog API.

Starts the FastAPI application with Uvicorn.  It is intended to be
executed from the project root, for example under Docker, where you
only specify a single Python file to run.

Configuration is read from environment variables (see
``catalog_api/app/core/config.py``).  Host and port are read from
``API_HOST`` and ``API_PORT``; defaults are ``0.0.0.0`` and ``8000``.

Usage:
    python run.py
"""
import asyncio
import os

from uvicorn import Config, Server

from catalog_api.app.core.config import settings
from catalog_api.app.main import app


async def main() -> None:
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
