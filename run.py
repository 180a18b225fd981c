"""Entry point for the Adoption Dog API.

This script serves the FastAPI application with Uvicorn.  It is
intended to be executed from the project root, for example under
Docker, where you only specify a single Python file to run.

Configuration such as the MongoDB URL, listening host and port and the
log level is read from environment variables (``MONGODB_URL``,
``HOST``, ``PORT``, ``LOG_LEVEL``...).  See ``adopdog_api.app.core.config``
for the full list.  Uvicorn runs with ``log_config=None`` so that its
logs go through the application's logging setup.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from adopdog_api.app.core.config import settings
from adopdog_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
    server = Server(config)
    logging.getLogger(__name__).info(
        "Server is running on http://%s:%s", settings.host, settings.port
    )
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
