"""
Main entrypoint for the Adoption Dog API.

This module assembles the FastAPI application, sets up logging, CORS,
error handlers and the versioned routers.  The ``create_app`` function
builds and configures the app, which is then instantiated at module
import time as ``app``.  Run it with uvicorn or another ASGI server,
e.g.::

    uvicorn adopdog_api.app.main:app --reload

The MongoDB store is opened when the application starts and closed when
it shuts down.  Passing a ready-made ``store`` to ``create_app`` skips
both steps, which is how tests and alternative backends plug in.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import DogStore, open_store
from .core.exceptions import register_exception_handlers
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


def create_app(store: Optional[DogStore] = None, config: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[DogStore]
        Store to serve requests from.  If omitted, a MongoDB store is
        opened from the settings at startup and closed at shutdown.
    config : Optional[Settings]
        Settings to use instead of the module-level ``settings``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    config = config or default_settings
    # Initialise logging before anything else so that startup messages
    # are formatted consistently.
    setup_logging(config.log_level, config.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if store is not None:
            app.state.store = store
            yield
            return
        app.state.store = open_store(config)
        if await app.state.store.ping():
            logger.info("Connected to MongoDB")
        else:
            # Requests will fail with 500 until the database is reachable.
            logger.error("MongoDB is not reachable at startup")
        try:
            yield
        finally:
            await app.state.store.close()
            logger.info("MongoDB connection closed")

    app = FastAPI(title=config.project_name, version=config.api_version, lifespan=lifespan)
    if store is not None:
        # Available even when the lifespan does not run (e.g. a TestClient
        # used outside a ``with`` block).
        app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origin_list(),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    app.include_router(v1_router, prefix=config.api_prefix)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
