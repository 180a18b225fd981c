"""Allow ``python -m adopdog_api`` to start the API server."""

import uvicorn

from adopdog_api.app.core.config import settings


if __name__ == "__main__":
    uvicorn.run(
        "adopdog_api.app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
