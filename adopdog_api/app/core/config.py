"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so that
the service starts against a local MongoDB instance without any
configuration.  In a production deployment you should override these
via environment variables.
"""

import os
from dataclasses import dataclass
from typing import List


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Adoption Dog API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    # Optional path of a log file in addition to console output.
    log_file: str = os.getenv("LOG_FILE", "")

    # MongoDB connection.  The URL is read once at process start and
    # never changes afterwards.
    mongodb_url: str = os.getenv("MONGODB_URL", "mongodb://127.0.0.1:27017")
    mongodb_database: str = os.getenv("MONGODB_DATABASE", "DogsBD")
    mongodb_collection: str = os.getenv("MONGODB_COLLECTION", "dogs")

    # Upper bound for a single store round-trip (and for server
    # selection).  A hung database then fails the request with a 500
    # instead of hanging it.
    store_timeout_ms: int = int(os.getenv("STORE_TIMEOUT_MS", "10000"))

    # Comma‑separated list of allowed CORS origins.  ``*`` allows all.
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Prefix under which routes are mounted.  Empty keeps ``/dogs`` at
    # the root, e.g. set ``API_PREFIX=/api/v1`` to version the paths.
    api_prefix: str = os.getenv("API_PREFIX", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    def cors_origin_list(self) -> List[str]:
        """Return ``cors_origins`` split into a list of non-empty entries."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
