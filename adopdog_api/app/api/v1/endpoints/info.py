"""
Information endpoint for API v1.

Returns the service name and version together with the state of the
store connection, so deployments can check that the API is up and can
reach MongoDB.  The endpoint always answers 200; an unreachable store
is reported in the body.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from adopdog_api.app.core.config import settings
from adopdog_api.app.core.db import DogStore, get_store

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def get_info(store: DogStore = Depends(get_store)) -> Dict[str, Any]:
    """Return service metadata and whether the store answers a ping."""
    reachable = await store.ping()
    return {
        "name": settings.project_name,
        "version": settings.api_version,
        "database": "connected" if reachable else "unavailable",
    }
