"""
Dog endpoints for API v1.

These routes expose the adoption listing as a CRUD resource under
``/dogs``.  Handlers stay thin: they obtain the store through the
``get_store`` dependency and delegate to ``DogService``.  Errors raised
by the service are rendered by the handlers registered in
``core.exceptions``, so every failure response is a JSON object with an
``error`` key.

Request bodies are accepted as raw JSON objects and validated by the
service, which knows whether the operation is a create (required
fields enforced) or an update (only supplied fields checked).
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status

from adopdog_api.app.core.db import DogStore, get_store
from adopdog_api.app.schemas.dog import DogRead
from adopdog_api.app.services.dog_service import DogService

router = APIRouter()


async def valid_dog_id(dog_id: str, store: DogStore = Depends(get_store)) -> str:
    """Path dependency rejecting malformed identifiers.

    Dependencies are resolved before the request body is validated, so
    a malformed ID is reported as such even when the body is invalid too.
    """
    DogService.check_id(store, dog_id)
    return dog_id


@router.get("", response_model=List[DogRead], response_model_exclude_unset=True)
async def list_dogs(store: DogStore = Depends(get_store)) -> List[DogRead]:
    """Return every dog in the listing."""
    return await DogService.list_dogs(store)


@router.get("/{dog_id}", response_model=DogRead, response_model_exclude_unset=True)
async def get_dog(dog_id: str = Depends(valid_dog_id), store: DogStore = Depends(get_store)) -> DogRead:
    """Retrieve a single dog by its ID.

    Returns HTTP 400 for a malformed ID and 404 if no dog has it.
    """
    return await DogService.get_dog(store, dog_id)


@router.post(
    "",
    response_model=DogRead,
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_dog(
    payload: Dict[str, Any] = Body(..., examples=[{"name": "Rex", "age": 3, "gender": "male"}]),
    store: DogStore = Depends(get_store),
) -> DogRead:
    """Create a new dog; ``name``, ``age`` and ``gender`` are required."""
    return await DogService.create_dog(store, payload)


@router.put("/{dog_id}", response_model=DogRead, response_model_exclude_unset=True)
async def update_dog(
    dog_id: str = Depends(valid_dog_id),
    payload: Dict[str, Any] = Body(..., examples=[{"weight": 20}]),
    store: DogStore = Depends(get_store),
) -> DogRead:
    """Update some or all fields of an existing dog.

    Fields not present in the body keep their current values.
    """
    return await DogService.update_dog(store, dog_id, payload)


@router.delete("/{dog_id}", response_model=DogRead, response_model_exclude_unset=True)
async def delete_dog(dog_id: str = Depends(valid_dog_id), store: DogStore = Depends(get_store)) -> DogRead:
    """Delete a dog and return the record as it was before deletion."""
    return await DogService.delete_dog(store, dog_id)
