"""
Business logic for dog records.

``DogService`` implements the five operations of the listing: list,
get, create, update and delete.  Each call receives the store handle
explicitly, performs structural validation (identifier shape, payload
fields) before touching the store, issues exactly one store call and
translates the outcome into a ``DogRead`` or one of the errors from
``core.exceptions``.

Create and update validate differently on purpose.  Create requires
``name``, ``age`` and ``gender``; update only checks the fields it is
given so that a client can change ``weight`` without restating the
rest of the record.
"""

import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from ..core.db import Document, DogStore
from ..core.exceptions import (
    DogNotFoundError,
    DogValidationError,
    InvalidIdError,
    StoreUnavailableError,
)
from ..schemas.dog import DogCreate, DogRead, DogUpdate, format_validation_error


logger = logging.getLogger(__name__)


class DogService:
    """Operations on dog records stored in a ``DogStore``."""

    @classmethod
    async def list_dogs(cls, store: DogStore) -> List[DogRead]:
        """Return every stored record in store order (possibly empty)."""
        try:
            documents = await store.find_all()
        except StoreUnavailableError as exc:
            logger.exception("Listing dogs failed")
            raise StoreUnavailableError("Failed to fetch dogs") from exc
        return [cls._to_read(doc) for doc in documents]

    @classmethod
    async def get_dog(cls, store: DogStore, dog_id: str) -> DogRead:
        """Return the record with identifier ``dog_id``.

        Raises ``InvalidIdError`` without a store call if the identifier
        is malformed and ``DogNotFoundError`` if nothing matches.
        """
        cls.check_id(store, dog_id)
        try:
            document = await store.find_by_id(dog_id)
        except StoreUnavailableError as exc:
            logger.exception("Fetching dog %s failed", dog_id)
            raise StoreUnavailableError("Failed to fetch dog") from exc
        if document is None:
            raise DogNotFoundError()
        return cls._to_read(document)

    @classmethod
    async def create_dog(cls, store: DogStore, payload: Dict[str, Any]) -> DogRead:
        """Validate ``payload`` and persist it as a new record.

        Unknown fields are dropped.  Nothing is written if validation
        fails.
        """
        try:
            dog = DogCreate.model_validate(payload)
        except ValidationError as exc:
            details = format_validation_error(exc)
            logger.warning("Rejected new dog: %s", details)
            raise DogValidationError("Failed to create dog", details=details) from exc

        try:
            document = await store.insert(dog.model_dump(by_alias=True, exclude_unset=True))
        except StoreUnavailableError as exc:
            logger.exception("Creating dog '%s' failed", dog.name)
            raise StoreUnavailableError("Failed to create dog") from exc
        logger.info("Created dog %s (%s)", document["_id"], dog.name)
        return cls._to_read(document)

    @classmethod
    async def update_dog(cls, store: DogStore, dog_id: str, payload: Dict[str, Any]) -> DogRead:
        """Merge the fields present in ``payload`` into an existing record.

        Fields absent from ``payload`` keep their values; ``id`` is never
        reassigned.  ``owner`` is replaced as a whole when given.  Any
        invalid field aborts the update before the store is touched.
        """
        cls.check_id(store, dog_id)
        try:
            changes = DogUpdate.model_validate(payload)
        except ValidationError as exc:
            details = format_validation_error(exc)
            logger.warning("Rejected update of dog %s: %s", dog_id, details)
            raise DogValidationError("Failed to update dog", details=details) from exc

        fields = changes.model_dump(by_alias=True, exclude_unset=True)
        try:
            document = await store.update_by_id(dog_id, fields)
        except StoreUnavailableError as exc:
            logger.exception("Updating dog %s failed", dog_id)
            raise StoreUnavailableError("Failed to update dog") from exc
        if document is None:
            raise DogNotFoundError()
        logger.info("Updated dog %s (%s)", dog_id, ", ".join(sorted(fields)) or "no changes")
        return cls._to_read(document)

    @classmethod
    async def delete_dog(cls, store: DogStore, dog_id: str) -> DogRead:
        """Remove a record and return it as it was just before deletion."""
        cls.check_id(store, dog_id)
        try:
            document = await store.delete_by_id(dog_id)
        except StoreUnavailableError as exc:
            logger.exception("Deleting dog %s failed", dog_id)
            raise StoreUnavailableError("Failed to delete dog") from exc
        if document is None:
            raise DogNotFoundError()
        logger.info("Deleted dog %s", dog_id)
        return cls._to_read(document)

    @staticmethod
    def check_id(store: DogStore, dog_id: str) -> None:
        """Raise ``InvalidIdError`` unless ``dog_id`` has the store's identifier shape."""
        if not store.is_valid_id(dog_id):
            raise InvalidIdError()

    @staticmethod
    def _to_read(document: Document) -> DogRead:
        """Convert a stored document to a ``DogRead`` exposing ``_id`` as ``id``."""
        public = {key: value for key, value in document.items() if key not in ("_id", "__v")}
        public["id"] = str(document["_id"])
        return DogRead.model_validate(public)
