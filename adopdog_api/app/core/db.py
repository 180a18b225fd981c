"""
MongoDB integration and the store abstraction.

The dog service never talks to the driver directly.  It works against a
``DogStore``, which exposes the handful of single-document operations the
service needs together with ``is_valid_id``, the store's own rule for what
a syntactically valid identifier looks like.  ``MongoDogStore`` implements
it on top of pymongo's asyncio client; a different backend only has to
supply another subclass.

One store is opened per process (``open_store``) when the application
starts, kept on ``app.state.store`` and handed to request handlers via the
``get_store`` dependency.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import BSONError
from fastapi import Request
from pymongo import AsyncMongoClient, ReturnDocument
from pymongo.errors import PyMongoError

from .config import Settings, settings as default_settings
from .exceptions import StoreUnavailableError


logger = logging.getLogger(__name__)

Document = Dict[str, Any]


class DogStore(ABC):
    """Interface of a document store holding dog records.

    Documents passed in and out are plain dictionaries.  Documents
    returned by the store carry their identifier under ``_id``.  Every
    method that touches the backend raises ``StoreUnavailableError`` when
    the backend fails.
    """

    @abstractmethod
    def is_valid_id(self, value: Any) -> bool:
        """Return ``True`` if ``value`` is a syntactically valid identifier."""
        ...

    @abstractmethod
    async def find_all(self) -> List[Document]:
        ...

    @abstractmethod
    async def find_by_id(self, record_id: str) -> Optional[Document]:
        ...

    @abstractmethod
    async def insert(self, document: Document) -> Document:
        """Insert ``document`` and return it with its newly assigned ``_id``."""
        ...

    @abstractmethod
    async def update_by_id(self, record_id: str, fields: Document) -> Optional[Document]:
        """Atomically set ``fields`` on a record.

        Returns the document after the update, or ``None`` if no record
        has this identifier (in which case nothing is written).
        """
        ...

    @abstractmethod
    async def delete_by_id(self, record_id: str) -> Optional[Document]:
        """Atomically remove a record and return it as it was before removal."""
        ...

    @abstractmethod
    async def ping(self) -> bool:
        """Return ``True`` if the backend answers."""
        ...

    async def close(self) -> None:
        """Release backend resources."""


class MongoDogStore(DogStore):
    """``DogStore`` backed by a MongoDB collection."""

    def __init__(self, client: AsyncMongoClient, database: str, collection: str) -> None:
        self.client = client
        self.collection = client[database][collection]

    @classmethod
    def from_settings(cls, config: Settings) -> "MongoDogStore":
        """Build a store from application settings.

        The client connects lazily, so this never blocks; the first
        operation (or ``ping``) performs server selection.
        """
        client: AsyncMongoClient = AsyncMongoClient(
            config.mongodb_url,
            timeoutMS=config.store_timeout_ms,
            serverSelectionTimeoutMS=config.store_timeout_ms,
        )
        return cls(client, config.mongodb_database, config.mongodb_collection)

    def is_valid_id(self, value: Any) -> bool:
        # ObjectId also accepts 12 raw bytes; identifiers from URLs are
        # always text, so only the 24-character hex form applies.
        return isinstance(value, str) and ObjectId.is_valid(value)

    async def find_all(self) -> List[Document]:
        try:
            cursor = self.collection.find({})
            return await cursor.to_list()
        except (PyMongoError, BSONError) as exc:
            raise StoreUnavailableError("find failed") from exc

    async def find_by_id(self, record_id: str) -> Optional[Document]:
        try:
            return await self.collection.find_one({"_id": ObjectId(record_id)})
        except (PyMongoError, BSONError) as exc:
            raise StoreUnavailableError("find_one failed") from exc

    async def insert(self, document: Document) -> Document:
        # insert_one adds ``_id`` to the dict it is given, keep the
        # caller's document untouched.
        to_insert = dict(document)
        try:
            result = await self.collection.insert_one(to_insert)
        except (PyMongoError, BSONError) as exc:
            raise StoreUnavailableError("insert_one failed") from exc
        return {"_id": result.inserted_id, **document}

    async def update_by_id(self, record_id: str, fields: Document) -> Optional[Document]:
        try:
            if not fields:
                # ``$set`` with no fields is rejected by the server.
                return await self.collection.find_one({"_id": ObjectId(record_id)})
            return await self.collection.find_one_and_update(
                {"_id": ObjectId(record_id)},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        except (PyMongoError, BSONError) as exc:
            raise StoreUnavailableError("find_one_and_update failed") from exc

    async def delete_by_id(self, record_id: str) -> Optional[Document]:
        try:
            return await self.collection.find_one_and_delete({"_id": ObjectId(record_id)})
        except (PyMongoError, BSONError) as exc:
            raise StoreUnavailableError("find_one_and_delete failed") from exc

    async def ping(self) -> bool:
        try:
            await self.client.admin.command("ping")
        except PyMongoError:
            logger.warning("MongoDB ping failed", exc_info=True)
            return False
        return True

    async def close(self) -> None:
        await self.client.close()


def open_store(config: Optional[Settings] = None) -> DogStore:
    """Create the process-wide store from ``config`` (defaults to ``settings``)."""
    config = config or default_settings
    store = MongoDogStore.from_settings(config)
    logger.info(
        "Using MongoDB database %s, collection %s",
        config.mongodb_database,
        config.mongodb_collection,
    )
    return store


def get_store(request: Request) -> DogStore:
    """FastAPI dependency returning the store attached to the application."""
    return request.app.state.store
