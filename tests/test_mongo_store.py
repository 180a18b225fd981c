from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import ServerSelectionTimeoutError

from adopdog_api.app.core.config import Settings
from adopdog_api.app.core.db import DogStore, MongoDogStore
from adopdog_api.app.core.exceptions import StoreUnavailableError


@pytest.fixture
def collection():
    return MagicMock()


@pytest.fixture
def mongo_store(collection):
    client = MagicMock()
    client.__getitem__.return_value.__getitem__.return_value = collection
    client.admin.command = AsyncMock(return_value={"ok": 1})
    client.close = AsyncMock()
    return MongoDogStore(client, "DogsBD", "dogs")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("507f1f77bcf86cd799439011", True),
        ("507F1F77BCF86CD799439011", True),
        ("not-an-id", False),
        ("507f1f77bcf86cd79943901", False),
        ("507f1f77bcf86cd79943901z", False),
        ("123456789012", False),
        (b"123456789012", False),
        (None, False),
    ],
)
def test_is_valid_id(mongo_store, value, expected):
    assert mongo_store.is_valid_id(value) is expected


async def test_insert_returns_document_with_id(mongo_store, collection):
    new_id = ObjectId()
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=new_id))
    document = {"name": "Rex", "age": 3, "gender": "male"}

    stored = await mongo_store.insert(document)

    assert stored == {"_id": new_id, **document}
    assert "_id" not in document


async def test_update_uses_atomic_set(mongo_store, collection):
    dog_id = "507f1f77bcf86cd799439011"
    collection.find_one_and_update = AsyncMock(return_value={"_id": ObjectId(dog_id), "weight": 20})

    result = await mongo_store.update_by_id(dog_id, {"weight": 20})

    assert result["weight"] == 20
    collection.find_one_and_update.assert_awaited_once_with(
        {"_id": ObjectId(dog_id)},
        {"$set": {"weight": 20}},
        return_document=ReturnDocument.AFTER,
    )


async def test_update_without_fields_reads_record(mongo_store, collection):
    dog_id = "507f1f77bcf86cd799439011"
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock()

    assert await mongo_store.update_by_id(dog_id, {}) is None
    collection.find_one_and_update.assert_not_awaited()


async def test_delete_uses_find_one_and_delete(mongo_store, collection):
    dog_id = "507f1f77bcf86cd799439011"
    collection.find_one_and_delete = AsyncMock(return_value={"_id": ObjectId(dog_id), "name": "Rex"})

    result = await mongo_store.delete_by_id(dog_id)

    assert result["name"] == "Rex"


async def test_driver_errors_become_store_unavailable(mongo_store, collection):
    collection.find_one = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))

    with pytest.raises(StoreUnavailableError):
        await mongo_store.find_by_id("507f1f77bcf86cd799439011")


async def test_find_all_wraps_cursor_errors(mongo_store, collection):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(side_effect=ServerSelectionTimeoutError("no servers"))
    collection.find.return_value = cursor

    with pytest.raises(StoreUnavailableError):
        await mongo_store.find_all()


async def test_ping(mongo_store):
    assert await mongo_store.ping() is True

    mongo_store.client.admin.command = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
    assert await mongo_store.ping() is False


async def test_from_settings_does_not_connect():
    config = Settings(
        mongodb_url="mongodb://db.invalid:27017",
        mongodb_database="adoption",
        mongodb_collection="dogs",
        store_timeout_ms=500,
    )
    store = MongoDogStore.from_settings(config)
    try:
        assert store.collection.name == "dogs"
        assert store.collection.database.name == "adoption"
    finally:
        await store.close()


def test_incomplete_store_cannot_be_instantiated():
    class ReadOnlyStore(DogStore):
        def is_valid_id(self, value):
            return True

        async def find_all(self):
            return []

        async def find_by_id(self, record_id):
            return None

        async def ping(self):
            return True

    with pytest.raises(TypeError):
        ReadOnlyStore()
