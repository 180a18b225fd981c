import copy

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from adopdog_api.app.core.db import DogStore
from adopdog_api.app.core.exceptions import StoreUnavailableError
from adopdog_api.app.main import create_app


class InMemoryDogStore(DogStore):
    """Dict-backed store with MongoDB-style identifiers.

    Counts backend calls so tests can assert that a request never
    reached the store.
    """

    def __init__(self):
        self.documents = {}
        self.calls = 0

    def is_valid_id(self, value):
        return isinstance(value, str) and ObjectId.is_valid(value)

    async def find_all(self):
        self.calls += 1
        return [copy.deepcopy(doc) for doc in self.documents.values()]

    async def find_by_id(self, record_id):
        self.calls += 1
        doc = self.documents.get(ObjectId(record_id))
        return copy.deepcopy(doc) if doc is not None else None

    async def insert(self, document):
        self.calls += 1
        stored = {"_id": ObjectId(), **copy.deepcopy(document)}
        self.documents[stored["_id"]] = stored
        return copy.deepcopy(stored)

    async def update_by_id(self, record_id, fields):
        self.calls += 1
        doc = self.documents.get(ObjectId(record_id))
        if doc is None:
            return None
        doc.update(copy.deepcopy(fields))
        return copy.deepcopy(doc)

    async def delete_by_id(self, record_id):
        self.calls += 1
        return self.documents.pop(ObjectId(record_id), None)

    async def ping(self):
        return True


class FailingDogStore(InMemoryDogStore):
    """Store whose backend is always unreachable."""

    async def _fail(self, *args, **kwargs):
        self.calls += 1
        raise StoreUnavailableError("connection refused")

    find_all = _fail
    find_by_id = _fail
    insert = _fail
    update_by_id = _fail
    delete_by_id = _fail

    async def ping(self):
        return False


@pytest.fixture
def store():
    return InMemoryDogStore()


@pytest.fixture
def failing_store():
    return FailingDogStore()


@pytest.fixture
def client(store):
    """TestClient for an app serving from the in-memory store."""
    with TestClient(create_app(store=store)) as test_client:
        yield test_client


@pytest.fixture
def failing_client(failing_store):
    with TestClient(create_app(store=failing_store)) as test_client:
        yield test_client


@pytest.fixture
def rex():
    return {"name": "Rex", "age": 3, "gender": "male"}
