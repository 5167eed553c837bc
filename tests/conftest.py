import pytest
from fastapi.testclient import TestClient

from safespace.core.main import create_app
from safespace.core.memory.db import create_session_factory
from safespace.core.memory.repository import SqlStorage
from safespace.core.memory.storage import MemoryStorage, create_storage


@pytest.fixture()
def storage():
    """Seeded in-memory store: three therapists, three chat rooms."""
    return create_storage("memory", seed=True)


@pytest.fixture()
def app(storage):
    """A fresh FastAPI app over its own store for each test."""
    return create_app(storage=storage)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture(params=["memory", "sql"])
def empty_storage(request):
    """Unseeded store, once per backend."""
    if request.param == "sql":
        return SqlStorage(create_session_factory("sqlite://"))
    return MemoryStorage()
