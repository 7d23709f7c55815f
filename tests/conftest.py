import pytest
from fastapi.testclient import TestClient

from orderdesk.config import Settings
from orderdesk.infrastructure.api.app import create_app
from tests.fakes import InMemoryStore, fake_container


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def client(store):
    app = create_app(container=fake_container(store), settings=Settings())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def lenient_client(store):
    """A client that answers unhandled errors with a 500 instead of raising."""
    app = create_app(container=fake_container(store), settings=Settings())
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
