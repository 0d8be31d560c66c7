import random

import pytest
from fastapi import Header
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tunimind.database import init_db
from tunimind.main import app
from tunimind.routes.chat_routes import get_chat_provider
from tunimind.services.data_service import DataService
from tunimind.storage import SqlStorage, get_storage, USER_ID_KEY, SPECIAL_ACCESS_KEY
from tunimind import config


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def storage(session_factory):
    return SqlStorage(session_factory, "test-client")


@pytest.fixture
def data(storage):
    return DataService(storage, rng=random.Random(7))


@pytest.fixture
def signed_in(storage):
    """Namespace with a plain user signed in."""
    storage.set_item(USER_ID_KEY, "user_1")
    storage.set_item(SPECIAL_ACCESS_KEY, "false")
    return storage


@pytest.fixture
def special(storage):
    """Namespace with the demo account signed in."""
    storage.set_item(USER_ID_KEY, config.SPECIAL_USER_ID)
    storage.set_item(SPECIAL_ACCESS_KEY, "true")
    return storage


@pytest.fixture
def client(session_factory):
    def _storage(x_client_id: str | None = Header(default=None)):
        return SqlStorage(session_factory, x_client_id or config.DEFAULT_CLIENT_ID)

    app.dependency_overrides[get_storage] = _storage
    app.dependency_overrides[get_chat_provider] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()
