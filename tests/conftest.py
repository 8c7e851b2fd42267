from unittest.mock import MagicMock

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.database.mongo_client import get_database
from app.main import app


@pytest.fixture
def db():
    return mongomock.MongoClient()["petora_test"]


@pytest.fixture
def client(db):
    app.dependency_overrides[get_database] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def mock_db():
    """Database whose collections are mocks, for asserting storage is never touched"""
    collections = {}

    def get_collection(name):
        return collections.setdefault(name, MagicMock(name=name))

    database = MagicMock()
    database.__getitem__.side_effect = get_collection
    database.collections = collections
    return database


@pytest.fixture
def mock_client(mock_db):
    app.dependency_overrides[get_database] = lambda: mock_db
    yield TestClient(app)
    app.dependency_overrides.clear()
