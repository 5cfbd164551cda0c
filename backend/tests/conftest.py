"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from api.dependencies import get_completion_provider, get_storage
from database import Base
from main import app
from storage import MemoryStorage, SqlStorage
from stylist_main import app as stylist_app
from tests.fixtures.mocks import MockCompletionProvider


@pytest.fixture(name="session_factory")
def session_factory_fixture():
    """Create an in-memory SQLite database and return a sessionmaker for it."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(name="storage")
def storage_fixture():
    """A fresh in-memory store."""
    return MemoryStorage()


@pytest.fixture(name="sql_storage")
def sql_storage_fixture(session_factory):
    """A SQL store over an in-memory SQLite database."""
    return SqlStorage(session_factory)


@pytest.fixture(name="any_storage", params=["memory", "sql"])
def any_storage_fixture(request, session_factory):
    """Each storage backend in turn, for contract tests."""
    if request.param == "sql":
        return SqlStorage(session_factory)
    return MemoryStorage()


@pytest.fixture(name="provider")
def provider_fixture():
    """A mock completion provider with a fixed reply."""
    return MockCompletionProvider()


@pytest.fixture(name="client")
def client_fixture(storage, provider):
    """Create a Perception test client with the test store and mock provider."""
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_completion_provider] = lambda: provider
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="sql_client")
def sql_client_fixture(sql_storage, provider):
    """Create a Perception test client backed by the SQL store."""
    app.dependency_overrides[get_storage] = lambda: sql_storage
    app.dependency_overrides[get_completion_provider] = lambda: provider
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="stylist_client")
def stylist_client_fixture(storage):
    """Create a Stylist test client with the test store."""
    stylist_app.dependency_overrides[get_storage] = lambda: storage
    client = TestClient(stylist_app)
    yield client
    stylist_app.dependency_overrides.clear()
