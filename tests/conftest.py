"""Test configuration and fixtures."""

import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from string_analyzer.api.dependencies import get_store
from string_analyzer.crud.strings import InMemoryStringStore, SQLStringStore
from string_analyzer.database import create_db_engine, init_db
from string_analyzer.main import app
from string_analyzer.services.analyzer import build_document


SAMPLE_VALUES = [
    "racecar",
    "hello world",
    "A man a plan a canal Panama",
    "banana",
    "noon",
    "the quick brown fox jumps",
    "zebra",
]


@pytest.fixture
def sample_documents():
    """Documents with strictly increasing creation times, in SAMPLE_VALUES order."""
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    return [
        build_document(value, created_at=start + timedelta(seconds=i))
        for i, value in enumerate(SAMPLE_VALUES)
    ]


@pytest.fixture
def memory_store():
    return InMemoryStringStore()


@pytest.fixture
def db_session():
    """Session bound to a throwaway in-memory SQLite database."""
    engine = create_db_engine("sqlite://")
    init_db(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def sql_store(db_session):
    return SQLStringStore(db_session)


@pytest.fixture
def client(memory_store):
    """Test client whose routes use a fresh in-memory store."""
    app.dependency_overrides[get_store] = lambda: memory_store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def populated_client(client):
    for value in SAMPLE_VALUES:
        response = client.post("/strings", json={"value": value})
        assert response.status_code == 201
    return client
