"""Pytest configuration for integration tests."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from gymflow.db import ClientProfileRepository, get_db_path, init_db, seed_exercises
from gymflow.models import ClientProfile
from gymflow.web import create_app


# Mark all tests in this directory as integration tests
def pytest_collection_modifyitems(items):
    """Add integration marker to all tests in this directory."""
    for item in items:
        if "integration_tests" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


async def _seed(db_path) -> dict[str, int]:
    await init_db(db_path)
    await seed_exercises(db_path)
    repo = ClientProfileRepository(db_path)
    profiles = [
        ClientProfile(user_id="member-1", name="Ana", gym_id="gym-1"),
        ClientProfile(user_id="member-2", name="Bruno", gym_id="gym-2"),
    ]
    return {p.user_id: (await repo.create(p)).id for p in profiles}


@pytest.fixture
def profile_ids(tmp_path, monkeypatch):
    """Point the app at a fresh database and create two members."""
    monkeypatch.setenv("GYMFLOW_DATA_DIR", str(tmp_path))
    return asyncio.run(_seed(get_db_path()))


@pytest.fixture
def client(profile_ids):
    """Test client running the app lifespan."""
    with TestClient(create_app()) as test_client:
        yield test_client
