from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from taskboard.config import Settings
from taskboard.main import create_app

BACKENDS = {
    "document": "memory://",
    "sqlite": "sqlite://",
}

# Well-formed ids that no record will ever have, per backend key type.
MISSING_IDS = {
    "memory://": "0" * 24,
    "sqlite://": "999999",
}


@pytest.fixture(params=list(BACKENDS.values()), ids=list(BACKENDS.keys()))
def settings(request) -> Settings:
    return Settings(database_url=request.param)


@pytest.fixture()
def client(settings: Settings):
    # Entering the client runs the lifespan, which opens and later closes the store.
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture()
def missing_id(settings: Settings) -> str:
    return MISSING_IDS[settings.database_url]
