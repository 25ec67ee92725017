"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from editrag.interfaces.api.app import create_app


@pytest.fixture
def engine(make_engine, hash_config):
    """Engine with the local hash provider and no similarity threshold."""
    return make_engine(hash_config)


@pytest.fixture
def app(engine):
    """Falcon ASGI app bound to the test engine."""
    return create_app(engine, cors_origins=["http://localhost:3000"])


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
