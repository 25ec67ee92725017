"""Health endpoint tests."""

import pytest
from falcon.asgi import App
from falcon.testing import TestClient

from editrag.application.services.retrieval_engine import RetrievalEngine
from editrag.domain.exceptions import ConfigurationError
from editrag.domain.value_objects import RetrievalConfig
from editrag.infrastructure.chunking.sliding_window_chunker import SlidingWindowChunker
from editrag.infrastructure.vector_index.memory_index import InMemoryVectorIndex
from editrag.interfaces.api.middleware.engine_lifespan import EngineLifespanMiddleware
from editrag.interfaces.api.resources.health import HealthResource


def _client(engine: RetrievalEngine) -> TestClient:
    app = App(middleware=[EngineLifespanMiddleware(engine)])
    health = HealthResource(engine)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    return TestClient(app)


@pytest.fixture
def client(make_engine) -> TestClient:
    """Create test client with health endpoints."""
    return _client(make_engine())


def test_health_liveness(client: TestClient) -> None:
    """GET /v1/health returns 200."""
    result = client.simulate_get("/v1/health")
    assert result.status_code == 200
    assert result.json["status"] == "ok"


def test_health_ready(client: TestClient) -> None:
    """GET /v1/health/ready returns 200 once the provider is initialized."""
    result = client.simulate_get("/v1/health/ready")
    assert result.status_code == 200
    assert result.json["status"] == "ready"


def test_health_ready_reports_failure() -> None:
    """A provider that cannot be built leaves the service unready."""

    def broken_factory(config):
        raise ConfigurationError("missing credentials")

    engine = RetrievalEngine(
        config=RetrievalConfig(),
        provider_factory=broken_factory,
        chunker_factory=SlidingWindowChunker,
        index_factory=InMemoryVectorIndex,
    )
    result = _client(engine).simulate_get("/v1/health/ready")
    assert result.status_code == 503
    assert result.json["state"] == "failed"
    assert result.json["last_error"] == "missing credentials"
    assert _client(engine).simulate_get("/v1/health").status_code == 200
