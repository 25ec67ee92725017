"""Health check endpoints."""

import falcon.asgi

from editrag.application.services.retrieval_engine import RetrievalEngine


class HealthResource:
    """Health and readiness endpoints."""

    def __init__(self, engine: RetrievalEngine) -> None:
        self._engine = engine

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health - liveness."""
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200

    async def on_get_ready(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """GET /v1/health/ready - readiness of the retrieval engine."""
        error = self._engine.last_error
        resp.media = {
            "status": "ready" if self._engine.is_ready() else "unavailable",
            "state": self._engine.state.value,
            "available": self._engine.is_available(),
            "indexed_chunks": self._engine.indexed_chunk_count,
            "last_error": str(error) if error else None,
        }
        resp.status = falcon.HTTP_200 if self._engine.is_ready() else falcon.HTTP_503
