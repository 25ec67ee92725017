"""Retrieval configuration API resource."""

import falcon
import falcon.asgi

from editrag.application.services.retrieval_engine import RetrievalEngine
from editrag.domain.exceptions import ConfigurationError


class ConfigurationResource:
    """GET/PATCH /v1/config - read and update retrieval settings."""

    def __init__(self, engine: RetrievalEngine) -> None:
        self._engine = engine

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Current configuration snapshot (API key masked)."""
        resp.media = self._engine.get_config().to_dict()
        resp.status = falcon.HTTP_200

    async def on_patch(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Apply a partial update. Invalid values leave the configuration unchanged."""
        try:
            body = await req.get_media()
        except (falcon.MediaNotFoundError, falcon.MediaMalformedError):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Invalid request body"}
            return
        if not isinstance(body, dict):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Configuration update must be an object"}
            return

        try:
            config = self._engine.update_config(**body)
        except ConfigurationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = {**config.to_dict(), "state": self._engine.state.value}
        resp.status = falcon.HTTP_200
