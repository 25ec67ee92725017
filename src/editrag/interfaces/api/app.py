"""Falcon ASGI application."""

import logging

import falcon
import falcon.asgi
from falcon.asgi import App

from editrag.application.services.retrieval_engine import RetrievalEngine
from editrag.interfaces.api.middleware.cors import CORSMiddleware
from editrag.interfaces.api.middleware.engine_lifespan import EngineLifespanMiddleware
from editrag.interfaces.api.resources.configuration import ConfigurationResource
from editrag.interfaces.api.resources.documents import DocumentsResource
from editrag.interfaces.api.resources.health import HealthResource
from editrag.interfaces.api.resources.search import SearchResource

logger = logging.getLogger(__name__)


async def _handle_unexpected(req, resp, ex, params) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path, exc_info=ex)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(engine: RetrievalEngine, cors_origins: list[str] | None = None) -> App:
    """Create Falcon ASGI app with routes bound to ``engine``."""
    app = falcon.asgi.App(
        middleware=[
            CORSMiddleware(cors_origins or []),
            EngineLifespanMiddleware(engine),
        ],
    )
    # HTTPError subclasses still resolve to Falcon's more specific handler.
    app.add_error_handler(Exception, _handle_unexpected)

    health = HealthResource(engine)
    app.add_route("/v1/health", health)
    app.add_route("/v1/health/ready", health, suffix="ready")
    app.add_route("/v1/documents", DocumentsResource(engine))
    app.add_route("/v1/search", SearchResource(engine))
    app.add_route("/v1/config", ConfigurationResource(engine))
    return app
