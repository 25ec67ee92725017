"""Engine lifespan middleware - starts provider initialization on startup."""

import logging
from typing import Any

from editrag.application.services.retrieval_engine import RetrievalEngine

logger = logging.getLogger(__name__)


class EngineLifespanMiddleware:
    """Middleware that waits for the retrieval engine when the ASGI server starts."""

    def __init__(self, engine: RetrievalEngine) -> None:
        self._engine = engine

    async def process_startup(
        self, scope: dict[str, Any], event: dict[str, Any]
    ) -> None:
        """Initialize the embedding provider before serving requests."""
        state = await self._engine.wait_until_initialized()
        logger.info("Retrieval engine state at startup: %s", state)
