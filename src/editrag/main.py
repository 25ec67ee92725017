"""Application entry point and composition root."""

import argparse

from editrag import __version__
from editrag.application.services.retrieval_engine import RetrievalEngine
from editrag.config import Settings, get_settings
from editrag.domain.value_objects import RetrievalConfig
from editrag.infrastructure.chunking.sliding_window_chunker import SlidingWindowChunker
from editrag.infrastructure.embedding.factory import create_embedding_provider
from editrag.infrastructure.vector_index.memory_index import InMemoryVectorIndex
from editrag.interfaces.api.app import create_app
from editrag.logging_config import setup_logging


def create_retrieval_engine(config: RetrievalConfig, timeout: float = 30.0) -> RetrievalEngine:
    """Wire the engine with the sliding window chunker, configured provider and memory index."""
    return RetrievalEngine(
        config=config,
        provider_factory=lambda c: create_embedding_provider(c, timeout=timeout),
        chunker_factory=SlidingWindowChunker,
        index_factory=InMemoryVectorIndex,
    )


def create_editrag_app(settings: Settings | None = None):
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    engine = create_retrieval_engine(
        settings.to_retrieval_config(),
        timeout=settings.embedding_timeout,
    )
    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return create_app(engine, cors_origins)


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    app = create_editrag_app(settings)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else settings.log_level.lower(),
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(prog="editrag", description="EditRAG retrieval service")
    parser.add_argument("--version", action="version", version=f"EditRAG v{__version__}")
    parser.add_argument("command", nargs="?", choices=["serve"], help="serve: run the HTTP API")
    args = parser.parse_args(argv)
    if args.command == "serve":
        run_server()
    else:
        print(f"EditRAG v{__version__}")
