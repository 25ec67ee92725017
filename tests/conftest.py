"""Pytest fixtures for EditRAG tests."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from editrag.application.dto import SourceDocument
from editrag.application.services.retrieval_engine import RetrievalEngine
from editrag.domain.value_objects import EmbeddingBackend, RetrievalConfig
from editrag.infrastructure.chunking.sliding_window_chunker import SlidingWindowChunker
from editrag.infrastructure.embedding.hash_provider import HashEmbeddingProvider
from editrag.infrastructure.vector_index.memory_index import InMemoryVectorIndex
from editrag.main import create_retrieval_engine

# --- Fake documents ---


class UnreadableDocument:
    """Document handle whose text cannot be read."""

    def __init__(self, path: str) -> None:
        self.path = path
        self.scheme = "file"
        self.language_id = "python"

    def get_text(self) -> str:
        raise OSError(f"cannot read {self.path}")


VALIDATE_INPUT_SOURCE = "function validateInput(input) { return input.length > 0; }"


# --- Fixtures ---


@pytest.fixture
def hash_config() -> RetrievalConfig:
    """Config using the local hash provider, no credentials."""
    return RetrievalConfig(
        chunk_size=1000,
        chunk_overlap=200,
        similarity_threshold=0.0,
        embedding_backend=EmbeddingBackend.HASH,
        embedding_dimensions=256,
    )


@pytest.fixture
def make_engine() -> Callable[..., RetrievalEngine]:
    """Factory building an engine wired with the real local adapters."""

    def _make(config: RetrievalConfig | None = None, **overrides) -> RetrievalEngine:
        base = config or RetrievalConfig(
            embedding_backend=EmbeddingBackend.HASH,
            embedding_dimensions=256,
        )
        return create_retrieval_engine(base.merged(**overrides) if overrides else base)

    return _make


@pytest.fixture
def mock_embedding_provider():
    """AsyncMock EmbeddingProvider - returns fixed vectors per text."""

    async def _embed_batch(texts):
        return [[0.1] * 8 for _ in texts]

    async def _embed_one(text):
        return [0.1] * 8

    mock = AsyncMock()
    mock.dimensions = 8
    mock.embed_batch = AsyncMock(side_effect=_embed_batch)
    mock.embed_one = AsyncMock(side_effect=_embed_one)
    return mock


@pytest.fixture
def engine_with_provider(hash_config):
    """Factory building an engine around a given provider object."""

    def _make(provider, config: RetrievalConfig | None = None) -> RetrievalEngine:
        return RetrievalEngine(
            config=config or hash_config,
            provider_factory=lambda c: provider,
            chunker_factory=SlidingWindowChunker,
            index_factory=InMemoryVectorIndex,
        )

    return _make


@pytest.fixture
def hash_provider() -> HashEmbeddingProvider:
    return HashEmbeddingProvider(dimensions=256)


@pytest.fixture
def sample_document() -> SourceDocument:
    return SourceDocument(
        path="/workspace/validate.js",
        text=VALIDATE_INPUT_SOURCE,
        language_id="javascript",
    )
