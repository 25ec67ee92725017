"""Embedding provider selection from configuration."""

import logging

from editrag.application.ports import EmbeddingProvider
from editrag.domain.value_objects import EmbeddingBackend, RetrievalConfig
from editrag.infrastructure.embedding.hash_provider import HashEmbeddingProvider
from editrag.infrastructure.embedding.openai_provider import (
    OpenAIEmbeddingProvider,
    supports_dimensions,
)

logger = logging.getLogger(__name__)


def resolve_backend(config: RetrievalConfig) -> EmbeddingBackend:
    """Concrete backend for ``config``; ``auto`` picks openai when credentials exist."""
    if config.embedding_backend != EmbeddingBackend.AUTO:
        return config.embedding_backend
    return EmbeddingBackend.OPENAI if config.has_credentials else EmbeddingBackend.HASH


def create_embedding_provider(
    config: RetrievalConfig,
    timeout: float = 30.0,
) -> EmbeddingProvider:
    """Build the embedding provider selected by ``config``."""
    backend = resolve_backend(config)
    if backend == EmbeddingBackend.OPENAI:
        dimensions = (
            config.embedding_dimensions if supports_dimensions(config.model_name) else None
        )
        logger.info("Using OpenAI embeddings with model %s", config.model_name)
        return OpenAIEmbeddingProvider(
            base_url=config.api_base_url,
            api_key=config.api_key,
            model=config.model_name,
            dimensions=dimensions,
            timeout=timeout,
        )
    logger.info(
        "Using local hash embeddings (%d dimensions); similarity is lexical only",
        config.embedding_dimensions,
    )
    return HashEmbeddingProvider(dimensions=config.embedding_dimensions)
