"""Embedding backend selection."""

from enum import StrEnum


class EmbeddingBackend(StrEnum):
    """Supported embedding backends."""

    AUTO = "auto"
    OPENAI = "openai"
    HASH = "hash"
