"""Embedding provider port."""

from collections.abc import Sequence
from typing import Protocol


class EmbeddingProvider(Protocol):
    """Port for generating text embeddings of a fixed dimensionality."""

    @property
    def dimensions(self) -> int | None: ...

    async def embed_batch(self, texts: Sequence[str]) -> list[list[float]]: ...

    async def embed_one(self, text: str) -> list[float]: ...
