"""Deterministic local embedding provider (no network)."""

import asyncio
import hashlib
import math
from collections.abc import Sequence

DEFAULT_NGRAM = 3


class HashEmbeddingProvider:
    """Signed feature hashing of character n-grams into a fixed-size vector.

    Identical text always maps to the identical unit vector. Similarity only
    reflects shared character n-grams, not meaning.
    """

    def __init__(self, dimensions: int = 1536, ngram: int = DEFAULT_NGRAM) -> None:
        if dimensions < 1:
            raise ValueError("dimensions must be positive")
        if ngram < 1:
            raise ValueError("ngram must be positive")
        self._dimensions = dimensions
        self._ngram = ngram

    @property
    def dimensions(self) -> int:
        return self._dimensions

    def _grams(self, text: str) -> list[str]:
        if len(text) <= self._ngram:
            return [text] if text else []
        return [text[i : i + self._ngram] for i in range(len(text) - self._ngram + 1)]

    def embed_text(self, text: str) -> list[float]:
        vec = [0.0] * self._dimensions
        for gram in self._grams(text):
            digest = hashlib.blake2b(gram.encode("utf-8"), digest_size=8).digest()
            idx = int.from_bytes(digest[:4], "big") % self._dimensions
            sign = 1.0 if (digest[4] & 1) == 0 else -1.0
            vec[idx] += sign
        norm = math.sqrt(sum(x * x for x in vec))
        if norm == 0:
            return vec
        return [x / norm for x in vec]

    def _embed_all(self, texts: Sequence[str]) -> list[list[float]]:
        return [self.embed_text(t) for t in texts]

    async def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """Hash texts in a worker thread; indexing batches can be large."""
        if not texts:
            return []
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._embed_all, list(texts))

    async def embed_one(self, text: str) -> list[float]:
        return self.embed_text(text)
