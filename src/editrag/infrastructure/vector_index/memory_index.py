"""In-memory vector index with cosine similarity search."""

import logging
from collections.abc import Iterable, Sequence

from editrag.domain.entities import Chunk, IndexedVector
from editrag.domain.exceptions import DimensionMismatchError
from editrag.infrastructure.vector_index.similarity import cosine_similarity, l2_norm

logger = logging.getLogger(__name__)


class InMemoryVectorIndex:
    """List-backed vector index. Brute-force k-NN by cosine similarity.

    Dimensionality is fixed by the constructor or, when omitted, by the first
    ``add``. It stays fixed after ``clear()``.
    """

    def __init__(self, dimensions: int | None = None) -> None:
        self._dimensions = dimensions
        self._entries: list[IndexedVector] = []
        self._norms: list[float] = []

    @property
    def dimensions(self) -> int | None:
        return self._dimensions

    def __len__(self) -> int:
        return len(self._entries)

    def _check_dimensions(self, vector: Sequence[float], expected: int | None) -> int:
        if expected is not None and len(vector) != expected:
            raise DimensionMismatchError(expected, len(vector))
        return len(vector)

    def add(self, items: Sequence[tuple[Sequence[float], Chunk]]) -> None:
        """Append (vector, chunk) pairs. Either all items are added or none."""
        if not items:
            return
        expected = self._dimensions
        prepared: list[IndexedVector] = []
        for vector, chunk in items:
            expected = self._check_dimensions(vector, expected)
            prepared.append(IndexedVector(vector=tuple(float(x) for x in vector), chunk=chunk))

        self._dimensions = expected
        self._entries.extend(prepared)
        self._norms.extend(l2_norm(entry.vector) for entry in prepared)
        logger.debug("Indexed %d vectors (total %d)", len(prepared), len(self._entries))

    def query(self, vector: Sequence[float], k: int) -> list[tuple[Chunk, float]]:
        """Return up to ``k`` chunks by descending similarity, ties in insertion order."""
        if k <= 0 or not self._entries:
            return []
        self._check_dimensions(vector, self._dimensions)
        query_norm = l2_norm(vector)
        scored = [
            (entry.chunk, cosine_similarity(entry.vector, vector, norm_a=norm, norm_b=query_norm))
            for entry, norm in zip(self._entries, self._norms)
        ]
        # sorted() is stable, so equal scores keep insertion order.
        scored = sorted(scored, key=lambda item: item[1], reverse=True)
        return scored[:k]

    def remove_sources(self, source_ids: Iterable[str]) -> int:
        """Drop every entry belonging to ``source_ids``. Returns the number removed."""
        targets = set(source_ids)
        if not targets or not self._entries:
            return 0
        kept = [
            (entry, norm)
            for entry, norm in zip(self._entries, self._norms)
            if entry.chunk.source_id not in targets
        ]
        removed = len(self._entries) - len(kept)
        self._entries = [entry for entry, _ in kept]
        self._norms = [norm for _, norm in kept]
        return removed

    def source_ids(self) -> list[str]:
        """Distinct source ids in first-insertion order."""
        return list(dict.fromkeys(entry.chunk.source_id for entry in self._entries))

    def clear(self) -> None:
        self._entries = []
        self._norms = []
