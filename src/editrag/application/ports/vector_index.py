"""Vector index port."""

from collections.abc import Iterable, Sequence
from typing import Protocol

from editrag.domain.entities import Chunk


class VectorIndex(Protocol):
    """Port for storing chunk embeddings and k-nearest-neighbour lookup."""

    def add(self, items: Sequence[tuple[Sequence[float], Chunk]]) -> None: ...

    def query(self, vector: Sequence[float], k: int) -> list[tuple[Chunk, float]]: ...

    def remove_sources(self, source_ids: Iterable[str]) -> int: ...

    def clear(self) -> None: ...

    def __len__(self) -> int: ...
