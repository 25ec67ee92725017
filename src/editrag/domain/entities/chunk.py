"""Chunk entities - text segments and their embeddings."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Chunk:
    """Chunk - contiguous slice of a source document's text."""

    content: str
    source_id: str
    sequence_index: int
    language: str = ""

    def __post_init__(self) -> None:
        if not self.content.strip():
            raise ValueError("Chunk content must not be blank")
        if self.sequence_index < 0:
            raise ValueError("Chunk sequence_index must be >= 0")


@dataclass(frozen=True)
class IndexedVector:
    """Chunk paired with its embedding, owned by a vector index."""

    vector: tuple[float, ...]
    chunk: Chunk

    @property
    def dimensions(self) -> int:
        return len(self.vector)
