"""Domain entities."""

from editrag.domain.entities.chunk import Chunk, IndexedVector
from editrag.domain.entities.enhanced_context import EnhancedContext, RelevantChunk

__all__ = [
    "Chunk",
    "EnhancedContext",
    "IndexedVector",
    "RelevantChunk",
]
