"""Enhanced context entity - retrieval output handed to prompt construction."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class RelevantChunk:
    """Retrieved chunk that passed the similarity threshold."""

    content: str
    source_id: str
    similarity: float


@dataclass(frozen=True)
class EnhancedContext:
    """Relevant chunks ordered by descending similarity plus a summary."""

    relevant_chunks: tuple[RelevantChunk, ...] = ()
    related_sources: tuple[str, ...] = field(default=())
    summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "relevant_chunks": [
                {
                    "content": c.content,
                    "source_id": c.source_id,
                    "similarity": round(c.similarity, 6),
                }
                for c in self.relevant_chunks
            ],
            "related_sources": list(self.related_sources),
            "summary": self.summary,
        }
