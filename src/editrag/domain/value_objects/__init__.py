"""Domain value objects."""

from editrag.domain.value_objects.embedding_backend import EmbeddingBackend
from editrag.domain.value_objects.engine_state import EngineState
from editrag.domain.value_objects.retrieval_config import RetrievalConfig

__all__ = [
    "EmbeddingBackend",
    "EngineState",
    "RetrievalConfig",
]
