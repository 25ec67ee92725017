"""Application ports - interfaces for external adapters."""

from editrag.application.ports.chunker import Chunker
from editrag.application.ports.document_handle import DocumentHandle
from editrag.application.ports.embedding_provider import EmbeddingProvider
from editrag.application.ports.vector_index import VectorIndex

__all__ = [
    "Chunker",
    "DocumentHandle",
    "EmbeddingProvider",
    "VectorIndex",
]
