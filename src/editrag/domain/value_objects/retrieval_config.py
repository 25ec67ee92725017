"""Retrieval configuration snapshot."""

import math
from dataclasses import dataclass, field, fields, replace
from typing import Any

from editrag.domain.exceptions import ConfigurationError
from editrag.domain.value_objects.embedding_backend import EmbeddingBackend

CHUNK_SIZE_BOUNDS = (100, 4000)
CHUNK_OVERLAP_BOUNDS = (0, 1000)
MAX_SOURCE_DOCUMENTS_BOUNDS = (1, 50)
EMBEDDING_DIMENSIONS_BOUNDS = (8, 8192)

# Changing any of these puts vectors in a different embedding space.
PROVIDER_IDENTITY_FIELDS = (
    "embedding_backend",
    "api_key",
    "model_name",
    "api_base_url",
    "embedding_dimensions",
)


def _check_int(name: str, value: Any, bounds: tuple[int, int]) -> None:
    low, high = bounds
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise ConfigurationError(f"{name} must be between {low} and {high}, got {value}")


def _check_text(name: str, value: Any) -> None:
    if not isinstance(value, str):
        raise ConfigurationError(f"{name} must be a string, got {value!r}")
    if not value.strip():
        raise ConfigurationError(f"{name} cannot be empty")


@dataclass(frozen=True)
class RetrievalConfig:
    """Immutable retrieval settings. Validated on construction.

    Updates go through ``merged()``, which builds a new validated snapshot and
    leaves this one untouched.
    """

    enabled: bool = True
    chunk_size: int = 1000
    chunk_overlap: int = 200
    max_source_documents: int = 10
    similarity_threshold: float = 0.7
    api_key: str | None = field(default=None, repr=False)
    model_name: str = "text-embedding-3-small"
    embedding_backend: EmbeddingBackend = EmbeddingBackend.AUTO
    api_base_url: str = "https://api.openai.com/v1"
    embedding_dimensions: int = 1536
    replace_existing_sources: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.enabled, bool):
            raise ConfigurationError(f"enabled must be a boolean, got {self.enabled!r}")
        _check_int("chunk_size", self.chunk_size, CHUNK_SIZE_BOUNDS)
        _check_int("chunk_overlap", self.chunk_overlap, CHUNK_OVERLAP_BOUNDS)
        if self.chunk_overlap >= self.chunk_size:
            raise ConfigurationError(
                f"chunk_overlap ({self.chunk_overlap}) must be less than "
                f"chunk_size ({self.chunk_size})"
            )
        _check_int("max_source_documents", self.max_source_documents, MAX_SOURCE_DOCUMENTS_BOUNDS)
        _check_int("embedding_dimensions", self.embedding_dimensions, EMBEDDING_DIMENSIONS_BOUNDS)

        threshold = self.similarity_threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ConfigurationError(
                f"similarity_threshold must be a number, got {threshold!r}"
            )
        if math.isnan(threshold) or not 0.0 <= threshold <= 1.0:
            raise ConfigurationError(
                f"similarity_threshold must be between 0 and 1, got {threshold}"
            )

        try:
            backend = EmbeddingBackend(self.embedding_backend)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(
                f"Unsupported embedding backend: {self.embedding_backend!r}"
            ) from e
        object.__setattr__(self, "embedding_backend", backend)

        if self.api_key is not None and not isinstance(self.api_key, str):
            raise ConfigurationError("API key must be a string")
        if self.api_key is not None and not self.api_key.strip():
            raise ConfigurationError("API key cannot be empty")
        if backend == EmbeddingBackend.OPENAI and not self.api_key:
            raise ConfigurationError("API key is required for the openai embedding backend")
        _check_text("model_name", self.model_name)
        _check_text("api_base_url", self.api_base_url)
        if not isinstance(self.replace_existing_sources, bool):
            raise ConfigurationError(
                f"replace_existing_sources must be a boolean, got {self.replace_existing_sources!r}"
            )

    def merged(self, **changes: Any) -> "RetrievalConfig":
        """Return a validated copy with ``changes`` applied."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ConfigurationError(f"Unknown configuration fields: {', '.join(unknown)}")
        return replace(self, **changes)

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key)

    @property
    def provider_identity(self) -> tuple[Any, ...]:
        return tuple(getattr(self, name) for name in PROVIDER_IDENTITY_FIELDS)

    def to_dict(self) -> dict[str, Any]:
        """Serializable snapshot with the API key masked."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["api_key"] = "***" if self.api_key else None
        data["embedding_backend"] = self.embedding_backend.value
        return data
