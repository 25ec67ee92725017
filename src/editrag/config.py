"""Application configuration from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from editrag.domain.value_objects import EmbeddingBackend, RetrievalConfig


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EDITRAG_",
        case_sensitive=False,
    )

    # Retrieval
    enabled: bool = Field(default=True, description="Enable semantic retrieval")
    chunk_size: int = Field(default=1000, description="Maximum characters per chunk")
    chunk_overlap: int = Field(default=200, description="Characters shared by consecutive chunks")
    max_source_documents: int = Field(
        default=10,
        description="Maximum documents indexed per indexing call",
    )
    similarity_threshold: float = Field(
        default=0.7,
        description="Minimum cosine similarity for a chunk to be returned",
    )
    replace_existing_sources: bool = Field(
        default=True,
        description="Drop a document's previous chunks when it is re-indexed",
    )

    # Embedding API (OpenAI compatible)
    embedding_backend: EmbeddingBackend = Field(
        default=EmbeddingBackend.AUTO,
        description="auto, openai or hash",
    )
    embedding_api_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI-compatible embedding API URL",
    )
    embedding_api_key: str = Field(default="", description="Embedding API key")
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model name",
    )
    embedding_dimensions: int = Field(default=1536, description="Embedding vector dimensions")
    embedding_timeout: float = Field(default=30.0, description="Embedding request timeout (s)")

    # Service
    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=8000, description="Bind port")
    cors_origins: str = Field(default="", description="Comma-separated allowed origins")

    # Application
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")

    def to_retrieval_config(self) -> RetrievalConfig:
        """Validated retrieval settings. Raises ConfigurationError."""
        return RetrievalConfig(
            enabled=self.enabled,
            chunk_size=self.chunk_size,
            chunk_overlap=self.chunk_overlap,
            max_source_documents=self.max_source_documents,
            similarity_threshold=self.similarity_threshold,
            api_key=self.embedding_api_key or None,
            model_name=self.embedding_model,
            embedding_backend=self.embedding_backend,
            api_base_url=self.embedding_api_url,
            embedding_dimensions=self.embedding_dimensions,
            replace_existing_sources=self.replace_existing_sources,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
