"""Unit tests for RetrievalConfig validation and updates."""

import pytest

from editrag.domain.exceptions import ConfigurationError
from editrag.domain.value_objects import EmbeddingBackend, RetrievalConfig


def test_defaults() -> None:
    config = RetrievalConfig()
    assert config.enabled is True
    assert config.chunk_size == 1000
    assert config.chunk_overlap == 200
    assert config.max_source_documents == 10
    assert config.similarity_threshold == 0.7
    assert config.api_key is None
    assert config.model_name == "text-embedding-3-small"
    assert config.embedding_backend == EmbeddingBackend.AUTO
    assert config.replace_existing_sources is True


@pytest.mark.parametrize(
    "changes",
    [
        {"chunk_size": 50},
        {"chunk_size": 5000},
        {"chunk_overlap": -1},
        {"chunk_overlap": 1001},
        {"max_source_documents": 0},
        {"max_source_documents": 51},
        {"similarity_threshold": -0.1},
        {"similarity_threshold": 1.5},
        {"similarity_threshold": float("nan")},
        {"embedding_dimensions": 4},
    ],
)
def test_out_of_range_values_rejected(changes: dict) -> None:
    with pytest.raises(ConfigurationError):
        RetrievalConfig(**changes)


def test_bool_is_not_an_integer() -> None:
    with pytest.raises(ConfigurationError, match="must be an integer"):
        RetrievalConfig(chunk_size=True)


def test_overlap_must_be_less_than_size() -> None:
    with pytest.raises(ConfigurationError, match="less than chunk_size"):
        RetrievalConfig(chunk_size=200, chunk_overlap=200)


def test_boundaries_accepted() -> None:
    config = RetrievalConfig(
        chunk_size=100,
        chunk_overlap=0,
        max_source_documents=50,
        similarity_threshold=1.0,
    )
    assert config.chunk_size == 100
    assert RetrievalConfig(chunk_size=4000, chunk_overlap=1000).chunk_overlap == 1000
    assert RetrievalConfig(similarity_threshold=0).similarity_threshold == 0


def test_empty_api_key_rejected() -> None:
    with pytest.raises(ConfigurationError, match="API key cannot be empty"):
        RetrievalConfig(api_key="   ")


def test_openai_backend_requires_key() -> None:
    with pytest.raises(ConfigurationError, match="required"):
        RetrievalConfig(embedding_backend=EmbeddingBackend.OPENAI)
    config = RetrievalConfig(embedding_backend="openai", api_key="sk-test")
    assert config.embedding_backend is EmbeddingBackend.OPENAI


def test_unknown_backend_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Unsupported embedding backend"):
        RetrievalConfig(embedding_backend="word2vec")


def test_empty_model_name_rejected() -> None:
    with pytest.raises(ConfigurationError):
        RetrievalConfig(model_name=" ")


def test_merged_returns_new_snapshot() -> None:
    config = RetrievalConfig()
    updated = config.merged(chunk_size=2000, similarity_threshold=0.5)
    assert updated.chunk_size == 2000
    assert updated.similarity_threshold == 0.5
    assert config.chunk_size == 1000
    assert config.similarity_threshold == 0.7


def test_merged_invalid_leaves_original_unchanged() -> None:
    config = RetrievalConfig()
    with pytest.raises(ConfigurationError):
        config.merged(chunk_size=50)
    assert config.chunk_size == 1000


def test_merged_unknown_fields_rejected() -> None:
    with pytest.raises(ConfigurationError, match="Unknown configuration fields: bogus"):
        RetrievalConfig().merged(bogus=1)


def test_provider_identity_tracks_embedding_space() -> None:
    config = RetrievalConfig()
    assert config.merged(chunk_size=500).provider_identity == config.provider_identity
    assert config.merged(model_name="other").provider_identity != config.provider_identity
    assert config.merged(api_key="sk-x").provider_identity != config.provider_identity


def test_to_dict_masks_api_key() -> None:
    data = RetrievalConfig(api_key="sk-secret").to_dict()
    assert data["api_key"] == "***"
    assert data["embedding_backend"] == "auto"
    assert "sk-secret" not in repr(RetrievalConfig(api_key="sk-secret"))
    assert RetrievalConfig().to_dict()["api_key"] is None


@pytest.mark.parametrize(
    ("changes", "message"),
    [
        ({"model_name": 5}, "model_name must be a string"),
        ({"api_base_url": 123}, "api_base_url must be a string"),
        ({"api_base_url": "  "}, "api_base_url cannot be empty"),
        ({"api_key": 42}, "API key must be a string"),
        ({"replace_existing_sources": "false"}, "replace_existing_sources must be a boolean"),
        ({"replace_existing_sources": 0}, "replace_existing_sources must be a boolean"),
        ({"enabled": "yes"}, "enabled must be a boolean"),
        ({"embedding_backend": ["hash"]}, "Unsupported embedding backend"),
    ],
)
def test_wrongly_typed_update_rejected(changes: dict, message: str) -> None:
    config = RetrievalConfig()
    with pytest.raises(ConfigurationError, match=message):
        config.merged(**changes)
    assert config == RetrievalConfig()
