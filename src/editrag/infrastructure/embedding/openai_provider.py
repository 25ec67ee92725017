"""OpenAI-compatible embedding provider."""

import logging
from collections.abc import Sequence

import openai
from openai import AsyncOpenAI

from editrag.domain.exceptions import (
    ConfigurationError,
    ProviderAuthenticationError,
    ProviderError,
)

logger = logging.getLogger(__name__)

# Native dimensions for known models (used until the API reports one)
DEFAULT_MODEL_DIMENSIONS: dict[str, int] = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}

# Models that accept the ``dimensions`` request parameter
_RESIZABLE_MODEL_PREFIX = "text-embedding-3"


def supports_dimensions(model: str) -> bool:
    return model.startswith(_RESIZABLE_MODEL_PREFIX)


class OpenAIEmbeddingProvider:
    """Embedding provider using an OpenAI-compatible API."""

    def __init__(
        self,
        base_url: str,
        api_key: str | None,
        model: str,
        dimensions: int | None = None,
        timeout: float = 30.0,
    ) -> None:
        if not api_key:
            raise ConfigurationError("API key is required for the OpenAI embedding provider")
        if dimensions is not None and not supports_dimensions(model):
            raise ConfigurationError(f"Model {model!r} does not support custom dimensions")
        # Retries are the caller's decision; one failure ends the call.
        self._client = AsyncOpenAI(
            base_url=base_url,
            api_key=api_key,
            timeout=timeout,
            max_retries=0,
        )
        self._model = model
        self._requested_dimensions = dimensions
        self._dimensions = dimensions or DEFAULT_MODEL_DIMENSIONS.get(model)

    @property
    def model(self) -> str:
        return self._model

    @property
    def dimensions(self) -> int | None:
        return self._dimensions

    async def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """Generate embeddings for texts, in input order."""
        if not texts:
            return []
        kwargs = {}
        if self._requested_dimensions is not None:
            kwargs["dimensions"] = self._requested_dimensions
        try:
            response = await self._client.embeddings.create(
                model=self._model,
                input=list(texts),
                **kwargs,
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            raise ProviderAuthenticationError(
                f"Embedding API rejected credentials for model {self._model}"
            ) from e
        except openai.APITimeoutError as e:
            raise ProviderError(f"Embedding request timed out for model {self._model}") from e
        except openai.OpenAIError as e:
            raise ProviderError(
                f"Embedding request failed for model {self._model}: {type(e).__name__}"
            ) from e

        data = sorted(response.data, key=lambda d: d.index)
        if len(data) != len(texts):
            raise ProviderError(
                f"Embedding API returned {len(data)} vectors for {len(texts)} inputs"
            )
        vectors = [list(d.embedding) for d in data]
        expected = self._dimensions or len(vectors[0])
        if any(len(v) != expected for v in vectors):
            raise ProviderError(
                f"Embedding API returned vectors of unexpected dimension (expected {expected})"
            )
        if self._dimensions is None:
            logger.info("Embedding model %s reports dimension %d", self._model, expected)
            self._dimensions = expected
        return vectors

    async def embed_one(self, text: str) -> list[float]:
        vectors = await self.embed_batch([text])
        return vectors[0]
