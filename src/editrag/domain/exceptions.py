"""Domain exceptions."""


class EditRAGError(Exception):
    """Base exception for EditRAG."""

    pass


class ConfigurationError(EditRAGError):
    """Retrieval settings are invalid or a required setting is missing."""

    pass


class ProviderError(EditRAGError):
    """Embedding provider call failed (transport, timeout, bad response)."""

    pass


class ProviderAuthenticationError(ProviderError):
    """Embedding provider rejected the configured credentials."""

    pass


class DimensionMismatchError(EditRAGError):
    """Vector dimensionality does not match the index."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected vector of dimension {expected}, got {actual}")
        self.expected = expected
        self.actual = actual
