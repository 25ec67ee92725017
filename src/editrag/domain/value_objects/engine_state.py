"""Retrieval engine lifecycle state."""

from enum import StrEnum


class EngineState(StrEnum):
    """Lifecycle states of the retrieval engine."""

    DISABLED = "disabled"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"
