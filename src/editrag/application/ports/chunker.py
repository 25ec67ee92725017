"""Chunker port - text splitting strategies."""

from collections.abc import Sequence
from typing import Protocol


class Chunker(Protocol):
    """Port for splitting text into overlapping chunks."""

    chunk_size: int
    chunk_overlap: int

    def split(self, text: str) -> Sequence[str]: ...
