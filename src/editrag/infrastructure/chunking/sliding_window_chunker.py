"""Sliding window text chunker implementation."""

from collections.abc import Iterator, Sequence
from typing import overload

from editrag.domain.exceptions import ConfigurationError


class TextChunks(Sequence[str]):
    """Lazy view over the overlapping windows of a text.

    Slices are taken on access, so iterating twice walks the text twice and
    nothing is copied up front.
    """

    __slots__ = ("_text", "_size", "_step", "_count")

    def __init__(self, text: str, chunk_size: int, chunk_overlap: int) -> None:
        self._text = text
        self._size = chunk_size
        self._step = chunk_size - chunk_overlap
        if not text.strip():
            self._count = 0
        elif len(text) <= chunk_size:
            self._count = 1
        else:
            # Last window is the first one that reaches the end of the text.
            self._count = -(-(len(text) - chunk_size) // self._step) + 1

    def __len__(self) -> int:
        return self._count

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> list[str]: ...

    def __getitem__(self, index: int | slice) -> str | list[str]:
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(self._count))]
        if index < 0:
            index += self._count
        if not 0 <= index < self._count:
            raise IndexError("chunk index out of range")
        start = index * self._step
        return self._text[start : start + self._size]

    def __iter__(self) -> Iterator[str]:
        for i in range(self._count):
            start = i * self._step
            yield self._text[start : start + self._size]

    def __repr__(self) -> str:
        return f"TextChunks(count={self._count}, size={self._size}, step={self._step})"


class SlidingWindowChunker:
    """Chunker using fixed-size character windows with a fixed overlap."""

    def __init__(self, chunk_size: int, chunk_overlap: int) -> None:
        if chunk_size < 1:
            raise ConfigurationError(f"chunk_size must be positive, got {chunk_size}")
        if chunk_overlap < 0:
            raise ConfigurationError(f"chunk_overlap must be >= 0, got {chunk_overlap}")
        if chunk_overlap >= chunk_size:
            raise ConfigurationError(
                f"chunk_overlap ({chunk_overlap}) must be less than chunk_size ({chunk_size})"
            )
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    def split(self, text: str) -> TextChunks:
        """Split text into windows that share ``chunk_overlap`` characters."""
        return TextChunks(text, self.chunk_size, self.chunk_overlap)
