"""Vector similarity helpers."""

import math
from collections.abc import Sequence


def l2_norm(vector: Sequence[float]) -> float:
    return math.sqrt(sum(x * x for x in vector))


def cosine_similarity(
    a: Sequence[float],
    b: Sequence[float],
    norm_a: float | None = None,
    norm_b: float | None = None,
) -> float:
    """Cosine similarity of two equal-length vectors. Zero vectors score 0.0.

    Precomputed norms may be passed to avoid recomputing them per comparison.
    """
    if len(a) != len(b):
        raise ValueError(f"Vector lengths differ: {len(a)} != {len(b)}")
    if norm_a is None:
        norm_a = l2_norm(a)
    if norm_b is None:
        norm_b = l2_norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    return dot / (norm_a * norm_b)
