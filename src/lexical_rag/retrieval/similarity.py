"""Cosine similarity over sparse term vectors."""

from __future__ import annotations

from math import sqrt

from lexical_rag.types import TermVector


def cosine(a: TermVector, b: TermVector) -> float:
    """Cosine similarity of two sparse vectors.

    The dot product runs over shared keys; each norm runs over the vector's own
    keys. The result lies in [0, 1] for non-negative vectors. Returns 0.0 when
    either vector is empty or has zero norm.
    """

    if not a or not b:
        return 0.0
    numerator = sum(a[key] * b[key] for key in sorted(a.keys() & b.keys()))
    norm_a = sqrt(sum(value * value for value in a.values()))
    norm_b = sqrt(sum(value * value for value in b.values()))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    # Rounding can push self-similarity just past 1.0.
    return min(1.0, numerator / (norm_a * norm_b))
