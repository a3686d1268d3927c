"""
Cosine similarity - the scoring function behind in-process ranking.

Vectors of different length, or an all-zero vector, score 0.0 ("unrelated")
instead of raising. Stored embeddings may be missing or come from another model.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


def cosine_similarity(a: Sequence[float] | np.ndarray, b: Sequence[float] | np.ndarray) -> float:
    """
    Cosine similarity between two vectors, in [-1, 1].

    Returns 0.0 when the lengths differ or either vector has zero magnitude.
    """
    va = np.asarray(a, dtype=np.float64).ravel()
    vb = np.asarray(b, dtype=np.float64).ravel()

    if va.shape[0] != vb.shape[0]:
        return 0.0

    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    score = float(np.dot(va, vb) / (norm_a * norm_b))
    # Rounding can push parallel vectors a hair past 1.0
    return max(-1.0, min(1.0, score))
