"""
Career Compass vector layer.
Similarity metrics over multi-field embeddings.
"""

import numpy as np

from .errors import DimensionMismatchError
from .types import FIELDS, FieldWeights, VectorLike


def cosine_similarity(a: VectorLike, b: VectorLike, field: str = "vector") -> float:
    """
    Cosine of the angle between two vectors.

    A zero-magnitude vector carries no signal and scores 0.0. The result is not
    clamped to [-1, 1]; scores are only compared against each other.

    Raises:
        DimensionMismatchError: if the vectors differ in length or are not 1-D
    """
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)

    # Scalars have no length
    if a.ndim != 1 or b.ndim != 1 or a.shape != b.shape:
        raise DimensionMismatchError(field, a.size if a.ndim else 0, b.size if b.ndim else 0)

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return float(np.dot(a, b) / (norm_a * norm_b))


def weighted_similarity(query, record, weights: FieldWeights = None) -> float:
    """Weighted sum of per-field cosine similarities between a query and a record."""
    if weights is None:
        weights = FieldWeights()

    score = 0.0
    for name in FIELDS:
        score += getattr(weights, name) * cosine_similarity(
            query.vector(name), record.vector(name), field=name
        )
    return score
