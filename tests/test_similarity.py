"""
Cosine and weighted similarity metrics.
"""

import math

import numpy as np
import pytest

from compass.vector.errors import DimensionMismatchError, SearchError
from compass.vector.similarity import cosine_similarity, weighted_similarity
from compass.vector.types import EmbeddingRecord, FieldWeights, MultiFieldQuery


def test_identical_vectors_score_one():
    """A vector is perfectly similar to itself."""
    assert cosine_similarity([0.3, -1.2, 4.0], [0.3, -1.2, 4.0]) == pytest.approx(1.0)


def test_orthogonal_vectors_score_zero():
    assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == 0.0


def test_opposite_vectors_score_minus_one():
    assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0)


def test_similarity_ignores_magnitude():
    """Scaling a vector does not change its cosine similarity."""
    a = [1.0, 2.0, 3.0]
    b = [2.0, 0.5, -1.0]
    scaled = [10 * x for x in a]

    assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(scaled, b))


def test_matches_dot_over_norms():
    a = np.array([0.2, 0.4, -0.1, 0.9])
    b = np.array([0.5, -0.3, 0.8, 0.1])
    expected = np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b))

    assert cosine_similarity(a, b) == pytest.approx(expected)


def test_zero_vector_scores_zero_not_nan():
    """A zero-magnitude embedding contributes no signal."""
    score = cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0])

    assert score == 0.0
    assert not math.isnan(score)
    assert cosine_similarity([1.0, 2.0], [0.0, 0.0]) == 0.0
    assert cosine_similarity([0.0, 0.0], [0.0, 0.0]) == 0.0


def test_length_mismatch_raises():
    """Vectors of unequal length are never truncated or padded."""
    with pytest.raises(DimensionMismatchError) as exc_info:
        cosine_similarity([1.0, 0.0, 0.0], [1.0, 0.0], field="skills")

    assert exc_info.value.field == "skills"
    assert exc_info.value.expected == 3
    assert exc_info.value.actual == 2
    assert isinstance(exc_info.value, SearchError)
    assert isinstance(exc_info.value, ValueError)


def test_scalar_input_is_a_dimension_mismatch():
    with pytest.raises(DimensionMismatchError) as exc_info:
        cosine_similarity(1.0, [1.0], field="task")

    assert exc_info.value.expected == 0
    assert exc_info.value.actual == 1


def test_matrix_input_is_a_dimension_mismatch():
    with pytest.raises(DimensionMismatchError):
        cosine_similarity([[1.0, 0.0], [0.0, 1.0]], [[1.0, 0.0], [0.0, 1.0]])


def test_returns_python_float():
    assert type(cosine_similarity([1, 2], [3, 4])) is float


def _record(task, narrative, skills):
    return EmbeddingRecord(
        id="r", label="R", category="c",
        task_vector=task, narrative_vector=narrative, skills_vector=skills
    )


def test_weighted_similarity_combines_fields():
    """Per-field similarities are combined linearly with the given weights."""
    record = _record([1.0, 0.0], [0.0, 1.0], [1.0, 1.0])
    query = MultiFieldQuery(task_vector=[1.0, 0.0], narrative_vector=[1.0, 0.0], skills_vector=[1.0, 0.0])

    score = weighted_similarity(query, record, FieldWeights(task=0.5, narrative=0.3, skills=0.2))

    # task 1.0, narrative 0.0, skills 1/sqrt(2)
    assert score == pytest.approx(0.5 + 0.2 / math.sqrt(2))


def test_weighted_similarity_defaults():
    record = _record([1.0], [1.0], [1.0])
    query = MultiFieldQuery(task_vector=[1.0], narrative_vector=[1.0], skills_vector=[1.0])

    assert weighted_similarity(query, record) == pytest.approx(1.0)


def test_weights_are_not_renormalized():
    """Weights summing to more than one scale the score as given."""
    record = _record([1.0], [1.0], [1.0])
    query = MultiFieldQuery(task_vector=[1.0], narrative_vector=[1.0], skills_vector=[1.0])

    score = weighted_similarity(query, record, FieldWeights(task=2.0, narrative=1.0, skills=1.0))

    assert score == pytest.approx(4.0)


def test_weighted_similarity_reports_failing_field():
    record = _record([1.0, 0.0], [1.0, 0.0, 0.0], [1.0])
    query = MultiFieldQuery(task_vector=[1.0, 0.0], narrative_vector=[1.0, 0.0], skills_vector=[1.0])

    with pytest.raises(DimensionMismatchError) as exc_info:
        weighted_similarity(query, record)

    assert exc_info.value.field == "narrative"
