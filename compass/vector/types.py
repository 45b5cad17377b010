"""
Career Compass vector layer.
Typed records for the multi-field career catalog, queries and results.
"""

import math
import numbers
from dataclasses import dataclass, field
from typing import Any, Collection, Dict, Mapping, Optional, Sequence, Union

import numpy as np

from .errors import InvalidOptionsError

# Embedding axes, in scoring order
FIELDS = ("task", "narrative", "skills")

DEFAULT_TOP_K = 50

VectorLike = Union[Sequence[float], np.ndarray]


def as_vector(values: VectorLike, name: str = "vector") -> np.ndarray:
    """Coerce a sequence of reals into a read-only 1-D float64 array."""
    vector = np.array(values, dtype=np.float64)
    if vector.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {vector.shape}")
    vector.flags.writeable = False
    return vector


@dataclass(frozen=True, eq=False)
class EmbeddingRecord:
    """One career in the catalog, embedded along three semantic axes."""

    id: str
    """Stable identifier (career slug), used as the catalog key"""

    label: str
    """Display name, opaque to ranking"""

    category: str
    """Classification tag, passed through into results"""

    task_vector: np.ndarray
    """Embedding of what the job does day-to-day"""

    narrative_vector: np.ndarray
    """Embedding of work culture and environment"""

    skills_vector: np.ndarray
    """Embedding of technical skills and abilities"""

    def __post_init__(self):
        for name in FIELDS:
            attr = f"{name}_vector"
            object.__setattr__(self, attr, as_vector(getattr(self, attr), attr))

    def vector(self, name: str) -> np.ndarray:
        return getattr(self, f"{name}_vector")


@dataclass(frozen=True, eq=False)
class MultiFieldQuery:
    """Query vectors, produced by the same embedding process as the catalog."""

    task_vector: np.ndarray
    narrative_vector: np.ndarray
    skills_vector: np.ndarray

    def __post_init__(self):
        for name in FIELDS:
            attr = f"{name}_vector"
            object.__setattr__(self, attr, as_vector(getattr(self, attr), attr))

    def vector(self, name: str) -> np.ndarray:
        return getattr(self, f"{name}_vector")


@dataclass(frozen=True)
class FieldWeights:
    """Linear combination coefficients, applied as given (no renormalization)."""

    task: float = 0.5
    narrative: float = 0.3
    skills: float = 0.2

    @classmethod
    def from_mapping(cls, weights: Mapping[str, float]) -> "FieldWeights":
        """Build weights from a mapping, defaulting any missing axis."""
        unknown = set(weights) - set(FIELDS)
        if unknown:
            raise InvalidOptionsError(f"Unknown weight fields: {sorted(unknown)}")
        return cls(**dict(weights))

    def validate(self) -> None:
        for name in FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidOptionsError(f"Weight '{name}' must be a real number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidOptionsError(f"Weight '{name}' must be finite, got {value!r}")
            if value < 0:
                raise InvalidOptionsError(f"Weight '{name}' must be non-negative, got {value!r}")

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in FIELDS}


@dataclass(frozen=True)
class SearchOptions:
    """Per-call search configuration."""

    top_k: int = DEFAULT_TOP_K
    """Maximum number of results returned"""

    weights: FieldWeights = field(default_factory=FieldWeights)
    """Per-field weights for the combined score"""

    candidate_ids: Optional[Collection[str]] = None
    """When set, only records with these ids are scored"""

    def validate(self) -> None:
        """Raise InvalidOptionsError for options that indicate a configuration mistake."""
        if isinstance(self.top_k, bool) or not isinstance(self.top_k, numbers.Integral):
            raise InvalidOptionsError(f"top_k must be an integer, got {self.top_k!r}")
        if self.top_k <= 0:
            raise InvalidOptionsError(f"top_k must be positive, got {self.top_k}")
        if not isinstance(self.weights, FieldWeights):
            raise InvalidOptionsError(f"weights must be FieldWeights, got {type(self.weights).__name__}")
        self.weights.validate()
        if isinstance(self.candidate_ids, str):
            raise InvalidOptionsError("candidate_ids must be a collection of ids, not a string")


@dataclass(frozen=True)
class SearchResult:
    """One ranked catalog entry."""

    id: str
    label: str
    category: str
    similarity: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "category": self.category,
            "similarity": self.similarity,
        }
