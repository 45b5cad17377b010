"""
Career Compass vector layer.
Errors raised by the similarity engine.
"""


class SearchError(Exception):
    """Base exception for similarity search failures."""
    pass


class DimensionMismatchError(SearchError, ValueError):
    """A vector's length does not match the dimensionality established for its field."""

    def __init__(self, field: str, expected: int, actual: int):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Dimension mismatch for '{field}' vector: expected {expected}, got {actual}"
        )


class InvalidOptionsError(SearchError, ValueError):
    """Search options are unusable (non-positive top_k, negative weight)."""
    pass
