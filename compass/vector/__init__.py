"""
Career Compass vector layer.
Multi-field embedding records and exact weighted cosine ranking.
"""

# Package initialization for vector module
from .errors import SearchError, DimensionMismatchError, InvalidOptionsError
from .types import EmbeddingRecord, MultiFieldQuery, FieldWeights, SearchOptions, SearchResult
from .similarity import cosine_similarity, weighted_similarity
from .index import ISimilarityEngine, MultiFieldSearchEngine

__all__ = [
    'SearchError',
    'DimensionMismatchError',
    'InvalidOptionsError',
    'EmbeddingRecord',
    'MultiFieldQuery',
    'FieldWeights',
    'SearchOptions',
    'SearchResult',
    'cosine_similarity',
    'weighted_similarity',
    'ISimilarityEngine',
    'MultiFieldSearchEngine'
]
