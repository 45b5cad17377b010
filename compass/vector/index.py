"""
Career Compass vector layer.
Exact, in-memory, multi-field similarity ranking over an immutable career catalog.
"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from .errors import DimensionMismatchError
from .similarity import weighted_similarity
from .types import FIELDS, EmbeddingRecord, MultiFieldQuery, SearchOptions, SearchResult
from ..util.logging import logger


class ISimilarityEngine(ABC):
    """Abstract interface for ranking a catalog against a multi-field query."""

    @abstractmethod
    def search(self, query: MultiFieldQuery, options: Optional[SearchOptions] = None) -> List[SearchResult]:
        """Score the catalog against the query and return the top results, best first."""
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class MultiFieldSearchEngine(ISimilarityEngine):
    """
    Brute-force weighted cosine ranking over every catalog record.

    The catalog is built once and never mutated; a refreshed corpus means a new
    engine. Any number of searches may run concurrently against one instance.
    """

    def __init__(self, catalog: Mapping[str, EmbeddingRecord], dimensions: Mapping[str, int]):
        self._catalog = MappingProxyType(dict(catalog))
        self._dimensions = MappingProxyType(dict(dimensions))

    @classmethod
    def build(cls, records: Iterable[EmbeddingRecord]) -> "MultiFieldSearchEngine":
        """
        Build an engine from a collection of embedding records.

        Duplicate ids overwrite earlier records (last write wins). Cross-record
        dimensionality is not checked here; each field's dimensionality is taken
        from the first surviving record and enforced at query time.
        """
        catalog: Dict[str, EmbeddingRecord] = {}
        dimensions: Dict[str, int] = {}
        duplicates = 0

        for record in records:
            if record.id in catalog:
                duplicates += 1
            catalog[record.id] = record

        # Established from surviving records only
        for record in catalog.values():
            for name in FIELDS:
                if name not in dimensions:
                    dimensions[name] = len(record.vector(name))

        logger.log_catalog_build(len(catalog), duplicates, dimensions)
        return cls(catalog, dimensions)

    @property
    def dimensions(self) -> Mapping[str, int]:
        """Established dimensionality per field (empty for an empty catalog)."""
        return self._dimensions

    def __len__(self) -> int:
        return len(self._catalog)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._catalog

    def _check_query_dimensions(self, query: MultiFieldQuery) -> None:
        for name, expected in self._dimensions.items():
            actual = len(query.vector(name))
            if actual != expected:
                raise DimensionMismatchError(name, expected, actual)

    def search(self, query: MultiFieldQuery, options: Optional[SearchOptions] = None) -> List[SearchResult]:
        """
        Rank catalog records by weighted per-field cosine similarity.

        Args:
            query: Task, narrative and skills query vectors
            options: top_k, weights and optional candidate_ids; defaults when None

        Returns:
            At most top_k results ordered by similarity descending. Equal scores
            keep catalog order.

        Raises:
            InvalidOptionsError: if top_k <= 0 or a weight is negative
            DimensionMismatchError: if a query or record vector has the wrong length
        """
        if options is None:
            options = SearchOptions()
        options.validate()

        if not self._catalog:
            return []

        self._check_query_dimensions(query)

        candidates = self._catalog.values()
        if options.candidate_ids is not None:
            allowed = frozenset(options.candidate_ids)
            candidates = [record for record in candidates if record.id in allowed]

        results = []
        for record in candidates:
            score = weighted_similarity(query, record, options.weights)
            results.append(SearchResult(
                id=record.id,
                label=record.label,
                category=record.category,
                similarity=score
            ))

        # sorted() is stable, so ties keep catalog order
        results = sorted(results, key=lambda r: r.similarity, reverse=True)
        return results[:options.top_k]
