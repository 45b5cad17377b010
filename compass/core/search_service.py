"""
Career search service.
Holds the process-wide search engine and exposes career_search() to request handlers.
"""

import threading
import time
from typing import Any, Collection, Dict, List, Mapping, Optional, Union

from .config import get_default_search_options, get_embeddings_path
from .loader import load_corpus
from ..vector.index import MultiFieldSearchEngine
from ..vector.types import FieldWeights, MultiFieldQuery, SearchOptions, VectorLike
from ..util.logging import logger

_engine: Optional[MultiFieldSearchEngine] = None
_engine_lock = threading.Lock()


def swap_engine(engine: Optional[MultiFieldSearchEngine]) -> Optional[MultiFieldSearchEngine]:
    """
    Replace the shared engine and return the previous one.

    Searches already holding the old instance finish against it undisturbed.
    """
    global _engine
    with _engine_lock:
        previous = _engine
        _engine = engine
    return previous


def load_engine(path: Optional[str] = None, strict: Optional[bool] = None) -> MultiFieldSearchEngine:
    """Build a fresh engine from the corpus file and make it the shared engine."""
    corpus = load_corpus(path or get_embeddings_path(), strict=strict)
    engine = MultiFieldSearchEngine.build(corpus.records)
    swap_engine(engine)
    return engine


def get_engine() -> MultiFieldSearchEngine:
    """Get the shared engine, loading the configured corpus on first use."""
    global _engine
    engine = _engine
    if engine is not None:
        return engine

    with _engine_lock:
        if _engine is None:
            corpus = load_corpus(get_embeddings_path())
            _engine = MultiFieldSearchEngine.build(corpus.records)
        return _engine


def _resolve_options(top_k: Optional[int],
                     weights: Union[FieldWeights, Mapping[str, float], None],
                     candidate_ids: Optional[Collection[str]]) -> SearchOptions:
    defaults = get_default_search_options()

    if weights is None:
        weights = defaults.weights
    elif not isinstance(weights, FieldWeights):
        weights = FieldWeights.from_mapping(weights)

    return SearchOptions(
        top_k=defaults.top_k if top_k is None else top_k,
        weights=weights,
        candidate_ids=candidate_ids
    )


def career_search(task_vector: VectorLike,
                  narrative_vector: VectorLike,
                  skills_vector: VectorLike,
                  top_k: Optional[int] = None,
                  weights: Union[FieldWeights, Mapping[str, float], None] = None,
                  candidate_ids: Optional[Collection[str]] = None,
                  _search_engine: Optional[MultiFieldSearchEngine] = None) -> List[Dict[str, Any]]:
    """
    Rank careers against a user's query embeddings.

    Args:
        task_vector: Embedding of what the user wants to do
        narrative_vector: Embedding of preferred work environment
        skills_vector: Embedding of the user's skills
        top_k: Maximum results, defaults to COMPASS_TOP_K
        weights: FieldWeights or a {task, narrative, skills} mapping; missing
            axes take their built-in defaults, None uses the configured weights
        candidate_ids: Restrict ranking to these career ids
        _search_engine: Optional engine for testing

    Returns:
        List of dicts with 'id', 'label', 'category', 'similarity', best first
    """
    engine = _search_engine if _search_engine is not None else get_engine()
    start_time = time.time()

    try:
        options = _resolve_options(top_k, weights, candidate_ids)
        query = MultiFieldQuery(
            task_vector=task_vector,
            narrative_vector=narrative_vector,
            skills_vector=skills_vector
        )
        results = engine.search(query, options)
    except ValueError as e:
        logger.log_search(start_time, time.time(), top_k or 0, 0, status="failed",
                          details={"error": str(e), "error_type": type(e).__name__})
        raise

    logger.log_search(start_time, time.time(), options.top_k, len(results),
                      details={"catalog_size": len(engine)})
    return [result.to_dict() for result in results]
