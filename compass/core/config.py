"""
Career Compass configuration.
All settings come from environment variables; accessors re-read them on each call.
"""

import os

from ..vector.errors import InvalidOptionsError
from ..vector.types import DEFAULT_TOP_K, FieldWeights, SearchOptions

# Serialized corpus written by the offline embedding generator
DEFAULT_EMBEDDINGS_PATH = "./data/compass/career-embeddings.json"


def get_embeddings_path() -> str:
    """Get the path of the serialized embeddings corpus."""
    return os.getenv("COMPASS_EMBEDDINGS_PATH", DEFAULT_EMBEDDINGS_PATH)


def get_default_top_k() -> int:
    """Get the default number of results per search."""
    return int(os.getenv("COMPASS_TOP_K", str(DEFAULT_TOP_K)))


def get_default_weights() -> FieldWeights:
    """Get the default per-field weights."""
    return FieldWeights(
        task=float(os.getenv("COMPASS_TASK_WEIGHT", "0.5")),
        narrative=float(os.getenv("COMPASS_NARRATIVE_WEIGHT", "0.3")),
        skills=float(os.getenv("COMPASS_SKILLS_WEIGHT", "0.2")),
    )


def get_default_search_options() -> SearchOptions:
    """Build SearchOptions from the configured defaults."""
    return SearchOptions(top_k=get_default_top_k(), weights=get_default_weights())


def strict_ingest_enabled() -> bool:
    """Check if the first malformed corpus entry should fail the whole load."""
    return os.getenv("COMPASS_STRICT_INGEST", "false").lower() == "true"


def validate_search_config():
    """Validate search configuration and return any issues."""
    issues = []

    try:
        top_k = get_default_top_k()
        if top_k < 1:
            issues.append("COMPASS_TOP_K must be >= 1")
    except ValueError:
        issues.append(f"Invalid COMPASS_TOP_K: {os.getenv('COMPASS_TOP_K')}")

    try:
        weights = get_default_weights()
    except ValueError as e:
        issues.append(f"Search weights must be numbers: {e}")
    else:
        try:
            weights.validate()
        except InvalidOptionsError as e:
            issues.append(f"Invalid search weights: {e}")

    if not os.path.exists(get_embeddings_path()):
        issues.append(f"Embeddings corpus not found: {get_embeddings_path()}")

    return issues
