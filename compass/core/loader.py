"""
Corpus loading.
Reads the career embeddings file produced by the offline generator and turns it
into typed EmbeddingRecords for MultiFieldSearchEngine.build().
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, List, Optional, Tuple, Union

from pydantic import ValidationError

from .config import strict_ingest_enabled
from .schema import CareerEmbeddingEntry, CorpusMetadata, entry_identifier
from ..vector.types import FIELDS, EmbeddingRecord
from ..util.logging import logger


class CorpusValidationError(Exception):
    """Raised when a corpus file cannot be used."""
    pass


@dataclass
class LoadedCorpus:
    """Records and bookkeeping from one corpus load."""

    records: List[EmbeddingRecord]
    metadata: CorpusMetadata
    rejected: List[Tuple[Optional[str], str]] = field(default_factory=list)
    """(entry id, reason) for every skipped entry"""

    source: str = "<memory>"


def _iter_raw_entries(data: Any) -> Iterator[Any]:
    """Yield raw entries from any of the supported corpus shapes."""
    if isinstance(data, list):
        yield from data
        return

    if not isinstance(data, dict) or "embeddings" not in data:
        raise CorpusValidationError("Corpus must be a list of entries or an object with an 'embeddings' key")

    embeddings = data["embeddings"]
    if isinstance(embeddings, list):
        yield from embeddings
    elif isinstance(embeddings, dict):
        # Generator output keyed by slug; the mapping key is authoritative
        for slug, entry in embeddings.items():
            if isinstance(entry, dict):
                entry = dict(entry, slug=slug)
            yield entry
    else:
        raise CorpusValidationError("'embeddings' must be a list or an object keyed by career slug")


def _to_record(entry: CareerEmbeddingEntry) -> EmbeddingRecord:
    return EmbeddingRecord(
        id=entry.slug,
        label=entry.title,
        category=entry.category,
        task_vector=entry.task_embedding,
        narrative_vector=entry.narrative_embedding,
        skills_vector=entry.skills_embedding
    )


def parse_corpus(data: Any, strict: Optional[bool] = None, source: str = "<memory>") -> LoadedCorpus:
    """
    Validate a deserialized corpus and convert it to EmbeddingRecords.

    Args:
        data: Parsed JSON (list of entries, or object with 'embeddings' and optional 'metadata')
        strict: Raise on the first malformed entry; defaults to COMPASS_STRICT_INGEST
        source: Label used in logs

    Returns:
        LoadedCorpus with the valid records in file order

    Raises:
        CorpusValidationError: on a wrong top-level shape, or a malformed entry in strict mode
    """
    if strict is None:
        strict = strict_ingest_enabled()

    raw_metadata = data.get("metadata") if isinstance(data, dict) else None
    try:
        metadata = CorpusMetadata.model_validate(raw_metadata or {})
    except ValidationError as e:
        raise CorpusValidationError(f"Invalid corpus metadata in {source}: {e}") from e

    records = []
    rejected = []
    for raw in _iter_raw_entries(data):
        try:
            entry = CareerEmbeddingEntry.model_validate(raw)
        except ValidationError as e:
            entry_id = entry_identifier(raw)
            reason = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'entry'}: {err['msg']}" for err in e.errors()
            )
            if strict:
                raise CorpusValidationError(f"Invalid corpus entry {entry_id or '<unknown>'}: {reason}") from e
            logger.log_corpus_rejection(entry_id, reason)
            rejected.append((entry_id, reason))
            continue

        # Mismatches are only reported; the engine enforces dimensions at query time
        if metadata.dimensions is not None:
            for name in FIELDS:
                size = len(getattr(entry, f"{name}_embedding"))
                if size != metadata.dimensions:
                    logger.warning(
                        f"Entry {entry.slug} has {size}-dim {name} embedding, "
                        f"corpus declares {metadata.dimensions}"
                    )
        records.append(_to_record(entry))

    logger.log_corpus_load(source, len(records), len(rejected), metadata.model_dump())
    return LoadedCorpus(records=records, metadata=metadata, rejected=rejected, source=source)


def load_corpus(path: Union[str, Path], strict: Optional[bool] = None) -> LoadedCorpus:
    """Load and validate a corpus JSON file."""
    path = Path(path)
    if not path.exists():
        raise CorpusValidationError(
            f"Career embeddings not found at {path}. Generate the embeddings corpus first."
        )

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CorpusValidationError(f"Could not read corpus {path}: {e}") from e

    return parse_corpus(data, strict=strict, source=str(path))
