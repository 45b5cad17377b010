#!/usr/bin/env python3
"""
Corpus Smoke Check
Loads the career embeddings corpus, builds the search engine and verifies that a
career searched with its own embeddings ranks first.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from compass.core.config import get_embeddings_path, validate_search_config
from compass.core.loader import CorpusValidationError, load_corpus
from compass.vector.index import MultiFieldSearchEngine
from compass.vector.types import MultiFieldQuery, SearchOptions


def main():
    """Load the configured corpus and run a self-similarity search."""
    path = sys.argv[1] if len(sys.argv) > 1 else get_embeddings_path()

    issues = [i for i in validate_search_config() if "not found" not in i]
    for issue in issues:
        print(f"WARNING: {issue}")

    try:
        corpus = load_corpus(path)
    except CorpusValidationError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print(f"✓ Loaded {len(corpus.records)} careers from {path}")
    if corpus.rejected:
        print(f"  {len(corpus.rejected)} entries rejected")

    engine = MultiFieldSearchEngine.build(corpus.records)
    print(f"✓ Built engine with {len(engine)} careers, dimensions {dict(engine.dimensions)}")

    if not corpus.records:
        print("No careers to verify. Exiting.")
        return

    probe = corpus.records[0]
    query = MultiFieldQuery(
        task_vector=probe.task_vector,
        narrative_vector=probe.narrative_vector,
        skills_vector=probe.skills_vector
    )
    results = engine.search(query, SearchOptions(top_k=5))

    for rank, result in enumerate(results, 1):
        print(f"  {rank}. {result.label} ({result.category}) {result.similarity:.4f}")

    best = results[0].similarity
    leaders = [r.id for r in results if r.similarity >= best - 1e-9]
    if probe.id not in leaders:
        print(f"ERROR: {probe.id} did not rank first against its own embeddings")
        sys.exit(1)

    print("✓ Self-similarity check passed")


if __name__ == "__main__":
    main()
