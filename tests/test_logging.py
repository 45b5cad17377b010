"""
Structured operation logging.
"""

import logging

import pytest

from compass.util.logging import StructuredLogger, logger
from compass.core.loader import parse_corpus
from compass.vector.index import MultiFieldSearchEngine
from compass.vector.types import EmbeddingRecord


@pytest.fixture
def structured_logger():
    return StructuredLogger("career_compass.test")


def test_log_operation_format(structured_logger, caplog):
    with caplog.at_level(logging.INFO, logger="career_compass.test"):
        structured_logger.log_operation("catalog.build", "success", {"record_count": 3})

    assert "Operation: catalog.build, Status: success, Details: {'record_count': 3}" in caplog.text


def test_failed_status_logs_error(structured_logger, caplog):
    with caplog.at_level(logging.INFO, logger="career_compass.test"):
        structured_logger.log_search(1.0, 1.25, 50, 0, status="failed", details={"error": "boom"})

    record = caplog.records[-1]
    assert record.levelno == logging.ERROR
    assert "'duration_ms': 250.0" in record.getMessage()
    assert "'error': 'boom'" in record.getMessage()


def test_corpus_rejection_truncates_reason(structured_logger, caplog):
    with caplog.at_level(logging.INFO, logger="career_compass.test"):
        structured_logger.log_corpus_rejection(None, "x" * 500)

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert "<unknown>" in record.getMessage()
    assert "x" * 201 not in record.getMessage()


def test_corpus_load_keeps_identifying_metadata_only(structured_logger, caplog):
    with caplog.at_level(logging.INFO, logger="career_compass.test"):
        structured_logger.log_corpus_load("corpus.json", 10, 0, {
            "model": "text-embedding-3-small",
            "description": "long text",
            "dimensions": None,
        })

    message = caplog.records[-1].getMessage()
    assert "text-embedding-3-small" in message
    assert "long text" not in message
    assert "dimensions" not in message


def test_handler_added_once():
    first = StructuredLogger("career_compass.handlers")
    second = StructuredLogger("career_compass.handlers")

    assert first.logger is second.logger
    assert len(second.logger.handlers) == 1


def test_catalog_build_is_logged(caplog):
    records = [
        EmbeddingRecord(id="a", label="A", category="c",
                        task_vector=[1.0], narrative_vector=[1.0, 0.0], skills_vector=[1.0]),
        EmbeddingRecord(id="a", label="A2", category="c",
                        task_vector=[1.0], narrative_vector=[1.0, 0.0], skills_vector=[1.0]),
    ]

    with caplog.at_level(logging.INFO, logger=logger.logger.name):
        MultiFieldSearchEngine.build(records)

    message = caplog.records[-1].getMessage()
    assert "catalog.build" in message
    assert "'duplicate_count': 1" in message
    assert "'narrative': 2" in message


def test_rejected_entries_are_logged(caplog):
    with caplog.at_level(logging.INFO, logger=logger.logger.name):
        parse_corpus([{"slug": "broken"}], strict=False)

    messages = [r.getMessage() for r in caplog.records]
    assert any("corpus.entry" in m and "broken" in m for m in messages)
    assert any("corpus.load" in m and "'rejected': 1" in m for m in messages)
