"""
Structured operation logging for catalog loading and career search.
"""

import logging
from typing import Any, Dict, Optional

class StructuredLogger:
    """Structured logger for catalog, corpus and search operations."""

    def __init__(self, name: str = "career_compass"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if status == "failed":
            self.logger.error(message)
        elif status in ("rejected", "warning"):
            self.logger.warning(message)
        else:
            self.logger.info(message)

    def log_catalog_build(self, record_count: int, duplicate_count: int, dimensions: Dict[str, int]):
        """Log construction of a search catalog."""
        log_details = {
            "record_count": record_count,
            "duplicate_count": duplicate_count,
            "dimensions": dimensions
        }
        self.log_operation("catalog.build", "success", log_details)

    def log_corpus_load(self, source: str, loaded: int, rejected: int, metadata: Dict[str, Any] = None):
        """Log loading of a serialized embeddings corpus."""
        log_details = {"source": source, "loaded": loaded, "rejected": rejected}
        if metadata:
            # Only identifying metadata, the description can be long
            for k in ("model", "dimensions", "generated_at", "total_careers"):
                if metadata.get(k) is not None:
                    log_details[k] = metadata[k]

        status = "success" if rejected == 0 else "warning"
        self.log_operation("corpus.load", status, log_details)

    def log_corpus_rejection(self, entry_id: Optional[str], reason: str):
        """Log a corpus entry that was rejected during ingestion."""
        log_details = {
            "entry_id": entry_id or "<unknown>",
            "reason": reason[:200] if reason else ""  # Limit reason length
        }
        self.log_operation("corpus.entry", "rejected", log_details)

    def log_search(self, start_time: float, end_time: float, top_k: int, result_count: int,
                   status: str = "success", details: Dict[str, Any] = None):
        """Log a search call with its duration."""
        duration_ms = round((end_time - start_time) * 1000, 2)
        log_details = {
            "duration_ms": duration_ms,
            "top_k": top_k,
            "result_count": result_count
        }
        if details:
            log_details.update(details)

        self.log_operation("search.careers", status, log_details)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)

# Global logger instance
logger = StructuredLogger()
