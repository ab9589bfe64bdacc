"""Logging configuration for PharmaGen narrative generation.

Provides structured logging for LLM narrative requests, responses and
failures. Console output is human-readable; an optional JSONL file keeps the
full event stream for auditing.
"""

import json
import logging
from datetime import datetime
from pathlib import Path


class NarrativeLogger:
    """Logger for LLM narrative calls with structured output."""

    def __init__(self, log_dir: Path | None = None, enable_file_logging: bool = True):
        """Initialize the narrative logger.

        Args:
            log_dir: Directory for log files. Defaults to ./logs
            enable_file_logging: Whether to write logs to files
        """
        self.logger = logging.getLogger("pharmagen.llm")
        self.logger.setLevel(logging.INFO)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        self.logger.addHandler(console_handler)

        self.file_handler = None
        self.log_file = None
        if enable_file_logging:
            if log_dir is None:
                log_dir = Path("./logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            timestamp = datetime.now().strftime("%Y%m%d")
            self.log_file = log_dir / f"narrative_requests_{timestamp}.jsonl"

            # File handler only receives the JSON event lines written below
            self.file_handler = logging.FileHandler(self.log_file)
            self.file_handler.setLevel(logging.DEBUG)
            self.file_handler.setFormatter(logging.Formatter('%(message)s'))
            self.file_handler.addFilter(lambda record: record.levelno == logging.DEBUG)
            self.logger.addHandler(self.file_handler)

            self.logger.info(f"Narrative logging enabled: {self.log_file}")

    def _write_event(self, log_entry: dict) -> None:
        if self.file_handler:
            self.file_handler.stream.write(json.dumps(log_entry) + '\n')
            self.file_handler.flush()

    def log_llm_request(
        self,
        patient_id: str,
        drugs: list[str],
        prompt_length: int,
        model: str,
        temperature: float,
    ) -> str:
        """Log a batch narrative request.

        Returns:
            Request ID for tracking
        """
        request_id = f"{patient_id}_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}"

        self.logger.info(f"LLM Request: {patient_id} [{', '.join(drugs)}] using {model}")
        self._write_event({
            "timestamp": datetime.now().isoformat(),
            "event_type": "llm_request",
            "request_id": request_id,
            "input": {
                "patient_id": patient_id,
                "drugs": drugs,
                "prompt_length": prompt_length,
                "model": model,
                "temperature": temperature,
            },
        })
        return request_id

    def log_llm_response(
        self,
        request_id: str,
        patient_id: str,
        drugs_returned: list[str],
        raw_response: str | None = None,
    ) -> None:
        """Log a parsed batch narrative response."""
        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "event_type": "llm_response",
            "request_id": request_id,
            "output": {
                "patient_id": patient_id,
                "drugs_returned": drugs_returned,
            },
        }
        if raw_response:
            log_entry["raw_response"] = raw_response

        self.logger.info(f"LLM Narrative: {patient_id} → {len(drugs_returned)} drugs")
        self._write_event(log_entry)

    def log_llm_error(self, request_id: str, patient_id: str, error: Exception) -> None:
        """Log a failed narrative request; callers fall back to rule-based text."""
        self.logger.error(f"LLM Error: {patient_id} - {error} (using rule-based fallback)")
        self._write_event({
            "timestamp": datetime.now().isoformat(),
            "event_type": "llm_error",
            "request_id": request_id,
            "input": {"patient_id": patient_id},
            "error": {
                "type": type(error).__name__,
                "message": str(error),
            },
        })


# Global logger instance
_global_logger: NarrativeLogger | None = None


def get_logger(log_dir: Path | None = None, enable_file_logging: bool = True) -> NarrativeLogger:
    """Get or create the global narrative logger."""
    global _global_logger

    if _global_logger is None:
        _global_logger = NarrativeLogger(log_dir=log_dir, enable_file_logging=enable_file_logging)

    return _global_logger


def reset_logger() -> None:
    """Reset the global logger (mainly for testing)."""
    global _global_logger
    _global_logger = None
