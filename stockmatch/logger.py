"""
Structured logging system for StockMatch.

Provides centralized logging with console and file outputs,
log levels, and metrics tracking for monitoring match requests.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional
from datetime import datetime
import json

# Upper bounds of the score buckets reported in the metrics summary
SCORE_BUCKETS = (25, 50, 75, 100)


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off", "")


class StructuredLogger:
    """
    Centralized logger with support for console and file outputs.
    Tracks metrics for monitoring match requests.
    """

    def __init__(
        self,
        name: str = "stockmatch",
        level: str = "INFO",
        log_dir: Optional[Path] = None,
        enable_file: bool = True,
        enable_console: bool = True,
    ):
        """
        Initialize the structured logger.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            log_dir: Directory for log files (default: logs/)
            enable_file: Write logs to file
            enable_console: Output logs to console
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        self.logger.handlers.clear()  # Remove existing handlers

        self.metrics = {
            "match_requests": 0,
            "requests_rejected": 0,
            "candidates_scored": 0,
            "matches_returned": 0,
            "errors_by_type": {},
            "score_distribution": {str(b): 0 for b in SCORE_BUCKETS},
        }

        if enable_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(getattr(logging, level.upper()))
            console_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            console_handler.setFormatter(console_formatter)
            self.logger.addHandler(console_handler)

        if enable_file:
            if log_dir is None:
                log_dir = Path("logs")
            log_dir.mkdir(parents=True, exist_ok=True)

            log_file = log_dir / f"stockmatch_{datetime.now().strftime('%Y%m%d')}.log"
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(logging.DEBUG)  # Always log everything to file
            file_formatter = logging.Formatter(
                fmt='%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S'
            )
            file_handler.setFormatter(file_formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str, **kwargs):
        """Log debug message with optional context."""
        self._log(logging.DEBUG, message, kwargs)

    def info(self, message: str, **kwargs):
        """Log info message with optional context."""
        self._log(logging.INFO, message, kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message with optional context."""
        self._log(logging.WARNING, message, kwargs)

    def error(self, message: str, **kwargs):
        """Log error message with optional context."""
        self._log(logging.ERROR, message, kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message with optional context."""
        self._log(logging.CRITICAL, message, kwargs)

    def _log(self, level: int, message: str, context: dict):
        """Internal logging method with context."""
        if context:
            message = f"{message} | Context: {json.dumps(context, default=str)}"
        self.logger.log(level, message)

    # Metric tracking methods

    def record_match_request(self):
        """Increment match request counter."""
        self.metrics["match_requests"] += 1

    def record_rejected_request(self, reason: str):
        """Record a request rejected at the boundary."""
        self.metrics["requests_rejected"] += 1
        self.record_error(reason)

    def record_scores(self, scores):
        """Record the scores computed for one request."""
        for score in scores:
            self.metrics["candidates_scored"] += 1
            for bucket in SCORE_BUCKETS:
                if score <= bucket:
                    self.metrics["score_distribution"][str(bucket)] += 1
                    break

    def record_matches_returned(self, count: int):
        """Record how many results were handed back to the caller."""
        self.metrics["matches_returned"] += count

    def record_error(self, error_type: str):
        """Count an error by type."""
        if error_type not in self.metrics["errors_by_type"]:
            self.metrics["errors_by_type"][error_type] = 0
        self.metrics["errors_by_type"][error_type] += 1

    def get_metrics(self) -> dict:
        """Return current metrics."""
        metrics_copy = self.metrics.copy()
        if metrics_copy["match_requests"] > 0:
            metrics_copy["avg_matches_per_request"] = round(
                metrics_copy["matches_returned"] / metrics_copy["match_requests"], 2
            )
        return metrics_copy

    def log_metrics_summary(self):
        """Log a summary of current metrics."""
        metrics = self.get_metrics()

        self.info("=== Match Session Metrics ===")
        self.info(f"Match requests: {metrics['match_requests']} ({metrics['requests_rejected']} rejected)")
        self.info(f"Candidates scored: {metrics['candidates_scored']}")
        self.info(f"Matches returned: {metrics['matches_returned']}")

        if metrics["candidates_scored"]:
            self.info("Score distribution:")
            lower = 0
            for bucket in SCORE_BUCKETS:
                self.info(f"  {lower}-{bucket}: {metrics['score_distribution'][str(bucket)]}")
                lower = bucket + 1

        if metrics["errors_by_type"]:
            self.info("Error Types:")
            for error_type, count in metrics["errors_by_type"].items():
                self.info(f"  {error_type}: {count}")


# Global logger instance
_global_logger: Optional[StructuredLogger] = None


def get_logger(
    name: str = "stockmatch",
    level: Optional[str] = None,
    **kwargs
) -> StructuredLogger:
    """
    Get or create the global logger instance.

    Level, log directory and file output default to the STOCKMATCH_LOG_LEVEL,
    STOCKMATCH_LOG_DIR and STOCKMATCH_LOG_TO_FILE environment variables.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        **kwargs: Additional arguments passed to StructuredLogger

    Returns:
        StructuredLogger instance
    """
    global _global_logger

    if _global_logger is None:
        if level is None:
            level = os.getenv("STOCKMATCH_LOG_LEVEL", "INFO")
        if "log_dir" not in kwargs and os.getenv("STOCKMATCH_LOG_DIR"):
            kwargs["log_dir"] = Path(os.environ["STOCKMATCH_LOG_DIR"])
        kwargs.setdefault("enable_file", _env_flag("STOCKMATCH_LOG_TO_FILE", True))
        _global_logger = StructuredLogger(name=name, level=level, **kwargs)

    return _global_logger


def reset_logger():
    """Reset the global logger (useful for testing)."""
    global _global_logger
    _global_logger = None
