"""
Tests for logger functionality.
"""

import pytest
from stockmatch.logger import StructuredLogger, get_logger, reset_logger


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self, tmp_path):
        """Logger should be created with default settings."""
        logger = StructuredLogger(
            name="test",
            level="INFO",
            log_dir=tmp_path,
            enable_console=False,
        )

        assert logger.logger.name == "test"
        assert logger.metrics["match_requests"] == 0

    def test_file_output(self, tmp_path):
        """Messages and context should land in the daily log file."""
        logger = StructuredLogger(name="test_file", log_dir=tmp_path, enable_console=False)

        logger.info("Message with context", order_number="STOCK-001", score=100)

        log_files = list(tmp_path.glob("stockmatch_*.log"))
        assert len(log_files) == 1
        content = log_files[0].read_text(encoding="utf-8")
        assert "Message with context" in content
        assert '"order_number": "STOCK-001"' in content

    def test_log_methods(self, tmp_path):
        """All log level methods should work."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        logger.debug("Debug message")
        logger.info("Info message")
        logger.warning("Warning message")
        logger.error("Error message")
        logger.critical("Critical message")

    def test_metrics_tracking(self, tmp_path):
        """Metrics should be tracked correctly."""
        logger = StructuredLogger(name="test", log_dir=tmp_path, enable_console=False)

        logger.record_match_request()
        logger.record_match_request()
        logger.record_rejected_request("InvalidTargetSpec")
        logger.record_scores([0, 26, 50, 80, 100])
        logger.record_matches_returned(3)

        metrics = logger.get_metrics()

        assert metrics["match_requests"] == 2
        assert metrics["requests_rejected"] == 1
        assert metrics["candidates_scored"] == 5
        assert metrics["matches_returned"] == 3
        assert metrics["avg_matches_per_request"] == 1.5
        assert metrics["errors_by_type"]["InvalidTargetSpec"] == 1
        assert metrics["score_distribution"] == {"25": 1, "50": 2, "75": 0, "100": 2}

    def test_metrics_summary(self, tmp_path):
        logger = StructuredLogger(name="test_summary", log_dir=tmp_path, enable_console=False)
        logger.record_match_request()
        logger.record_scores([100])

        logger.log_metrics_summary()

        content = next(tmp_path.glob("stockmatch_*.log")).read_text(encoding="utf-8")
        assert "Match Session Metrics" in content
        assert "Candidates scored: 1" in content


class TestGlobalLogger:
    """Process-wide logger instance."""

    def test_get_logger_returns_same_instance(self):
        assert get_logger() is get_logger()

    def test_reset_logger(self):
        first = get_logger()
        reset_logger()
        assert get_logger() is not first

    def test_env_settings(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STOCKMATCH_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("STOCKMATCH_LOG_DIR", str(tmp_path / "logs"))
        monkeypatch.setenv("STOCKMATCH_LOG_TO_FILE", "1")
        reset_logger()

        logger = get_logger()

        assert logger.logger.level == 10
        assert (tmp_path / "logs").exists()

    def test_file_output_can_be_disabled(self, tmp_path, monkeypatch):
        monkeypatch.setenv("STOCKMATCH_LOG_DIR", str(tmp_path / "logs"))
        monkeypatch.setenv("STOCKMATCH_LOG_TO_FILE", "false")
        reset_logger()

        get_logger()

        assert not (tmp_path / "logs").exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
