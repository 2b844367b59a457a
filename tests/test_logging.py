"""Tests for logging setup."""

import logging

from pygnss_obs.core.config import LoggingConfig
from pygnss_obs.utils.logging import get_logger, setup_logging, setup_logging_from_config


class TestSetupLogging:
    """Test handler configuration."""

    def teardown_method(self):
        setup_logging("WARNING")

    def test_log_file_written(self, tmp_path):
        """Test events reach the log file."""
        setup_logging("INFO", log_dir=tmp_path, log_to_file=True, log_to_console=False)
        get_logger("pygnss_obs.tests").info("Parsed RINEX header", version="3.04")
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = (tmp_path / "pygnss_obs.log").read_text()
        assert "Parsed RINEX header" in text
        assert "version=3.04" in text

    def test_json_format(self, tmp_path):
        setup_logging(
            "INFO", log_dir=tmp_path, log_to_file=True, log_to_console=False, json_format=True
        )
        get_logger("pygnss_obs.tests").info("Discarding incomplete epoch", missing=2)
        for handler in logging.getLogger().handlers:
            handler.flush()

        text = (tmp_path / "pygnss_obs.log").read_text()
        assert '"missing": 2' in text

    def test_no_handlers(self):
        setup_logging("INFO", log_to_console=False)
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)

    def test_level_override(self):
        setup_logging_from_config(LoggingConfig(level="ERROR"), level="DEBUG")
        assert logging.getLogger().level == logging.DEBUG

    def test_config_level(self):
        setup_logging_from_config(LoggingConfig(level="error"))
        assert logging.getLogger().level == logging.ERROR
