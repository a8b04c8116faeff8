"""Tests for structured logging configuration."""

import json
import logging

import pytest
import structlog

from moodlog.core.logging_config import setup_logging


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()
    setup_logging()


class TestLoggingConfig:
    """structlog setup modes."""

    def test_json_mode_emits_one_object_per_line(self, capsys):
        setup_logging(json_mode=True, level="DEBUG")
        structlog.get_logger("moodlog.test").info("mood_created", id=7)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "mood_created"
        assert record["id"] == 7
        assert record["level"] == "info"
        assert "timestamp" in record

    def test_stdlib_records_share_the_pipeline(self, capsys):
        setup_logging(json_mode=True, level="DEBUG")
        logging.getLogger("sqlalchemy.engine").warning("slow query")

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "slow query"
        assert record["logger"] == "sqlalchemy.engine"

    def test_nothing_on_stdout(self, capsys):
        setup_logging(json_mode=False, level="INFO")
        structlog.get_logger("moodlog.test").info("tool_failed", tool="log_mood")
        out = capsys.readouterr()
        assert out.out == ""
        assert "tool_failed" in out.err

    def test_level_filtering(self):
        setup_logging(json_mode=False, level="WARNING")
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(level="chatty")
        assert logging.getLogger().level == logging.INFO

    def test_single_root_handler(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger().handlers) == 1
