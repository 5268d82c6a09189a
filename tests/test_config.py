"""Tests for configuration and logging setup."""

import json
import logging
from pathlib import Path

import pytest

from lift_match.config import DEFAULT_FUZZY_THRESHOLD, Config
from lift_match.logging import JSONFormatter


class TestConfig:
    """Tests for Config.from_env."""

    def test_defaults(self, monkeypatch):
        for name in (
            "LIFT_MATCH_DATA_DIR",
            "LIFT_MATCH_FUZZY_THRESHOLD",
            "LIFT_MATCH_AUTO_EXPAND",
            "LIFT_MATCH_LOG_FORMAT",
            "LIFT_MATCH_LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)

        config = Config.from_env()

        assert config.fuzzy_threshold == DEFAULT_FUZZY_THRESHOLD == 5
        assert config.auto_expand is True
        assert config.log_format == "text"
        assert config.log_level == "INFO"

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LIFT_MATCH_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("LIFT_MATCH_FUZZY_THRESHOLD", "3")
        monkeypatch.setenv("LIFT_MATCH_AUTO_EXPAND", "false")
        monkeypatch.setenv("LIFT_MATCH_LOG_FORMAT", "json")
        monkeypatch.setenv("LIFT_MATCH_LOG_LEVEL", "debug")

        config = Config.from_env()

        assert config.data_dir == Path(tmp_path)
        assert config.db_path == Path(tmp_path) / "lift_match.db"
        assert config.fuzzy_threshold == 3
        assert config.auto_expand is False
        assert config.log_format == "json"
        assert config.log_level == "DEBUG"

    def test_rejects_negative_threshold(self, monkeypatch):
        monkeypatch.setenv("LIFT_MATCH_FUZZY_THRESHOLD", "-1")
        with pytest.raises(ValueError):
            Config.from_env()

    def test_rejects_unknown_log_format(self, monkeypatch):
        monkeypatch.setenv("LIFT_MATCH_LOG_FORMAT", "xml")
        with pytest.raises(ValueError):
            Config.from_env()


class TestJSONFormatter:
    """Tests for the JSON log formatter."""

    def test_includes_match_extras(self):
        record = logging.LogRecord(
            name="lift_match.matching.matcher",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="No match for exercise %r",
            args=("Knäböj",),
            exc_info=None,
        )
        record.match_raw_name = "Knäböj"
        record.unrelated = "skip me"

        data = json.loads(JSONFormatter().format(record))

        assert data["level"] == "WARNING"
        assert data["message"] == "No match for exercise 'Knäböj'"
        assert data["match_raw_name"] == "Knäböj"
        assert "unrelated" not in data
