"""
Unit tests for configuration defaults and structured logging.
"""

import json
import logging

import pytest

from template_qa import config, logging_config
from template_qa.errors import ConfigurationError
from template_qa.logging_config import JSONFormatter, TextFormatter, get_engine_logger


def test_defaults():
    assert config.MAX_SCAN_CHARS > 0
    assert config.VALIDATION_CACHE_TTL_SECONDS > 0
    assert config.VALIDATION_CACHE_MAX_ENTRIES > 0
    assert config.LOG_FORMAT in ("text", "json")


def test_validate_strict(monkeypatch):
    """validate(strict=True) raises when configuration errors were collected."""
    monkeypatch.setattr(config, "_errors", ["LOG_LEVEL must be one of ..."])
    assert config.validate() == ["LOG_LEVEL must be one of ..."]
    with pytest.raises(ConfigurationError):
        config.validate(strict=True)


def test_engine_logger_names():
    """Engine loggers live under template_qa.engine."""
    assert get_engine_logger("policy").name == "template_qa.engine.policy"


def test_json_formatter_includes_extras():
    """JSON lines carry the known extra fields and nothing unset."""
    record = logging.LogRecord("template_qa.engine.validation", logging.INFO, __file__, 10,
                               "Validated %s", ("order_update",), None)
    record.template_name = "order_update"
    record.rules_version = 3
    entry = json.loads(JSONFormatter().format(record))
    assert entry["message"] == "Validated order_update"
    assert entry["level"] == "INFO"
    assert entry["template_name"] == "order_update"
    assert entry["rules_version"] == 3
    assert entry["timestamp"].endswith("Z")
    assert "tenant_id" not in entry


def test_text_formatter():
    record = logging.LogRecord("template_qa", logging.WARNING, __file__, 1, "careful", None, None)
    line = TextFormatter().format(record)
    assert "[template_qa] WARNING: careful" in line


def test_setup_logging_is_idempotent(monkeypatch, tmp_path):
    """A second setup_logging() call changes nothing."""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    monkeypatch.setattr(logging_config, "_initialized", False)
    try:
        log_file = str(tmp_path / "logs" / "tqa.log")
        logging_config.setup_logging(level="DEBUG", fmt="json", log_file=log_file)
        count = len(root.handlers)
        logging_config.setup_logging(level="INFO", fmt="text")
        assert len(root.handlers) == count == 2
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        for handler in root.handlers:
            if handler not in saved_handlers:
                handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_rule_update_is_logged(scanner, caplog):
    """Rule updates log at INFO with the new rules version."""
    with caplog.at_level(logging.INFO, logger="template_qa.engine.policy"):
        rules = scanner.set_policy_rules({"spamLanguagePatterns": []})
    record = next(r for r in caplog.records if "Policy rules updated" in r.getMessage())
    assert record.rules_version == rules.version


def test_setup_logging_defaults_come_from_config(monkeypatch):
    """With no arguments the level, format and file come from template_qa.config."""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    monkeypatch.setattr(logging_config, "_initialized", False)
    monkeypatch.setattr(config, "LOG_LEVEL", "WARNING")
    monkeypatch.setattr(config, "LOG_FORMAT", "json")
    monkeypatch.setattr(config, "LOG_FILE", "")
    try:
        logging_config.setup_logging()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


def test_json_formatter_skips_unlisted_extras():
    record = logging.LogRecord("template_qa", logging.INFO, __file__, 1, "hello", None, None)
    record.password = "hunter2"
    entry = json.loads(JSONFormatter().format(record))
    assert "password" not in entry
    assert set(entry) == {"timestamp", "level", "logger", "message"}
