"""Tests for logging helpers."""

import logging

from model_playground.utils.log import PlaygroundLogger, StructuredFormatter, session_log_path


def test_structured_formatter_appends_extras():
    formatter = StructuredFormatter("%(levelname)s %(message)s")
    record = logging.LogRecord("model_playground", logging.INFO, __file__, 1, "[gateway] sent", None, None)
    record.provider = "openai"
    record.duration_ms = 12.5

    output = formatter.format(record)

    assert output.startswith("INFO [gateway] sent | ")
    assert '"duration_ms": 12.5' in output
    assert '"provider": "openai"' in output


def test_structured_formatter_without_extras():
    formatter = StructuredFormatter("%(message)s")
    record = logging.LogRecord("model_playground", logging.INFO, __file__, 1, "plain", None, None)
    assert formatter.format(record) == "plain"


def test_file_handler_receives_debug_logs(tmp_path):
    logger = PlaygroundLogger(name="model_playground.test_file_handler")
    log_file = logger.attach_file_handler(tmp_path / "logs" / "session.log")

    logger.debug("[test] hello", extra={"key": "value"})

    text = log_file.read_text(encoding="utf-8")
    assert "[DEBUG] [test] hello" in text
    assert '"key": "value"' in text


def test_session_log_path(tmp_path):
    path = session_log_path(tmp_path, "abc")
    assert path.parent == tmp_path
    assert path.name.endswith("-abc.log")


def test_info_and_warning_reach_file_handler(tmp_path):
    logger = PlaygroundLogger(name="model_playground.test_levels")
    log_file = logger.attach_file_handler(tmp_path / "levels.log")

    logger.info("[test] started")
    logger.warning("[test] failed: %s", "boom", extra={"provider": "xai"})

    text = log_file.read_text(encoding="utf-8")
    assert "[INFO] [test] started" in text
    assert "[WARNING] [test] failed: boom" in text
    assert '"provider": "xai"' in text
