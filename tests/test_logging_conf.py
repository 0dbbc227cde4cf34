import json
import logging
import sys

from promptqr.config import LoggingConfig
from promptqr.logging_conf import JsonFormatter, logging_dict


def _record(**extra):
    record = logging.LogRecord("promptqr.builder", logging.INFO, __file__, 1, "payload %s", ("built",), None)
    record.__dict__.update(extra)
    return record


def test_json_formatter_merges_extra_fields():
    line = JsonFormatter().format(_record(kind="PHONE", crc="F88B"))
    assert json.loads(line) == {
        "level": "INFO",
        "logger": "promptqr.builder",
        "message": "payload built",
        "kind": "PHONE",
        "crc": "F88B",
    }


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("promptqr.api", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    data = json.loads(JsonFormatter().format(record))
    assert "RuntimeError: boom" in data["exc_info"]


def test_logging_dict_switches_formatter():
    assert logging_dict(LoggingConfig(json_logs=True))["formatters"]["default"] == {"()": JsonFormatter}
    plain = logging_dict(LoggingConfig(level="DEBUG", json_logs=False))
    assert "format" in plain["formatters"]["default"]
    assert plain["loggers"][""]["level"] == "DEBUG"
