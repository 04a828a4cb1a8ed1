"""Unit tests for core/logging.py"""

import json
import logging
import sys

from fastapi import FastAPI
from fastapi.testclient import TestClient

from keepnotes.config import Settings
from keepnotes.core.logging import (
    ColoredFormatter,
    JSONFormatter,
    LoggingMiddleware,
    build_logging_config,
    get_log_level,
    get_logger,
)


def _record(msg="hello", **extra):
    record = logging.LogRecord("keepnotes.test", logging.INFO, __file__, 10, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extra():
    entry = json.loads(JSONFormatter().format(_record(user_id="u-1")))
    assert entry["message"] == "hello"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "keepnotes.test"
    assert entry["extra"] == {"user_id": "u-1"}


def test_json_formatter_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = logging.LogRecord("keepnotes.test", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())
    entry = json.loads(JSONFormatter().format(record))
    assert entry["exception"]["type"] == "RuntimeError"
    assert entry["exception"]["message"] == "boom"


def test_colored_formatter_leaves_record_alone():
    record = _record()
    output = ColoredFormatter("%(levelname)s %(message)s").format(record)
    assert "hello" in output
    assert record.levelname == "INFO"


def test_get_log_level():
    assert get_log_level("debug") == logging.DEBUG
    assert get_log_level("nonsense") == logging.INFO


def test_build_logging_config(tmp_path):
    plain = build_logging_config(Settings(debug=False))
    assert plain["handlers"]["console"]["formatter"] == "json"
    assert set(plain["handlers"]) == {"console"}

    with_files = build_logging_config(Settings(debug=True, log_to_file=True, log_dir=str(tmp_path / "logs")))
    assert with_files["handlers"]["console"]["formatter"] == "colored"
    assert {"file", "error_file"} <= set(with_files["handlers"])
    assert (tmp_path / "logs").is_dir()


def test_get_logger_namespace():
    assert get_logger("rpc").name == "keepnotes.rpc"


def test_logging_middleware_logs_request_and_response(caplog):
    app = FastAPI()
    app.add_middleware(LoggingMiddleware)

    @app.get("/ping")
    async def ping():
        return {"pong": True}

    logger = logging.getLogger("keepnotes.http")
    logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.INFO, logger="keepnotes.http"):
            resp = TestClient(app).get("/ping")
    finally:
        logger.removeHandler(caplog.handler)

    assert resp.status_code == 200
    messages = [r.getMessage() for r in caplog.records if r.name == "keepnotes.http"]
    assert "HTTP Request" in messages
    assert "HTTP Response" in messages
