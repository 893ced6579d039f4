import json
import logging

import pytest

from utils.logger import ColoredFormatter, JSONFormatter, configure_file_logging, detach_handlers, setup_logger


@pytest.fixture
def file_logger(tmp_path):
    logger = setup_logger("psycanvas-test-files", console=False)
    configure_file_logging(logger, tmp_path)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def read_lines(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


def test_json_formatter_includes_context_fields():
    """Given a record with extra fields, when formatted, then timestamp, level, message and context appear."""
    logger = logging.getLogger("psycanvas-format")
    record = logger.makeRecord("psycanvas-format", logging.INFO, __file__, 1, "Processing chat request", (), None,
                               extra={"ip": "127.0.0.1", "materialsCount": 2})
    payload = json.loads(JSONFormatter().format(record))
    assert payload["level"] == "info"
    assert payload["message"] == "Processing chat request"
    assert payload["ip"] == "127.0.0.1"
    assert payload["materialsCount"] == 2
    assert payload["timestamp"].endswith("+00:00")


def test_json_formatter_includes_stack_for_exceptions():
    """Given a record with exception info, when formatted, then the stack is included."""
    try:
        raise RuntimeError("boom")
    except RuntimeError as e:
        record = logging.getLogger("psycanvas-format").makeRecord(
            "psycanvas-format", logging.ERROR, __file__, 1, "failed", (), (type(e), e, e.__traceback__)
        )
    payload = json.loads(JSONFormatter().format(record))
    assert "RuntimeError: boom" in payload["stack"]


def test_colored_formatter_restores_level_name():
    """Given a record, when color formatted, then the record's level name is left untouched."""
    record = logging.getLogger("psycanvas-format").makeRecord(
        "psycanvas-format", logging.WARNING, __file__, 1, "careful", (), None
    )
    line = ColoredFormatter("%(levelname)s %(message)s").format(record)
    assert "careful" in line
    assert record.levelname == "WARNING"


def test_file_logging_splits_error_and_combined(file_logger, tmp_path):
    """Given info and error events, when logged, then error.log holds only errors and combined.log holds both."""
    file_logger.info("started", extra={"port": 3000})
    file_logger.error("failed", extra={"ip": "10.0.0.1"})

    errors = read_lines(tmp_path / "error.log")
    combined = read_lines(tmp_path / "combined.log")
    assert [entry["message"] for entry in errors] == ["failed"]
    assert [entry["message"] for entry in combined] == ["started", "failed"]
    assert combined[0]["port"] == 3000


def test_configure_file_logging_is_idempotent(file_logger, tmp_path):
    """Given file logging already configured, when configured again, then no duplicate handlers are added."""
    assert configure_file_logging(file_logger, tmp_path) == []
    assert len(file_logger.handlers) == 2


def test_detach_handlers_removes_and_closes_file_handlers(tmp_path):
    """Given file logging configured, when its handlers are detached, then the logger drops them and the files close."""
    logger = setup_logger("psycanvas-test-detach", console=False)
    added = configure_file_logging(logger, tmp_path)
    assert len(added) == 2

    detach_handlers(logger, added)

    assert logger.handlers == []
    assert all(handler.stream is None for handler in added)
