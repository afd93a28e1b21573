import logging
import logging.handlers

import pytest

from src.index import logger


@pytest.fixture
def log_file(tmp_path):
    log_path = tmp_path / "logs" / "index.log"
    yield log_path
    logger.stop_logging()


def read_log(log_path):
    for handler in logging.getLogger().handlers:
        handler.flush()
    return log_path.read_text(encoding="utf-8")


def test_setup_logging_creates_file_and_formats_records(log_file):
    logger.setup_logging(log_file)

    logger.log("2026-01-01T00:00:00", "contains", "jar", True, 1.234)

    content = read_log(log_file)
    assert "level=INFO" in content
    assert "funcName=log" in content
    assert (
        "Timestamp: 2026-01-01T00:00:00, Operation: contains, Key: 'jar', "
        "Result: True, Execution Time: 1.23 ms"
    ) in content


def test_setup_logging_replaces_previous_handler(log_file, tmp_path):
    logger.setup_logging(tmp_path / "first.log")
    logger.setup_logging(log_file)

    file_handlers = [
        handler
        for handler in logging.getLogger().handlers
        if isinstance(handler, logging.handlers.RotatingFileHandler)
    ]
    assert len(file_handlers) == 1
    assert file_handlers[0].baseFilename == str(log_file)


def test_stop_logging_detaches_handler(log_file):
    logger.setup_logging(log_file)
    logger.stop_logging()

    logger.log("2026-01-01T00:00:00", "contains", "jam", False, 0.5)

    assert "jam" not in log_file.read_text(encoding="utf-8")


def test_stop_logging_without_setup_is_a_no_op():
    logger.stop_logging()
    logger.stop_logging()
