"""Structured logging for the string index (timestamp, operation, etc.)."""

import logging
import logging.handlers
from pathlib import Path
from typing import Union

LOG_FILE_PATH = Path(__file__).parent.parent.parent / "logs/index.log"
_LOG_LEVEL = logging.INFO

_file_handler: Union[logging.Handler, None] = None


def setup_logging(
    log_file_path: Path = LOG_FILE_PATH,
    level: int = _LOG_LEVEL,
) -> None:
    """Route the root logger to a rotating log file.

    Calling it again replaces the handler installed by the previous call.

    Args:
        log_file_path (Path): The file to write to, its directory is
            created when missing.
        level (int): The root logger level.

    """
    global _file_handler
    stop_logging()

    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    formatter = logging.Formatter(
        "level=%(levelname)s | time=%(asctime)s | module=%(module)s | "
        "funcName=%(funcName)s | lineno=%(lineno)d | message=%(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)
    _file_handler = file_handler


def stop_logging() -> None:
    """Detach and close the handler installed by `setup_logging`."""
    global _file_handler
    if _file_handler is not None:
        logging.getLogger().removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None


def log(
    time_stamp: str,
    operation: str,
    key: str,
    result: bool,
    execution_time_ms: float,
) -> None:
    """Log the details of an index operation using the configured
    logging system.

    Args:
        time_stamp (str): The timestamp of the operation.
        operation (str): The operation name, e.g. "contains".
        key (str): The key the operation was applied to.
        result (bool): The boolean result of the operation.
        execution_time_ms (float): The execution time in milliseconds.

    """
    logging.info(
        "Timestamp: %s, Operation: %s, Key: '%s', Result: %s, "
        "Execution Time: %.2f ms",
        time_stamp,
        operation,
        key,
        result,
        execution_time_ms,
    )
