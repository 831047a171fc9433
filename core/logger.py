"""
Log-file setup for a dbeer invocation.

Standard output is reserved for the editor protocol, so records only ever
go to the log file named by the caller.
"""

import logging
from typing import Optional

LOGGER_NAME = "dbeer"
LOG_FORMAT = "[%(levelname)s] [%(asctime)s] [PY] %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

# Module loggers live under these package names.
PROJECT_LOGGERS = ("core", "connectors", "models", "run_query")


def init_logging(log_file: Optional[str] = None, debug: bool = False) -> logging.Logger:
    """
    Attach the log-file handler and return the invocation logger.

    Handlers from an earlier call are detached from every project logger
    and closed, so repeated calls never stack handlers.

    Args:
        log_file: Path of the append-only log file; no file when empty
        debug: Log DEBUG records too instead of errors only

    Returns:
        The ``dbeer`` logger to hand to the query engine
    """
    logger = logging.getLogger(LOGGER_NAME)
    previous = list(logger.handlers)

    level = logging.DEBUG if debug else logging.ERROR
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    else:
        handler = logging.NullHandler()

    for name in (LOGGER_NAME,) + PROJECT_LOGGERS:
        project_logger = logging.getLogger(name)
        for old_handler in previous:
            project_logger.removeHandler(old_handler)
        project_logger.addHandler(handler)
        project_logger.setLevel(level)
        project_logger.propagate = False

    for old_handler in previous:
        old_handler.close()

    return logger
