"""
Logging setup.

Every module logs through ``logging.getLogger(__name__)``. Since all of
them live under the ``xerosync`` package, one handler on the package
logger formats the whole pipeline's output.
"""
import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
PACKAGE_LOGGER = "xerosync"


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Safe to call more than once; the handler is only added the first time.

    Args:
        level: Level applied to the package logger

    Returns:
        The package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger
