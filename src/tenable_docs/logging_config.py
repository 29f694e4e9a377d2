import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER = "tenable_docs"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are noisy below WARNING
LIBRARY_LOGGERS = ("mcp", "aiohttp", "charset_normalizer")


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Set up logging configuration for tenable_docs.

    Console output goes to stderr. Stdout carries the MCP stdio transport and
    must only ever hold protocol messages.

    Library loggers are held at WARNING unless ``level`` is DEBUG.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path that receives the same records
        format_string: Optional custom format string for log messages
        force: If True, reconfigure even if handlers exist

    Returns:
        The package logger
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        logger.handlers.clear()

        handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
        if log_file:
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
        for handler in handlers:
            handler.setLevel(numeric_level)
            handler.setFormatter(formatter)
            logger.addHandler(handler)

    library_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    logger.propagate = False
    return logger
