"""Logging configuration utility."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '[%(asctime)s] %(levelname)-8s %(name)s - %(message)s'

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ('aiohttp.access', 'uvicorn.access', 'mcp.server.lowlevel')


def setup_logger(
    name: Optional[str] = None,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None,
    silent: Optional[bool] = None,
) -> logging.Logger:
    """Setup and configure logger.

    The console handler writes to stderr; stdout carries the stdio JSON-RPC
    stream and must stay clean.

    Args:
        name: Logger name (None configures the root logger)
        level: Logging level, falls back to LOG_LEVEL then INFO
        log_file: Optional log file path, falls back to LOG_FILE
        format_string: Custom format string
        silent: Suppress console output, falls back to SILENT

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Clear any existing handlers
    logger.handlers.clear()

    level = (level or os.environ.get('LOG_LEVEL') or 'INFO').upper()
    logger.setLevel(getattr(logging, level, logging.INFO))

    log_file = log_file or os.environ.get('LOG_FILE')
    if silent is None:
        silent = os.environ.get('SILENT', '').lower() in ('true', '1')

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    if not silent:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
