"""
Logging setup and environment configuration for esmify.
"""

import os
import logging
import logging.handlers
from pathlib import Path

LOGGER_NAME = 'esmify'


def setup_logging(log_level: str = None, log_file: str = None):
    """Configure the `esmify` logger.

    Only the package logger is touched, so embedding applications keep
    their own root configuration. The console stays quiet below WARNING
    unless LOG_LEVEL asks for more.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (optional)
    """
    level = (log_level or os.environ.get('LOG_LEVEL', 'WARNING')).upper()
    log_level = getattr(logging, level, logging.WARNING)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.propagate = False

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter('esmify: %(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        logger.addHandler(file_handler)

    logger.debug(f"Logging configured with level: {level}")


def get_config():
    """Get application configuration from environment variables."""
    return {
        'LOG_LEVEL': os.environ.get('LOG_LEVEL', 'WARNING'),
        'LOG_FILE': os.environ.get('LOG_FILE') or None,
    }
