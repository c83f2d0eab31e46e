"""
Logging setup for DrillStack.

Every module logs through ``logging.getLogger(__name__)``, so configuring
the ``drillstack_app`` package logger once covers the whole engine.
Anything not passed to :func:`setup_logging` comes from :class:`Config`
(``LOG_LEVEL``, ``LOG_DIR``, ``LOG_JSON``, ``LOG_TO_FILE``).
"""

import logging
import logging.handlers
import os
from typing import Optional

from .config import Config

ROOT_LOGGER_NAME = 'drillstack_app'
LOG_FILE_NAME = 'drillstack.log'

_TEXT_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
_JSON_FORMAT = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'


def _build_formatter(json_format: bool) -> logging.Formatter:
    return logging.Formatter(_JSON_FORMAT if json_format else _TEXT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')


def setup_logging(
    log_level: Optional[str] = None,
    log_dir: Optional[str] = None,
    json_format: Optional[bool] = None,
    log_to_file: Optional[bool] = None,
) -> logging.Logger:
    """
    Attach console (and optionally rotating-file) handlers to the engine logger.

    Calling it again replaces the handlers installed by the previous call.
    """
    log_level = log_level or Config.LOG_LEVEL
    log_dir = log_dir or Config.LOG_DIR
    json_format = Config.LOG_JSON if json_format is None else json_format
    log_to_file = Config.LOG_TO_FILE if log_to_file is None else log_to_file

    level = getattr(logging, str(log_level).upper(), logging.INFO)
    formatter = _build_formatter(json_format)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler()]
    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            os.path.join(log_dir, LOG_FILE_NAME),
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding='utf-8',
        ))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Logging initialized: level={log_level}, dir={log_dir if log_to_file else '-'}")
    return logger


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get a logger by name."""
    return logging.getLogger(name)
