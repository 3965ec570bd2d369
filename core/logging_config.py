"""
Structured JSON logging configuration.

Attaches handlers to the ``core`` logger tree so every module logger
(core.mcr, core.api_client, ...) is covered without touching the root logger.
"""

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Optional

from config.settings import get_settings

LOGGER_NAME = "core"


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        for attr in ('correlation_id', 'mcr_id', 'provisioning_status', 'attempt'):
            if hasattr(record, attr):
                log_entry[attr] = getattr(record, attr)

        return json.dumps(log_entry)


def configure_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """Configure logging for the client.

    Arguments default to LOG_LEVEL / LOG_FORMAT / LOG_FILE from settings.

    Returns:
        Configured logger instance.
    """
    settings = get_settings()
    log_level = (log_level or settings.log_level).upper()
    log_format = log_format or settings.log_format
    log_file = settings.log_file if log_file is None else log_file

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level, logging.INFO))
    logger.handlers = []

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.DEBUG)

    if log_format == 'json':
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))

    logger.addHandler(console_handler)

    # File handler (if configured)
    if log_file:
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    return logger
