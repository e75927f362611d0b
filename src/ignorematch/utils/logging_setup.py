"""
Logging configuration for ignorematch.

Library modules only ask for loggers through get_logger(); handlers are
installed by the host application calling configure_logging():
- Writes to stderr so stdout stays free for the caller's own output
- Outputs JSON lines when IGNOREMATCH_LOG_FORMAT=json
- Supports an optional rotating log file
- Includes custom TRACE level for per-pattern debugging
"""

import sys
import logging
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional, Any

from ..constants import ENV_LOG_LEVEL, ENV_LOG_FORMAT

# Define TRACE level (lower number = more detailed)
TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

HUMAN_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


def add_trace_to_logger():
    """Ensure trace method is available on all logger instances"""
    if not hasattr(logging.Logger, 'trace'):
        logging.Logger.trace = trace


add_trace_to_logger()


class JsonFormatter(logging.Formatter):
    """One JSON object per record"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'component': record.name,
            'message': record.getMessage(),
            'pid': os.getpid(),
        }

        if hasattr(record, 'extra'):
            log_data.update(record.extra)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def resolve_level(level_str: Optional[str] = None) -> int:
    """
    Turn a level name into a numeric level.

    Falls back to IGNOREMATCH_LOG_LEVEL, then LOG_LEVEL, then INFO. Unknown
    names map to INFO.
    """
    level_str = level_str or os.environ.get(ENV_LOG_LEVEL) or os.environ.get('LOG_LEVEL', 'INFO')
    if level_str.upper() == 'TRACE':
        return TRACE_LEVEL
    level = getattr(logging, level_str.upper(), logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    json_format: Optional[bool] = None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure the 'ignorematch' logger hierarchy.

    Args:
        log_level: Override log level (defaults to IGNOREMATCH_LOG_LEVEL / LOG_LEVEL or INFO)
        log_file: Optional path of a rotating log file
        json_format: Emit JSON lines (defaults to IGNOREMATCH_LOG_FORMAT == 'json')
        max_bytes: Maximum size of log file before rotation
        backup_count: Number of backup files to keep
    """
    add_trace_to_logger()
    level = resolve_level(log_level)

    if json_format is None:
        json_format = os.environ.get(ENV_LOG_FORMAT, '').lower() == 'json'

    package_logger = logging.getLogger('ignorematch')
    for existing in list(package_logger.handlers):
        package_logger.removeHandler(existing)
        existing.close()

    formatter = JsonFormatter() if json_format else logging.Formatter(HUMAN_FORMAT)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    package_logger.addHandler(handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            str(log_path),
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.setLevel(level)
    package_logger.propagate = False

    package_logger.debug(
        f"Logging configured - Level: {logging.getLevelName(level)}, JSON: {json_format}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance with the trace() method available
    """
    add_trace_to_logger()
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context: Any
) -> None:
    """
    Log a message with additional context fields.

    The fields are merged into the JSON output of JsonFormatter.
    """
    extra = {'extra': context} if context else {}
    logger.log(level, message, extra=extra)
