"""Utility modules for ignorematch"""

from .logging_setup import (
    TRACE_LEVEL,
    JsonFormatter,
    configure_logging,
    get_logger,
    log_with_context,
)

__all__ = ['TRACE_LEVEL', 'JsonFormatter', 'configure_logging', 'get_logger', 'log_with_context']
