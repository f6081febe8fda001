"""
Centralized logging utilities for jsan

Provides a structured logger wrapper so codec modules can attach key=value
details to their messages without building strings that are never emitted.
"""

import logging
import time
import traceback
from functools import wraps
from typing import Optional


class JsanLogger:
    """Enhanced logger with structured logging support."""

    def __init__(self, name: str, level: Optional[str] = None):
        """
        Initialize logger with consistent formatting.

        Args:
            name: Logger name (usually module name)
            level: Optional log level override
        """
        self.logger = logging.getLogger(name)

        if level:
            self.logger.setLevel(getattr(logging, level.upper()))

    def debug(self, msg: str, **kwargs):
        """Debug log with optional structured data."""
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs):
        """Info log with optional structured data."""
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs):
        """Warning log with optional structured data."""
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, error: Optional[BaseException] = None, **kwargs):
        """Error log with optional exception details."""
        if error:
            kwargs['error_type'] = type(error).__name__
            kwargs['error_message'] = str(error)
            if self.logger.isEnabledFor(logging.DEBUG):
                kwargs['traceback'] = traceback.format_exc()
        self._log(logging.ERROR, msg, **kwargs)

    def _log(self, level: int, msg: str, **kwargs):
        """Internal logging method with structured data support."""
        if not self.logger.isEnabledFor(level):
            return

        if kwargs:
            # Format structured data as key=value pairs
            structured = ' '.join(f'{k}={v}' for k, v in kwargs.items())
            full_msg = f'{msg} | {structured}'
        else:
            full_msg = msg

        # stacklevel: record the caller of debug()/info()/warning()
        self.logger.log(level, full_msg, extra={'extra_fields': kwargs}, stacklevel=3)


def get_logger(name: str, level: Optional[str] = None) -> JsanLogger:
    """
    Get a standardized logger instance.

    Args:
        name: Logger name (usually __name__)
        level: Optional log level override

    Returns:
        JsanLogger instance
    """
    return JsanLogger(name, level)


def log_execution_time(logger: Optional[JsanLogger] = None):
    """
    Decorator to log execution time of functions.

    Failures are logged at DEBUG and re-raised unchanged.

    Args:
        logger: Optional logger instance
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            _logger = logger or get_logger(func.__module__)
            start_time = time.perf_counter()

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                execution_time = time.perf_counter() - start_time
                _logger.debug(
                    f"{func.__name__} failed",
                    error_type=type(e).__name__,
                    execution_time_ms=round(execution_time * 1000, 3)
                )
                raise

            execution_time = time.perf_counter() - start_time
            _logger.debug(
                f"{func.__name__} completed",
                execution_time_ms=round(execution_time * 1000, 3)
            )
            return result

        return wrapper
    return decorator
