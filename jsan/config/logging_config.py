"""
Structured Logging Configuration for jsan
Provides opt-in logging setup with JSON or human-readable output.

The library itself only installs a NullHandler on the ``jsan`` logger;
applications call :func:`configure_logging` or :func:`configure_from_settings`
to see codec diagnostics.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from logging import LogRecord
from typing import Optional, Union

from .settings import LoggingConfig, get_logging_config

PACKAGE_LOGGER = 'jsan'


class StructuredFormatter(logging.Formatter):
    """
    Formatter that outputs one JSON object per log record.
    """

    def format(self, record: LogRecord) -> str:
        """
        Format log record as structured JSON.

        Args:
            record: The log record to format

        Returns:
            JSON-formatted log string
        """
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        # Structured fields attached by JsanLogger
        extra_fields = getattr(record, 'extra_fields', None)
        if extra_fields:
            log_entry['fields'] = extra_fields

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class HumanReadableFormatter(logging.Formatter):
    """
    Human-readable formatter with optional color coding.
    """

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color

    def format(self, record: LogRecord) -> str:
        """
        Format log record for human reading.

        Args:
            record: The log record to format

        Returns:
            Formatted log string
        """
        color = self.COLORS.get(record.levelname, '') if self.use_color else ''
        reset = self.RESET if color else ''

        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]

        formatted = (
            f"{color}{timestamp} "
            f"[{record.levelname:8}] "
            f"{record.name} - "
            f"{record.getMessage()}"
            f"{reset}"
        )

        if record.exc_info:
            formatted += f"\n{self.formatException(record.exc_info)}"

        return formatted


def configure_logging(
    level: Union[str, int] = "WARNING",
    format_type: str = "human",
    output: str = "stderr"
) -> logging.Handler:
    """
    Attach a handler to the ``jsan`` logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Output format ('json' or 'human')
        output: Output destination ('stdout', 'stderr', or file path)

    Returns:
        The handler that was installed
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    if format_type == 'json':
        formatter = StructuredFormatter()
    else:
        formatter = HumanReadableFormatter(use_color=output in ('stdout', 'stderr'))

    if output == 'stdout':
        handler = logging.StreamHandler(sys.stdout)
    elif output == 'stderr':
        handler = logging.StreamHandler(sys.stderr)
    else:
        # Assume it's a file path
        handler = logging.FileHandler(output)

    handler.setFormatter(formatter)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    # Replace handlers installed by a previous call, keep the NullHandler
    package_logger.handlers = [
        h for h in package_logger.handlers if isinstance(h, logging.NullHandler)
    ]
    package_logger.addHandler(handler)

    package_logger.debug(
        f"Logging configured: level={logging.getLevelName(level)}, "
        f"format={format_type}, output={output}"
    )
    return handler


def configure_from_settings(config: Optional[LoggingConfig] = None) -> logging.Handler:
    """Configure logging from the process settings (or the given section)."""
    config = config or get_logging_config()
    return configure_logging(
        level=config.log_level,
        format_type=config.log_format,
        output=config.log_output
    )
