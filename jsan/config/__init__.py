"""
jsan Configuration Module
"""

from .logging_config import configure_from_settings, configure_logging
from .settings import (
    CodecConfig,
    LoggingConfig,
    Settings,
    get_codec_config,
    get_logging_config,
    get_settings,
    reload_settings,
)

__all__ = [
    'CodecConfig',
    'LoggingConfig',
    'Settings',
    'configure_from_settings',
    'configure_logging',
    'get_codec_config',
    'get_logging_config',
    'get_settings',
    'reload_settings'
]
