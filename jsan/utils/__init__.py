"""
jsan Utilities Module

Common utilities shared by the codec modules.
"""

from .logging import JsanLogger, get_logger, log_execution_time

__all__ = [
    'JsanLogger',
    'get_logger',
    'log_execution_time'
]
