"""
Pytest configuration and shared fixtures.
This file is automatically loaded by pytest.
"""

import logging

import pytest

from jsan.config import settings as settings_module

JSAN_ENV_VARS = (
    'JSAN_EXTENDED_TYPES',
    'JSAN_WARN_ON_FALLBACK',
    'JSAN_LOG_LEVEL',
    'JSAN_LOG_FORMAT',
    'JSAN_LOG_OUTPUT',
    'JSAN_CONFIG_FILE',
)

# Compact, non-escaping output, comparable to the reference wire strings
COMPACT = {'separators': (',', ':'), 'ensure_ascii': False}


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Every test starts from default settings with no JSAN_* variables."""
    for name in JSAN_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    settings_module._settings = None
    yield
    settings_module._settings = None


@pytest.fixture(autouse=True)
def isolated_package_logger():
    """Restore the jsan logger after tests that configure it."""
    package_logger = logging.getLogger('jsan')
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield package_logger
    for handler in package_logger.handlers:
        if handler not in handlers:
            handler.close()
    package_logger.handlers = handlers
    package_logger.setLevel(level)


@pytest.fixture
def compact():
    return dict(COMPACT)


@pytest.fixture
def self_cycle():
    """A mapping whose 'self' field is the mapping itself."""
    obj = {}
    obj['self'] = obj
    return obj


@pytest.fixture
def cycle_and_alias():
    """A self cycle plus a shared, non-cyclic field."""
    obj = {}
    obj['self'] = obj
    obj['a'] = 1
    obj['b'] = {}
    obj['c'] = obj['b']
    return obj
