"""
jsan Exception Hierarchy
Provides specific exception types for decode failures and invalid call options.
"""

import json
from typing import Any, Optional


class JsanError(Exception):
    """
    Base exception class for all jsan-specific exceptions.
    Provides an error code and context describing the failure.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ):
        """
        Initialize a jsan exception with context.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code for categorization
            context: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for structured logging.

        Returns:
            Dictionary representation of the exception
        """
        result = {
            'error': self.error_code,
            'message': self.message,
            'type': self.__class__.__name__
        }

        if self.context:
            result['context'] = self.context

        return result

    def __str__(self) -> str:
        """String representation of the exception."""
        parts = [f"{self.error_code}: {self.message}"]

        if self.context:
            parts.append(f"Context: {self.context}")

        return " | ".join(parts)


class InvalidOptionsError(JsanError, TypeError):
    """
    Raised when encode or decode is called with options it cannot honour.
    """

    def __init__(self, message: str, option: Optional[str] = None, **kwargs):
        context = kwargs.pop('context', {})

        if option:
            context['option'] = option

        super().__init__(
            message=message,
            error_code='INVALID_OPTIONS',
            context=context,
            **kwargs
        )
        self.option = option


class DecodeError(JsanError, ValueError):
    """
    Raised when well-formed JSON carries a placeholder that cannot be decoded.
    """

    def __init__(self, message: str, error_code: str = 'DECODE_ERROR', **kwargs):
        super().__init__(message=message, error_code=error_code, **kwargs)


class UnknownTagError(DecodeError):
    """Raised when a placeholder payload starts with an unrecognized tag."""

    def __init__(self, payload: str, message: Optional[str] = None, **kwargs):
        tag = payload[:1]
        if message is None:
            if tag:
                message = f"Unknown placeholder tag {tag!r}"
            else:
                message = "Empty placeholder payload"

        context = kwargs.pop('context', {})
        context['tag'] = tag
        context['payload'] = payload[:200]

        super().__init__(
            message=message,
            error_code='UNKNOWN_TAG',
            context=context,
            **kwargs
        )
        self.tag = tag
        self.payload = payload


class MalformedPayloadError(DecodeError):
    """Raised when a known tag carries a payload that cannot be decoded."""

    def __init__(self, tag: str, payload: str, reason: str, **kwargs):
        context = kwargs.pop('context', {})
        context['tag'] = tag
        context['payload'] = payload[:200]

        super().__init__(
            message=f"Malformed payload for tag {tag!r}: {reason}",
            error_code='MALFORMED_PAYLOAD',
            context=context,
            **kwargs
        )
        self.tag = tag
        self.payload = payload


class MalformedPathError(DecodeError):
    """Raised when a reference path does not follow the path grammar."""

    def __init__(self, path: str, position: int, reason: str, **kwargs):
        context = kwargs.pop('context', {})
        context['path'] = path
        context['position'] = position

        super().__init__(
            message=f"Malformed path {path!r} at position {position}: {reason}",
            error_code='MALFORMED_PATH',
            context=context,
            **kwargs
        )
        self.path = path
        self.position = position


class UnresolvedReferenceError(DecodeError):
    """Raised when a reference path cannot be walked to a node of the tree."""

    def __init__(self, path: str, reason: str, **kwargs):
        context = kwargs.pop('context', {})
        context['path'] = path

        super().__init__(
            message=f"Cannot resolve reference {path!r}: {reason}",
            error_code='UNRESOLVED_REFERENCE',
            context=context,
            **kwargs
        )
        self.path = path


class ParseError(json.JSONDecodeError):
    """
    Raised when the input is not valid JSON.

    Carries the same ``msg``, ``doc`` and ``pos`` as the underlying
    :class:`json.JSONDecodeError`, so existing handlers keep working.
    """

    error_code = 'PARSE_ERROR'

    @classmethod
    def from_json_error(cls, error: json.JSONDecodeError) -> 'ParseError':
        return cls(error.msg, error.doc, error.pos)

    @classmethod
    def from_unicode_error(cls, error: UnicodeDecodeError, data: bytes) -> 'ParseError':
        """Report undecodable input bytes at the offset of the first bad byte."""
        return cls(error.reason, bytes(data).decode('latin-1'), error.start)

    def to_dict(self) -> dict[str, Any]:
        return {
            'error': self.error_code,
            'message': self.msg,
            'type': self.__class__.__name__,
            'context': {'line': self.lineno, 'column': self.colno, 'position': self.pos}
        }


# Convenience functions for common decode failures
def dangling_reference(path: str, segment: str) -> UnresolvedReferenceError:
    """Create a reference error for a segment missing from the tree."""
    return UnresolvedReferenceError(path, f"segment {segment} does not exist")


def reference_loop(path: str) -> UnresolvedReferenceError:
    """Create a reference error for a chain of references with no target."""
    return UnresolvedReferenceError(path, "reference chain loops back on itself")


__all__ = [
    'JsanError',
    'InvalidOptionsError',
    'DecodeError',
    'UnknownTagError',
    'MalformedPayloadError',
    'MalformedPathError',
    'UnresolvedReferenceError',
    'ParseError',
    'dangling_reference',
    'reference_loop',
]
