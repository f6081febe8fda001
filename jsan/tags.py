"""
Type-tag table for the extended kinds.

Every extended kind is written as a placeholder ``{"$jsan": "<tag><payload>"}``
where the tag is a single character:

    d  instant in time     milliseconds since the Unix epoch
    r  pattern matcher     "<flags>,<source>"
    f  callable            header text of the callable
    u  absence marker      (empty)
    e  error condition     the error message
    s  symbolic token      optional description
"""

import inspect
import re
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Optional

from .exceptions import MalformedPayloadError, UnknownTagError
from .representations import FunctionStub, Symbol, Undefined, undefined
from .utils.logging import get_logger

logger = get_logger(__name__)

MARKER = '$jsan'

# Option name -> tag character, in the order values are classified.
KIND_TAGS = {
    'undefined': 'u',
    'symbol': 's',
    'date': 'd',
    'regex': 'r',
    'error': 'e',
    'function': 'f',
}
TAG_KINDS = {tag: kind for kind, tag in KIND_TAGS.items()}

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)
_INTEGER = re.compile(r'-?[0-9]+')

# Python inline flag letters; 'u' is implied for text patterns and never written.
REGEX_FLAGS = (
    ('a', re.ASCII),
    ('i', re.IGNORECASE),
    ('L', re.LOCALE),
    ('m', re.MULTILINE),
    ('s', re.DOTALL),
    ('x', re.VERBOSE),
)
_FLAG_LETTERS = dict(REGEX_FLAGS)
_FLAG_LETTERS['u'] = re.UNICODE
# JavaScript flags without a Python counterpart: global, sticky, indices.
_IGNORED_FLAGS = frozenset('gyd')


def classify(value: Any) -> Optional[str]:
    """
    Return the extended kind of *value*, or None for anything else.

    Composites and plain JSON scalars are never extended kinds.
    """
    if value is None or isinstance(value, (str, int, float, dict, list, tuple)):
        return None
    if isinstance(value, Undefined):
        return 'undefined'
    if isinstance(value, Symbol):
        return 'symbol'
    if isinstance(value, date):
        return 'date'
    if isinstance(value, re.Pattern) and isinstance(value.pattern, str):
        return 'regex'
    if isinstance(value, BaseException):
        return 'error'
    if callable(value) and not isinstance(value, type):
        return 'function'
    return None


def is_placeholder(obj: Any) -> bool:
    """Return True if a parsed JSON object has the placeholder shape."""
    return (
        isinstance(obj, dict)
        and len(obj) == 1
        and isinstance(obj.get(MARKER), str)
    )


def placeholder(payload: str) -> dict[str, str]:
    return {MARKER: payload}


# Encoding

def date_to_millis(value: date) -> int:
    """Milliseconds since the Unix epoch for a date or datetime."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    elif value.tzinfo is None:
        try:
            value = value.astimezone(timezone.utc)
        except (OverflowError, OSError, ValueError):
            value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // _MILLISECOND


def regex_flags(pattern: re.Pattern) -> str:
    return ''.join(letter for letter, flag in REGEX_FLAGS if pattern.flags & flag)


def describe_callable(fn: Callable) -> str:
    """
    Best-effort header text for a callable.

    Produces ``def name(signature): ...`` or ``lambda signature: ...``; the
    body is never included.
    """
    if isinstance(fn, FunctionStub):
        return fn.source

    name = getattr(fn, '__name__', None) or type(fn).__name__
    try:
        signature = str(inspect.signature(fn))
    except (TypeError, ValueError):
        signature = '(...)'

    if name == '<lambda>':
        params = signature[1:signature.rfind(')')]
        return f'lambda {params}: ...' if params else 'lambda: ...'
    return f'def {name}{signature}: ...'


def error_message(error: BaseException) -> str:
    if len(error.args) == 1 and isinstance(error.args[0], str):
        return error.args[0]
    return str(error)


_PAYLOAD_ENCODERS: dict[str, Callable[[Any], str]] = {
    'undefined': lambda value: '',
    'symbol': lambda value: value.description or '',
    'date': lambda value: str(date_to_millis(value)),
    'regex': lambda value: f'{regex_flags(value)},{value.pattern}',
    'error': error_message,
    'function': describe_callable,
}


def encode_value(kind: str, value: Any) -> dict[str, str]:
    """Build the placeholder for a value of the given extended kind."""
    return placeholder(KIND_TAGS[kind] + _PAYLOAD_ENCODERS[kind](value))


# Decoding

def _decode_date(payload: str) -> datetime:
    if _INTEGER.fullmatch(payload) is None:
        raise MalformedPayloadError('d', payload, "expected integer milliseconds")
    try:
        return EPOCH + int(payload) * _MILLISECOND
    except OverflowError as e:
        raise MalformedPayloadError('d', payload, "instant out of range") from e


def _decode_regex(payload: str) -> re.Pattern:
    letters, comma, source = payload.partition(',')
    if not comma:
        raise MalformedPayloadError('r', payload, "expected '<flags>,<source>'")

    flags = 0
    for letter in letters:
        if letter in _FLAG_LETTERS:
            flags |= _FLAG_LETTERS[letter]
        elif letter in _IGNORED_FLAGS:
            logger.debug("Ignoring regex flag without Python equivalent", flag=letter)
        else:
            raise MalformedPayloadError('r', payload, f"unknown flag {letter!r}")

    try:
        return re.compile(source, flags)
    except (re.error, ValueError) as e:
        raise MalformedPayloadError('r', payload, str(e)) from e


_PAYLOAD_DECODERS: dict[str, Callable[[str], Any]] = {
    'u': lambda payload: undefined,
    's': lambda payload: Symbol(payload or None),
    'd': _decode_date,
    'r': _decode_regex,
    'e': lambda payload: Exception(payload),
    'f': FunctionStub,
}


def decode_value(payload: str) -> Any:
    """
    Decode a placeholder payload whose first character is a kind tag.

    Raises:
        UnknownTagError: If the tag is not in the table
        MalformedPayloadError: If the payload does not fit the tag
    """
    decoder = _PAYLOAD_DECODERS.get(payload[:1])
    if decoder is None:
        raise UnknownTagError(payload)
    return decoder(payload[1:])
