import logging
import sys
from os import environ

from .api import decode, dump, dumps, encode, load, loads, parse, stringify
from .exceptions import (
    DecodeError,
    InvalidOptionsError,
    JsanError,
    MalformedPathError,
    MalformedPayloadError,
    ParseError,
    UnknownTagError,
    UnresolvedReferenceError,
)
from .options import UNSET, EncodeOptions
from .representations import FunctionStub, Symbol, Undefined, undefined
from .tags import MARKER

logger = logging.getLogger('jsan')
logger.addHandler(logging.NullHandler())

# Set up logging if JSAN_LOG_LEVEL is defined
if 'JSAN_LOG_LEVEL' in environ:
    logger.setLevel(getattr(logging, environ['JSAN_LOG_LEVEL'].upper(), logging.WARNING))
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        '[%(asctime)s] [%(levelname)s] [%(name)s] [%(funcName)s] [line|%(lineno)d] %(message)s',
        datefmt='%a %b %d %Y %H:%M:%S'))
    logger.addHandler(handler)

# Version info
__version__ = '1.0.0'

__all__ = [
    'DecodeError',
    'EncodeOptions',
    'FunctionStub',
    'InvalidOptionsError',
    'JsanError',
    'MARKER',
    'MalformedPathError',
    'MalformedPayloadError',
    'ParseError',
    'Symbol',
    'UNSET',
    'Undefined',
    'UnknownTagError',
    'UnresolvedReferenceError',
    'decode',
    'dump',
    'dumps',
    'encode',
    'load',
    'loads',
    'parse',
    'stringify',
    'undefined',
]
