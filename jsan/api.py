"""jsan call surfaces.

``encode``/``decode`` are the primary entry points. ``dumps``/``loads`` and
``dump``/``load`` mirror the :mod:`json` module so jsan can replace it at
existing call sites.
"""

from typing import IO, Any, Union

from .decoder import Decoder
from .encoder import Encoder, Replacer
from .exceptions import InvalidOptionsError
from .options import EncodeOptions
from .utils.logging import get_logger, log_execution_time

logger = get_logger(__name__)

_RESERVED_DUMP_KWARGS = ('default', 'cls')


@log_execution_time(logger)
def encode(
    value: Any,
    replacer: Replacer = None,
    indent: Union[int, str, None] = None,
    options: Union[bool, dict, EncodeOptions, None] = None,
    **json_kwargs: Any
) -> str:
    """Serialize a value graph to jsan text.

    Shared composites are written once and referenced by path afterwards,
    so cycles and aliasing survive the round trip. Extended kinds (dates,
    patterns, callables, ``undefined``, exceptions, symbols) are tagged when
    enabled through *options*.

    Args:
        value: Value to encode.
        replacer: Callable ``(key, value) -> value`` run on every pair before
            special handling, or a list of mapping keys to keep.
        indent: Same as the ``indent`` argument of :func:`json.dumps`.
        options: ``True``/``False`` to switch every extended kind on or off,
            a mapping or :class:`EncodeOptions` with per-kind switches and a
            ``circular`` policy, or None for the configured default.
        **json_kwargs: Passed to :func:`json.dumps` (``ensure_ascii``,
            ``separators``, ``sort_keys``, ...). The :mod:`json` defaults apply, so
            output has spaces after separators and escapes non-ASCII text
            unless ``separators=(',', ':')`` and ``ensure_ascii=False`` are given.

    Returns:
        JSON text.

    Raises:
        InvalidOptionsError: If *options* or *replacer* are not usable.

    Example:
        >>> obj = {}
        >>> obj['self'] = obj
        >>> encode(obj)
        '{"self": {"$jsan": "$"}}'
        >>> encode(obj, separators=(',', ':'))
        '{"self":{"$jsan":"$"}}'
    """
    for name in _RESERVED_DUMP_KWARGS:
        if name in json_kwargs:
            raise InvalidOptionsError(f"'{name}' cannot be passed to encode()", option=name)

    encoder = Encoder(EncodeOptions.from_argument(options), replacer)
    return encoder.encode(value, indent=indent, **json_kwargs)


@log_execution_time(logger)
def decode(text: Union[str, bytes, bytearray], **json_kwargs: Any) -> Any:
    """Rebuild a value graph from jsan text.

    Args:
        text: JSON text produced by :func:`encode` (or plain JSON).
        **json_kwargs: Passed to :func:`json.loads` (``parse_float``,
            ``parse_int``, ``parse_constant``, ``strict``).

    Returns:
        The decoded value, with references pointing at live nodes.

    Raises:
        ParseError: If the text is not valid JSON.
        DecodeError: If a placeholder has an unknown tag, a malformed
            payload, or a path that cannot be resolved.

    Example:
        >>> obj = decode('{"self": {"$jsan": "$"}}')
        >>> obj['self'] is obj
        True
    """
    return Decoder(**json_kwargs).decode(text)


stringify = encode
parse = decode


def dumps(
    obj: Any,
    *,
    replacer: Replacer = None,
    indent: Union[int, str, None] = None,
    options: Union[bool, dict, EncodeOptions, None] = None,
    **kwargs: Any
) -> str:
    return encode(obj, replacer, indent, options, **kwargs)


def loads(s: Union[str, bytes, bytearray], **kwargs: Any) -> Any:
    return decode(s, **kwargs)


def dump(obj: Any, fp: IO[str], **kwargs: Any) -> None:
    """Encode *obj* and write the text to the file-like object *fp*."""
    fp.write(dumps(obj, **kwargs))


def load(fp: IO, **kwargs: Any) -> Any:
    """Decode the content of the file-like object *fp*."""
    return loads(fp.read(), **kwargs)
