"""
Graph-walking stringifier.

:class:`Encoder` turns an arbitrary value graph into a plain JSON tree in one
depth-first pre-order walk. Each composite (dict, list, tuple) is recorded with
the path of its first occurrence; revisiting it emits a reference placeholder
``{"$jsan": "<path>"}`` instead of descending again. Composites still on the
recursion stack are true cycles and may be replaced through the circular
policy; composites that are merely shared always become references.
"""

import json
from enum import Enum
from typing import Any, Callable, Optional, Union

from .config.settings import get_codec_config
from .exceptions import InvalidOptionsError
from .options import EncodeOptions
from .paths import ROOT, Segment, child_path
from .tags import classify, encode_value, error_message, placeholder
from .utils.logging import get_logger

logger = get_logger(__name__)

# Returned by the walker for values a JSON writer leaves out of mappings.
_OMIT = object()

Replacer = Union[Callable[[Segment, Any], Any], list, tuple, None]


def json_key(key: Any) -> str:
    """Convert a mapping key to text the way json.dumps does."""
    if isinstance(key, str):
        return key if type(key) is str else str.__str__(key)
    if key is None or isinstance(key, (bool, int, float)):
        return json.dumps(key)
    return str(key)


class Encoder:
    """
    Converts one value graph into a plain JSON tree.

    An encoder holds the visitation record and the active-stack set for a
    single call; create a new one per value.
    """

    def __init__(self, options: EncodeOptions, replacer: Replacer = None):
        """
        Args:
            options: Normalized encode options
            replacer: Callable ``(key, value) -> value`` applied to every pair
                before special handling, or a list/tuple of mapping keys to keep
        """
        self.options = options
        self.kinds = options.enabled_kinds
        self.replacer: Optional[Callable[[Segment, Any], Any]] = None
        self.allowed_keys: Optional[frozenset] = None

        if callable(replacer):
            self.replacer = replacer
        elif isinstance(replacer, (list, tuple)):
            self.allowed_keys = frozenset(json_key(k) for k in replacer)
        elif replacer is not None:
            raise InvalidOptionsError(
                f"Replacer must be callable or a list of keys, not {type(replacer).__name__}",
                option='replacer'
            )

        # id(composite) -> (path, composite); the composite is kept so its id
        # stays unique for the whole call
        self._visited: dict[int, tuple[str, Any]] = {}
        self._active: set[int] = set()

        self.references = 0
        self.cycles = 0
        self.fallbacks = 0
        self._fallback_level = 'warning' if get_codec_config().warn_on_fallback else 'debug'

    def encode(self, value: Any, indent: Union[int, str, None] = None, **json_kwargs: Any) -> str:
        """Encode *value* to JSON text."""
        plain = self.to_plain(value)
        text = json.dumps(plain, indent=indent, **json_kwargs)
        logger.debug(
            "Encoded value",
            composites=len(self._visited),
            references=self.references,
            cycles=self.cycles,
            fallbacks=self.fallbacks
        )
        return text

    def to_plain(self, value: Any) -> Any:
        """Return the substituted plain tree for *value*."""
        result = self._walk('', value, ROOT)
        return None if result is _OMIT else result

    def _walk(self, key: Segment, value: Any, path: str) -> Any:
        if self.replacer is not None:
            value = self.replacer(key, value)
        return self._convert(key, value, path)

    def _convert(self, key: Segment, value: Any, path: str) -> Any:
        if value is None or isinstance(value, (str, int, float)):
            return value

        kind = classify(value)
        if kind is not None:
            if kind in self.kinds:
                return encode_value(kind, value)
            return self._fallback(key, kind, value, path)

        if isinstance(value, (dict, list, tuple)):
            return self._composite(key, value, path)

        to_json = getattr(value, 'to_json', None)
        if callable(to_json):
            return self._convert(key, to_json(key), path)

        return self._fallback(key, None, value, path)

    def _composite(self, key: Segment, value: Union[dict, list, tuple], path: str) -> Any:
        # Empty tuples are interned and never referenced
        if isinstance(value, tuple) and not value:
            return []

        ident = id(value)
        seen = self._visited.get(ident)

        if seen is not None:
            found_path = seen[0]
            if ident in self._active and self.options.has_circular_policy:
                self.cycles += 1
                replacement = self.options.circular_replacement(value, path, found_path)
                if replacement is value:
                    return placeholder(found_path)
                return self._convert(key, replacement, path)
            self.references += 1
            return placeholder(found_path)

        self._visited[ident] = (path, value)
        self._active.add(ident)
        try:
            if isinstance(value, dict):
                return self._mapping(value, path)
            return self._sequence(value, path)
        finally:
            self._active.discard(ident)

    def _mapping(self, value: dict, path: str) -> dict:
        result = {}
        seen_keys = set()
        for raw_key, item in value.items():
            key = json_key(raw_key)
            if self.allowed_keys is not None and key not in self.allowed_keys:
                continue
            if key in seen_keys:
                self._duplicate_key(raw_key, key, path)
            seen_keys.add(key)
            converted = self._walk(key, item, child_path(path, key))
            if converted is not _OMIT:
                result[key] = converted
        return result

    def _duplicate_key(self, raw_key: Any, key: str, path: str) -> None:
        """Record a key whose text repeats an earlier key of the same mapping."""
        self.fallbacks += 1
        getattr(logger, self._fallback_level)(
            "Mapping key collides with an earlier key, the later value wins",
            path=path,
            key=key,
            type=type(raw_key).__name__
        )

    def _sequence(self, value: Union[list, tuple], path: str) -> list:
        result = []
        for index, item in enumerate(value):
            converted = self._walk(index, item, child_path(path, index))
            result.append(None if converted is _OMIT else converted)
        return result

    def _fallback(self, key: Segment, kind: Optional[str], value: Any, path: str) -> Any:
        """Degrade a value the JSON writer cannot represent. Never raises."""
        if isinstance(value, Enum):
            return self._convert(key, value.value, path)

        self.fallbacks += 1
        if kind in ('undefined', 'function', 'symbol'):
            result = _OMIT
        elif kind == 'date':
            result = value.isoformat()
        elif kind == 'regex':
            result = value.pattern
        elif kind == 'error':
            result = error_message(value)
        else:
            try:
                result = str(value)
            except Exception:
                result = object.__repr__(value)

        getattr(logger, self._fallback_level)(
            "Lossy conversion of unsupported value",
            path=path,
            type=type(value).__name__,
            kind=kind or 'unknown',
            omitted=result is _OMIT
        )
        return result
