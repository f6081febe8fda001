"""
Reference-resolving parser.

Decoding runs in two phases. The JSON reader builds the plain tree and, through
its object hook, replaces kind placeholders by their values and reference
placeholders by :class:`Reference` markers. Once the whole tree exists, every
marker is resolved against the finished tree and its slot is overwritten with
the live node, so references to ancestors and chains of references come out
right regardless of where they appear in the text.
"""

import json
from typing import Any, Union

from .exceptions import (
    InvalidOptionsError,
    ParseError,
    UnresolvedReferenceError,
    dangling_reference,
    reference_loop,
)
from .paths import Segment, child_path, is_path, parse_path
from .tags import MARKER, decode_value, is_placeholder
from .utils.logging import get_logger

logger = get_logger(__name__)

_RESERVED_KWARGS = ('object_hook', 'object_pairs_hook', 'cls')


class Reference:
    """An unresolved reference placeholder found while parsing."""

    __slots__ = ('path', 'target', 'state')

    PENDING, RESOLVING, RESOLVED = range(3)

    def __init__(self, path: str):
        self.path = path
        self.target = None
        self.state = Reference.PENDING

    def __repr__(self):
        return f'Reference({self.path!r})'


class Decoder:
    """
    Decodes one jsan document.

    Keyword arguments are passed to :func:`json.loads`; the object hooks are
    reserved for placeholder handling.
    """

    def __init__(self, **json_kwargs: Any):
        for name in _RESERVED_KWARGS:
            if name in json_kwargs:
                raise InvalidOptionsError(
                    f"'{name}' cannot be passed to decode()",
                    option=name
                )
        self.json_kwargs = json_kwargs
        self._root: Any = None
        self._pending: list[tuple[Union[dict, list], Segment, Reference]] = []

    def decode(self, text: Union[str, bytes, bytearray]) -> Any:
        """
        Parse *text* and rebuild the value graph.

        Raises:
            ParseError: If the text is not valid JSON
            DecodeError: If a placeholder cannot be decoded or resolved
        """
        try:
            root = json.loads(text, object_hook=self._object_hook, **self.json_kwargs)
        except json.JSONDecodeError as e:
            raise ParseError.from_json_error(e) from e
        except UnicodeDecodeError as e:
            raise ParseError.from_unicode_error(e, text) from e

        if isinstance(root, Reference):
            raise UnresolvedReferenceError(root.path, "the document root cannot be a reference")

        self._root = root
        self._collect(root)
        for holder, slot, reference in self._pending:
            holder[slot] = self._resolve(reference)

        logger.debug("Decoded value", references=len(self._pending))
        return root

    @staticmethod
    def _object_hook(obj: dict) -> Any:
        if not is_placeholder(obj):
            return obj
        payload = obj[MARKER]
        if is_path(payload):
            return Reference(payload)
        return decode_value(payload)

    def _collect(self, root: Any) -> None:
        """Record every reference slot of the parsed tree in document order."""
        stack = [root]
        while stack:
            node = stack.pop()
            if isinstance(node, dict):
                items = list(node.items())
            elif isinstance(node, list):
                items = list(enumerate(node))
            else:
                continue

            children = []
            for slot, child in items:
                if isinstance(child, Reference):
                    self._pending.append((node, slot, child))
                elif isinstance(child, (dict, list)):
                    children.append(child)
            stack.extend(reversed(children))

    def _resolve(self, reference: Reference) -> Any:
        if reference.state == Reference.RESOLVED:
            return reference.target
        if reference.state == Reference.RESOLVING:
            raise reference_loop(reference.path)

        reference.state = Reference.RESOLVING
        node = self._root
        for segment in parse_path(reference.path):
            node = self._step(node, segment, reference.path)
            if isinstance(node, Reference):
                node = self._resolve(node)

        reference.target = node
        reference.state = Reference.RESOLVED
        return node

    @staticmethod
    def _step(node: Any, segment: Segment, path: str) -> Any:
        if isinstance(node, dict):
            key = segment if isinstance(segment, str) else str(segment)
            if key not in node:
                raise dangling_reference(path, child_path('', segment))
            return node[key]

        if isinstance(node, list):
            if isinstance(segment, str):
                if not (segment.isascii() and segment.isdigit()):
                    raise UnresolvedReferenceError(path, f"key {segment!r} used on a list")
                segment = int(segment)
            if segment >= len(node):
                raise dangling_reference(path, child_path('', segment))
            return node[segment]

        raise UnresolvedReferenceError(
            path,
            f"segment {child_path('', segment)} steps into a {type(node).__name__}"
        )
