"""
Path codec for jsan references.

A path addresses a node relative to the encoding root. It starts with ``$``
and continues with one segment per step:

* ``.name`` for mapping keys that are bare identifiers,
* ``["text"]`` for any other mapping key, quoted and escaped as a JSON string,
* ``[3]`` for sequence indices.

Because the quoted form is a JSON string, the path survives a second round of
escaping when it is written inside the JSON document and is unescaped again by
the JSON reader before it reaches :func:`parse_path`.
"""

import json
import re
from json.decoder import scanstring
from typing import Union

from .exceptions import MalformedPathError

ROOT = '$'

Segment = Union[str, int]

_IDENTIFIER = re.compile(r'[A-Za-z_$][A-Za-z0-9_$]*')
_INDEX = re.compile(r'[0-9]+')


def is_identifier(key: str) -> bool:
    """Return True if *key* can be written as a ``.name`` segment."""
    return _IDENTIFIER.fullmatch(key) is not None


def quote_key(key: str) -> str:
    """Escape *key* as a JSON string literal, keeping non-ASCII characters."""
    return json.dumps(key, ensure_ascii=False)


def child_path(path: str, key: Segment) -> str:
    """
    Extend *path* by one segment.

    Args:
        path: Path of the parent node
        key: Mapping key (text) or sequence index (int)

    Returns:
        Path of the child node
    """
    if isinstance(key, int):
        return f'{path}[{key}]'
    if is_identifier(key):
        return f'{path}.{key}'
    return f'{path}[{quote_key(key)}]'


def is_path(payload: str) -> bool:
    """Return True if a placeholder payload is a reference path."""
    return payload[:1] in ('$', '.', '[')


def parse_path(path: str) -> list[Segment]:
    """
    Split a path into its segments.

    A path starting with ``.`` or ``[`` is read as relative to the root.

    Args:
        path: Path text as found in a placeholder

    Returns:
        List of segments: text for mapping keys, int for indices

    Raises:
        MalformedPathError: If the path does not follow the path grammar
    """
    segments: list[Segment] = []
    pos = 1 if path.startswith(ROOT) else 0
    end = len(path)

    while pos < end:
        char = path[pos]
        if char == '.':
            match = _IDENTIFIER.match(path, pos + 1)
            if match is None:
                raise MalformedPathError(path, pos, "expected an identifier after '.'")
            segments.append(match.group())
            pos = match.end()
        elif char == '[':
            pos += 1
            if path.startswith('"', pos):
                try:
                    key, pos = scanstring(path, pos + 1)
                except json.JSONDecodeError as e:
                    raise MalformedPathError(path, pos, f"bad quoted key ({e.msg})") from e
                segments.append(key)
            else:
                match = _INDEX.match(path, pos)
                if match is None:
                    raise MalformedPathError(path, pos, "expected an index or a quoted key")
                segments.append(int(match.group()))
                pos = match.end()
            if not path.startswith(']', pos):
                raise MalformedPathError(path, pos, "expected ']'")
            pos += 1
        else:
            raise MalformedPathError(path, pos, f"unexpected character {char!r}")

    return segments


def format_path(segments: list[Segment]) -> str:
    """Build the path text for a list of segments."""
    path = ROOT
    for segment in segments:
        path = child_path(path, segment)
    return path
