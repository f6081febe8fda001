"""Values for the extended kinds Python has no builtin type for.

``undefined`` is the absence marker: a value that is present but holds
nothing, distinct from ``None``. ``Symbol`` is a unique token whose identity
is never equal to any other token, even one with the same description.
``FunctionStub`` is what a decoded callable turns into.
"""

from typing import Any, Optional


class Undefined:
    """The absence marker. There is exactly one instance, ``undefined``."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'undefined'

    def __bool__(self):
        return False

    def __reduce__(self):
        return (Undefined, ())


undefined = Undefined()


class Symbol:
    """A unique symbolic token with an optional description."""

    __slots__ = ('description',)

    def __init__(self, description: Optional[str] = None):
        self.description = description

    def __repr__(self):
        return 'Symbol({})'.format(self.description or '')


class FunctionStub:
    """A stand-in for a callable that was encoded as text.

    Calling it does nothing and returns ``None``; ``source`` keeps the text
    the callable was encoded with.
    """

    __slots__ = ('source',)

    def __init__(self, source: str = ''):
        self.source = source

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        return None

    def __repr__(self):
        return '<FunctionStub {!r}>'.format(self.source)
