"""
Encode options.

The fourth argument of :func:`jsan.encode` is normalized into an
:class:`EncodeOptions` instance: ``True``/``False`` switch every extended kind
on or off, a mapping or an ``EncodeOptions`` picks kinds individually and may
carry a circular policy, and ``None`` uses the process default.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config.settings import get_codec_config
from .exceptions import InvalidOptionsError
from .tags import KIND_TAGS


class _Unset:
    """Marker for an option that was not given. ``None`` is a valid policy."""

    def __repr__(self):
        return 'UNSET'

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return 'UNSET'


UNSET = _Unset()


class EncodeOptions(BaseModel):
    """Per-call encoder options."""

    date: bool = Field(False, description="Tag dates and datetimes")
    regex: bool = Field(False, description="Tag compiled regular expressions")
    function: bool = Field(False, description="Tag callables")
    undefined: bool = Field(False, description="Tag the undefined marker")
    error: bool = Field(False, description="Tag exceptions")
    symbol: bool = Field(False, description="Tag symbols")
    circular: Any = Field(
        UNSET,
        description="Replacement for true cycles: a constant, or a callable "
                    "(value, path, found_path) returning the replacement"
    )

    model_config = ConfigDict(frozen=True, extra='forbid', arbitrary_types_allowed=True)

    @classmethod
    def all(cls, enabled: bool, **kwargs: Any) -> 'EncodeOptions':
        """Options with every extended kind set to *enabled*."""
        return cls(**{kind: enabled for kind in KIND_TAGS}, **kwargs)

    @classmethod
    def from_argument(cls, options: Any) -> 'EncodeOptions':
        """
        Normalize the options argument of encode().

        Raises:
            InvalidOptionsError: If the argument has an unsupported type or
                names unknown options
        """
        if options is None:
            return cls.all(get_codec_config().extended_types)
        if isinstance(options, cls):
            return options
        if isinstance(options, bool):
            return cls.all(options)
        if isinstance(options, Mapping):
            try:
                return cls.model_validate(dict(options))
            except ValidationError as e:
                raise InvalidOptionsError(
                    f"Invalid encode options: {e.error_count()} error(s)",
                    option='options',
                    context={'errors': [err['msg'] for err in e.errors()]}
                ) from e
        raise InvalidOptionsError(
            f"Encode options must be a bool, a mapping or EncodeOptions, not {type(options).__name__}",
            option='options'
        )

    @property
    def enabled_kinds(self) -> frozenset:
        return frozenset(kind for kind in KIND_TAGS if getattr(self, kind))

    @property
    def has_circular_policy(self) -> bool:
        return self.circular is not UNSET

    def circular_replacement(self, value: Any, path: str, found_path: str) -> Any:
        """Value that replaces a true cycle under the circular policy."""
        if callable(self.circular):
            return self.circular(value, path, found_path)
        return self.circular
