"""
Unit tests for encode option normalization.
"""

import pydantic
import pytest

from jsan.config import reload_settings
from jsan.exceptions import InvalidOptionsError
from jsan.options import UNSET, EncodeOptions

ALL_KINDS = frozenset({'date', 'regex', 'function', 'undefined', 'error', 'symbol'})


def test_defaults_disable_every_kind():
    options = EncodeOptions()
    assert options.enabled_kinds == frozenset()
    assert options.circular is UNSET
    assert not options.has_circular_policy


@pytest.mark.parametrize('flag, expected', [(True, ALL_KINDS), (False, frozenset())])
def test_booleans_switch_every_kind(flag, expected):
    assert EncodeOptions.from_argument(flag).enabled_kinds == expected


def test_none_uses_the_configured_default(monkeypatch):
    assert EncodeOptions.from_argument(None).enabled_kinds == frozenset()

    monkeypatch.setenv('JSAN_EXTENDED_TYPES', '1')
    reload_settings()
    assert EncodeOptions.from_argument(None).enabled_kinds == ALL_KINDS


def test_mappings_pick_kinds():
    options = EncodeOptions.from_argument({'date': True, 'circular': 'x'})
    assert options.enabled_kinds == frozenset({'date'})
    assert options.has_circular_policy


def test_instances_pass_through():
    options = EncodeOptions.all(True, circular=0)
    assert EncodeOptions.from_argument(options) is options


def test_options_are_frozen():
    with pytest.raises(pydantic.ValidationError):
        EncodeOptions().date = True


def test_circular_constant_and_callable():
    assert EncodeOptions(circular='∞').circular_replacement({}, '$.a', '$') == '∞'

    options = EncodeOptions(circular=lambda value, path, found: f'{found}->{path}')
    assert options.circular_replacement({}, '$.a', '$') == '$->$.a'


def test_none_is_a_circular_policy():
    assert EncodeOptions(circular=None).has_circular_policy


def test_invalid_mapping():
    with pytest.raises(InvalidOptionsError) as exc_info:
        EncodeOptions.from_argument({'date': 'maybe'})
    assert exc_info.value.context['errors']


def test_invalid_type():
    with pytest.raises(InvalidOptionsError):
        EncodeOptions.from_argument(3.5)


def test_unset_repr():
    assert repr(UNSET) == 'UNSET'
