"""
Round-trip tests: decode(encode(value)) rebuilds the value graph.
"""

import io
import re
from datetime import date, datetime, timezone

import pytest

import jsan
from jsan import FunctionStub, Symbol, undefined


def round_trip(value, **kwargs):
    return jsan.decode(jsan.encode(value, **kwargs))


@pytest.mark.parametrize('value', [
    None,
    True,
    0,
    -12.5,
    'text',
    [],
    {},
    [1, 'two', None, [3.0, {'four': False}]],
    {'a': 1, 'b': 'string', 'c': [2, 3], 'd': None, 'e': {'f': {'g': []}}},
])
def test_plain_values(value):
    assert round_trip(value) == value


def test_equal_but_distinct_values_stay_distinct():
    value = {'a': {}, 'b': {}}
    result = round_trip(value)
    assert result == value
    assert result['a'] is not result['b']


class TestExtendedKinds:
    """Extended kinds survive encode then decode"""

    def test_dates_keep_their_instant(self):
        when = datetime(2021, 3, 4, 5, 6, 7, 8000, tzinfo=timezone.utc)
        assert round_trip({'when': when}, options=True)['when'] == when

    def test_plain_dates_become_midnight_utc(self):
        result = round_trip(date(2000, 1, 1), options=True)
        assert result == datetime(2000, 1, 1, tzinfo=timezone.utc)

    def test_regexes_keep_source_and_flags(self):
        pattern = re.compile(r'^a,b\d+$', re.IGNORECASE | re.DOTALL | re.VERBOSE)
        result = round_trip([pattern], options=True)[0]
        assert result.pattern == pattern.pattern
        assert result.flags == pattern.flags

    def test_undefined_is_present_and_not_none(self):
        result = round_trip({'u': undefined, 'n': None}, options=True)
        assert 'u' in result
        assert result['u'] is undefined
        assert result['n'] is None

    def test_errors_keep_their_message(self):
        result = round_trip({'e': KeyError('missing')}, options=True)
        assert isinstance(result['e'], Exception)
        assert str(result['e']) == 'missing'

    def test_functions_become_stubs(self):
        def handler(event, *, retries=3):
            return event

        result = round_trip({'f': handler}, options=True)
        assert isinstance(result['f'], FunctionStub)
        assert result['f'].source == 'def handler(event, *, retries=3): ...'
        assert result['f']('event') is None

    def test_stubs_re_encode_their_source(self):
        stub = FunctionStub('function () { /* ... */ }')
        assert round_trip(stub, options=True).source == stub.source

    def test_symbols_lose_identity(self):
        token = Symbol('id')
        result = round_trip({'a': token, 'b': token}, options=True)
        assert result['a'].description == 'id'
        assert result['b'].description == 'id'
        assert result['a'] is not result['b']
        assert result['a'] is not token


class TestGraphs:
    """Aliasing topology survives the round trip"""

    def test_self_cycle(self, self_cycle):
        result = round_trip(self_cycle)
        assert result['self'] is result

    def test_empty_tuples_stay_independent(self):
        result = round_trip({'a': (), 'b': ()})
        result['a'].append(1)
        assert result == {'a': [1], 'b': []}

    def test_shared_non_cyclic_reference(self):
        a = {}
        result = round_trip({'a': a, 'b': a, 'c': {}})
        assert result['a'] is result['b']
        assert result['a'] is not result['c']

    def test_circular_policy_precedence(self, cycle_and_alias):
        result = round_trip(cycle_and_alias, options={'circular': '[Circular]'})
        assert result['self'] == '[Circular]'
        assert result['c'] is result['b']

    def test_mutual_cycle_between_lists_and_mappings(self):
        parent = {'children': []}
        for name in ('x', 'y'):
            parent['children'].append({'name': name, 'parent': parent})
        parent['first'] = parent['children'][0]

        result = round_trip(parent)
        assert result['first'] is result['children'][0]
        for child in result['children']:
            assert child['parent'] is result

    def test_shared_tuples_decode_as_one_list(self):
        t = (1, 2)
        result = round_trip({'a': t, 'b': [t]})
        assert result['a'] == [1, 2]
        assert result['b'][0] is result['a']

    def test_deep_chain(self):
        root = node = {}
        for _ in range(100):
            node['next'] = {}
            node = node['next']
        node['next'] = root

        result = round_trip(root)
        node = result
        for _ in range(101):
            node = node['next']
        assert node is result


@pytest.mark.parametrize('key', [
    '"',
    '[',
    ']',
    '\\',
    '["key"]',
    'a"]["b',
    'Žč',
    '日本',
    'a.b',
    'with space',
    '',
    '0',
    '$',
    '\n\t',
])
def test_key_escaping(key):
    obj = {key: {}}
    obj[key]['self'] = obj[key]
    obj[key][key] = obj[key]

    for kwargs in ({}, {'ensure_ascii': False}, {'indent': 2}):
        result = round_trip(obj, **kwargs)
        assert list(result) == [key]
        assert result[key]['self'] is result[key]
        assert result[key][key] is result[key]


def test_repeated_calls_are_independent(self_cycle):
    first = jsan.encode(self_cycle)
    second = jsan.encode(self_cycle)
    assert first == second


def test_dump_and_load_use_file_objects():
    obj = {'items': [1, 2]}
    obj['again'] = obj['items']

    buffer = io.StringIO()
    jsan.dump(obj, buffer, indent=2)
    buffer.seek(0)
    result = jsan.load(buffer)

    assert result['again'] is result['items']


def test_dumps_and_loads_aliases():
    obj = {'u': undefined}
    assert jsan.loads(jsan.dumps(obj, options=True))['u'] is undefined
    assert jsan.parse(jsan.stringify([1])) == [1]
