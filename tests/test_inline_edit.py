import pytest

from jsonvista.inline_edit import CoercionResult, coerce_primitive, compose_child_path
from jsonvista.models import NodeRow


class TestCoerceNumber:

    def test_empty_input_requires_number(self):
        result = coerce_primitive('number', '')
        assert result == CoercionResult(ok=False, error='Number required')

    def test_whitespace_only_requires_number(self):
        assert coerce_primitive('number', '   ').error == 'Number required'

    def test_integer(self):
        result = coerce_primitive('number', '42')
        assert result.ok
        assert result.value == 42
        assert type(result.value) is int

    def test_trims_before_parsing(self):
        assert coerce_primitive('number', '  -7 ').value == -7

    @pytest.mark.parametrize('text, expected', [
        ('3.5', 3.5),
        ('-0.25', -0.25),
        ('.5', 0.5),
        ('1e3', 1000),
        ('2.0', 2),
        ('0x1F', 31),
        ('0b101', 5),
    ])
    def test_numeric_forms(self, text, expected):
        result = coerce_primitive('number', text)
        assert result.ok
        assert result.value == expected

    def test_integral_float_becomes_int(self):
        assert type(coerce_primitive('number', '1e3').value) is int

    def test_fraction_stays_float(self):
        assert type(coerce_primitive('number', '3.5').value) is float

    @pytest.mark.parametrize('text', [
        'abc', '12abc', '1_000', 'NaN', 'Infinity', '-inf', '1e999', '--1', '0x',
        '1' * 5000, '\u0663', '1.\u0665',
    ])
    def test_rejects_non_numeric_and_infinite(self, text):
        result = coerce_primitive('number', text)
        assert not result.ok
        assert result.error == 'Invalid number'

    def test_never_produces_bool(self):
        result = coerce_primitive('number', '1')
        assert not isinstance(result.value, bool)


class TestCoerceBoolean:

    @pytest.mark.parametrize('text, expected', [
        ('true', True), ('TRUE', True), (' True ', True),
        ('false', False), ('FaLsE', False),
    ])
    def test_case_insensitive(self, text, expected):
        result = coerce_primitive('boolean', text)
        assert result.ok
        assert result.value is expected

    @pytest.mark.parametrize('text', ['yes', '1', '', 'truthy'])
    def test_rejects_other_text(self, text):
        result = coerce_primitive('boolean', text)
        assert not result.ok
        assert result.error == 'Use true or false'


class TestCoerceNull:

    @pytest.mark.parametrize('text', ['', '   ', 'null', 'NULL', ' Null '])
    def test_accepts_null_or_empty(self, text):
        result = coerce_primitive('null', text)
        assert result.ok
        assert result.value is None

    def test_rejects_other_text(self):
        result = coerce_primitive('null', 'x')
        assert not result.ok
        assert result.error == 'Use null'


class TestCoerceString:

    def test_passes_raw_input_through(self):
        assert coerce_primitive('string', '  spaced  ').value == '  spaced  '

    def test_empty_string_is_valid(self):
        result = coerce_primitive('string', '')
        assert result.ok and result.value == ''


@pytest.mark.parametrize('declared', ['object', 'array', 'date', ''])
def test_unknown_types_are_refused(declared):
    result = coerce_primitive(declared, 'anything')
    assert not result.ok
    assert result.error == 'Unsupported type'


@pytest.mark.parametrize('declared, text, expected_type', [
    ('string', 'hello', str),
    ('number', '12', int),
    ('number', '1.5', float),
    ('boolean', 'false', bool),
    ('null', 'null', type(None)),
])
def test_runtime_type_matches_declared_type(declared, text, expected_type):
    result = coerce_primitive(declared, text)
    assert result.ok
    assert type(result.value) is expected_type


class TestComposeChildPath:

    def test_missing_parent_is_refused(self):
        assert compose_child_path(None, {'key': 'a'}, 0) is None

    def test_empty_parent_is_refused(self):
        assert compose_child_path([], {'key': 'a'}, 0) is None

    def test_object_field_appends_key(self):
        assert compose_child_path(['a'], {'key': 'b'}, 0) == ['a', 'b']

    def test_array_element_appends_index(self):
        assert compose_child_path(['a'], {'key': None}, 2) == ['a', 2]

    def test_explicit_index_wins(self):
        assert compose_child_path(['a'], {'key': None}, 2, explicit_index=5) == ['a', 5]

    def test_explicit_zero_index_is_used(self):
        assert compose_child_path(['a'], {'key': None}, 3, explicit_index=0) == ['a', 0]

    def test_key_wins_over_index(self):
        assert compose_child_path(['a'], {'key': 'b'}, 0, explicit_index=4) == ['a', 'b']

    @pytest.mark.parametrize('index', [-1, 1.5, True, None])
    def test_invalid_index_is_refused(self, index):
        assert compose_child_path(['a'], {'key': None}, index) is None

    def test_accepts_node_rows(self):
        row = NodeRow(key='name', type='string', value='x')
        assert compose_child_path(['items', 0], row, 1) == ['items', 0, 'name']

    def test_does_not_alias_parent(self):
        parent = ['a']
        path = compose_child_path(parent, {'key': 'b'}, 0)
        path.append('c')
        assert parent == ['a']
