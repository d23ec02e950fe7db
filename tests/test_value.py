import dslink
import pytest

from dslink import Kind, Value


def test_constructors():

    assert Value.null().kind is Kind.NULL
    assert Value.boolean(True).kind is Kind.BOOL
    assert Value.number(3).kind is Kind.NUMBER
    assert Value.string('Hello world!').kind is Kind.STRING
    assert Value.map({'a': 1}).kind is Kind.MAP
    assert Value.sequence([1, 'two']).kind is Kind.SEQUENCE

    with pytest.raises(TypeError):
        Value.boolean(1)

    with pytest.raises(TypeError):
        Value.number(True)

    with pytest.raises(TypeError):
        Value.number('5')

    with pytest.raises(TypeError):
        Value.string(5)

    with pytest.raises(TypeError):
        Value.map({1: 'one'})


def test_wrap():

    for native, kind in ((None, Kind.NULL), (False, Kind.BOOL), (44, Kind.NUMBER),
                         (35.5, Kind.NUMBER), ('string', Kind.STRING),
                         ({'one': 1}, Kind.MAP), ([1, 2, 3], Kind.SEQUENCE),
                         ((1, 2), Kind.SEQUENCE)):
        value = Value.wrap(native)
        assert value.kind is kind

    existing = Value.string('same')
    assert Value.wrap(existing) is existing

    with pytest.raises(TypeError):
        Value.wrap(object())

    nested = Value.wrap({'list': [1, None, 'c'], 'flag': True})
    assert nested.get_map()['list'].get_sequence()[2] == Value.string('c')
    assert nested.to_native() == {'list': [1.0, None, 'c'], 'flag': True}


def test_accessors_do_not_coerce():

    number = Value.number(7)
    assert number.get_number() == 7.0
    assert isinstance(number.get_number(), float)

    with pytest.raises(TypeError):
        Value.string('7').get_number()

    with pytest.raises(TypeError):
        Value.boolean(True).get_number()

    with pytest.raises(TypeError):
        number.get_string()

    with pytest.raises(TypeError):
        Value.null().get_bool()

    assert Value.null().is_null
    assert not number.is_null


def test_equality():

    assert Value.number(1) == Value.number(1.0)
    assert Value.number(1) != Value.boolean(True)
    assert Value.string('ok') == Value.wrap('ok')
    assert Value.map({'a': 1, 'b': 2}) == Value.map({'b': 2, 'a': 1})
    assert Value.sequence([1, 2]) != Value.sequence([2, 1])
    assert Value.null() == Value.null()
    assert Value.string('1') != Value.number(1)

    # Equal values hash equally, including maps built in different orders.

    assert hash(Value.map({'a': 1, 'b': 2})) == hash(Value.map({'b': 2, 'a': 1}))
    assert len(set((Value.number(2), Value.number(2.0), Value.string('2')))) == 2


def test_immutable():

    value = Value.string('fixed')

    with pytest.raises(AttributeError):
        value.kind = Kind.NUMBER

    with pytest.raises(AttributeError):
        del value.kind

    source = {'a': [1]}
    value = Value.wrap(source)
    source['a'].append(2)
    source['b'] = 3

    assert value.to_native() == {'a': [1.0]}

    copied = value.get_map()
    copied['c'] = Value.null()
    assert 'c' not in value.get_map()


def test_string_representation():

    assert str(Value.string('ok')) == 'ok'
    assert str(Value.number(3)) == '3'
    assert str(Value.number(2.5)) == '2.5'
    assert str(Value.boolean(False)) == 'false'
    assert str(Value.null()) == 'null'

    one = Value.map({'b': 1, 'a': [True, None]})
    two = Value.map({'a': [True, None], 'b': 1})
    assert str(one) == str(two)
    assert str(one).index('"a"') < str(one).index('"b"')

    assert repr(Value.string('ok')) == 'Value.STRING(ok)'


def test_nested_numbers_render_like_bare_numbers():

    assert str(Value.sequence([1, 2.5, -3])) == '[1,2.5,-3]'
    assert str(Value.map({'count': 1})) == '{"count":1}'
    assert str(Value.map({'count': 1}).get_map()['count']) == '1'


def test_number_out_of_range():

    with pytest.raises(ValueError):
        Value.number(int('9' * 400))

    with pytest.raises(ValueError):
        Value.wrap([int('9' * 400)])


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
