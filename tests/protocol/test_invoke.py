import dslink
import pytest

from dslink import Value
from dslink.protocol import fields
from dslink.protocol.invoke import InvokeError, InvokeResponse, Row, decode_table
from dslink.protocol.message import MalformedResponse


def test_single_row():

    raw = {fields.COLUMNS: [{'name': 'result', 'type': 'string'}], fields.UPDATES: [['ok']]}
    response = InvokeResponse.decode('/values/action', raw)

    assert response.ok
    assert response.has_error() == False

    table = response.table
    assert len(table) == 1
    assert table.columns == ('result',)
    assert table.rows[0] == Row([Value.string('ok')])
    assert table.rows[0].values[0] == Value.string('ok')


def test_wire_order():

    raw = {fields.UPDATES: [[1, 'x', None], [2, 'y', True], [3, 'z', False]]}
    table = decode_table(raw)

    assert [row[0].get_number() for row in table] == [1.0, 2.0, 3.0]
    assert [str(value) for value in table.rows[1]] == ['2', 'y', 'true']


def test_mapping_rows_follow_columns():

    raw = {fields.COLUMNS: ['b', 'a'], fields.UPDATES: [{'a': 1, 'b': 2}]}
    table = decode_table(raw)

    assert list(table.rows[0]) == [Value.number(2), Value.number(1)]

    with pytest.raises(MalformedResponse):
        decode_table({fields.UPDATES: [{'a': 1}]})


def test_empty_table():

    response = InvokeResponse.decode('/values/action', {fields.UPDATES: []})
    assert response.ok
    assert len(response.table) == 0

    response = InvokeResponse.decode('/values/action', {fields.COLUMNS: []})
    assert response.ok
    assert len(response.table) == 0


def test_error():

    raw = {fields.ERROR: {'msg': 'node not found', 'detail': '/non_existent_node'}}
    response = InvokeResponse.decode('/non_existent_node', raw)

    assert response.has_error()
    assert response.ok == False
    assert isinstance(response.error, InvokeError)
    assert response.error.message == 'node not found'
    assert response.error.detail == '/non_existent_node'

    with pytest.raises(RuntimeError):
        response.table


def test_error_without_detail():

    response = InvokeResponse.decode('/x', {fields.ERROR: {'type': 'permissionDenied'}})
    assert response.error.message == 'permissionDenied'
    assert response.error.detail == ''

    response = InvokeResponse.decode('/x', {fields.ERROR: 'plain text'})
    assert response.error.message == 'plain text'
    assert response.error.detail == ''


def test_error_flag_wins_over_rows():

    raw = {fields.ERROR: {'msg': 'refused'}, fields.UPDATES: [['ignored']]}
    response = InvokeResponse.decode('/values/action', raw)

    assert response.has_error()
    assert response._table is None


def test_malformed():

    with pytest.raises(MalformedResponse):
        InvokeResponse.decode('/values/action', {})

    with pytest.raises(MalformedResponse):
        InvokeResponse.decode('/values/action', {fields.UPDATES: 'ok'})

    with pytest.raises(MalformedResponse):
        InvokeResponse.decode('/values/action', {fields.UPDATES: [[object()]]})

    with pytest.raises(MalformedResponse):
        InvokeResponse.decode('/values/action', {fields.ERROR: 42})


def test_out_of_range_cells():

    huge = int('9' * 400)

    with pytest.raises(MalformedResponse):
        InvokeResponse.decode('/values/action', {fields.UPDATES: [[huge]]})

    raw = {fields.COLUMNS: ['value'], fields.UPDATES: [{'value': huge}]}

    with pytest.raises(MalformedResponse):
        InvokeResponse.decode('/values/action', raw)

    raw = {fields.COLUMNS: ['value'], fields.UPDATES: [{'value': object()}]}

    with pytest.raises(MalformedResponse):
        InvokeResponse.decode('/values/action', raw)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
