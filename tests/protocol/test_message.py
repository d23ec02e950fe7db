import dslink
import pytest

from dslink import Value
from dslink.protocol import fields, subscription
from dslink.protocol.message import MalformedResponse, Request, ResponseError, SetResponse, join_path, validate_path


def test_paths():

    assert validate_path('/values/') == '/values'
    assert validate_path('/') == '/'
    assert join_path('/', 'a') == '/a'
    assert join_path('/values', 'a') == '/values/a'

    with pytest.raises(ValueError):
        validate_path('')

    with pytest.raises(ValueError):
        validate_path('values')

    with pytest.raises(TypeError):
        validate_path(None)


def test_request_payloads():

    request = Request(fields.SET, '/values/settable', 'Hello world!')
    assert request.payload == Value.string('Hello world!')
    assert request.id is None
    assert request.correlated

    request = Request(fields.SET, '/values/settable', None)
    assert request.payload == Value.null()

    request = Request(fields.INVOKE, '/values/action')
    assert request.payload is None

    request = Request(fields.INVOKE, '/values/action', [1, 'two'])
    assert request.payload == Value.sequence([1, 'two'])

    request = Request(fields.INVOKE, '/values/action', {'count': 3})
    assert request.payload == Value.map({'count': 3})

    with pytest.raises(TypeError):
        Request(fields.INVOKE, '/values/action', 5)

    with pytest.raises(ValueError):
        Request(fields.LIST, '/values', 'unexpected')

    with pytest.raises(ValueError):
        Request('GET', '/values')

    assert Request(fields.SUBSCRIBE, '/values/dynamic').correlated == False


def test_response_error():

    error = ResponseError.from_raw({'msg': 'denied', 'detail': 'read only'})
    assert error == ResponseError('denied', 'read only')
    assert str(error) == 'denied: read only'

    error = ResponseError('denied', None)
    assert error.detail == ''
    assert str(error) == 'denied'

    assert ResponseError.from_raw({}).message == 'unknown error'


def test_set_response():

    ack = SetResponse.decode('/values/settable', {fields.STREAM: fields.CLOSED})
    assert ack.ok
    assert ack.error is None
    assert ack.failure is None

    refused = SetResponse.decode('/values/settable', {fields.ERROR: {'msg': 'read only'}})
    assert refused.ok == False
    assert refused.has_error()

    with pytest.raises(ValueError):
        SetResponse('/x', error=ResponseError('a'), failure=RuntimeError('b'))


def test_subscription_decode():

    update = subscription.decode({'path': '/values/dynamic', 'value': 3, 'ts': 100})
    assert update.path == '/values/dynamic'
    assert update.value == Value.number(3)
    assert update.timestamp == 100.0

    update = subscription.decode({'path': '/values/dynamic', 'value': None})
    assert update.value.is_null
    assert update.timestamp > 0

    with pytest.raises(MalformedResponse):
        subscription.decode({'value': 1})

    with pytest.raises(MalformedResponse):
        subscription.decode({'path': '/values/dynamic'})

    with pytest.raises(MalformedResponse):
        subscription.decode({'path': '/values/dynamic', 'value': 1, 'ts': 'yesterday'})


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
