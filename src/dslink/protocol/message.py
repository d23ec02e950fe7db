""" A class representation of requester messages: the outgoing
    :class:`Request`, the structured :class:`ResponseError` a remote may
    return in place of a result, and the acknowledgement delivered for set
    and remove requests.
"""

from ..value import Value, Kind
from . import fields


class ProtocolError(Exception):
    """ Base class for a response the requester could not interpret. These
        are never raised out of the public requester interface; they are
        delivered as the *failure* of a response.
    """


class MalformedResponse(ProtocolError):
    """ The response did not carry the shape expected for the request kind.
    """



def validate_path(path):
    """ Return *path* if it is a usable node path: a non-empty string with a
        leading slash. Trailing slashes are removed, except for the root.
    """

    if not isinstance(path, str):
        raise TypeError('path must be a string, not ' + type(path).__name__)

    if path == '':
        raise ValueError('path must not be empty')

    if path[0] != '/':
        raise ValueError('path must begin with /: ' + repr(path))

    if len(path) > 1:
        path = path.rstrip('/')

    return path


def join_path(parent, child):
    """ Return the path of *child* beneath *parent*.
    """

    child = child.strip('/')

    if parent == '/':
        return '/' + child

    return parent + '/' + child



class Request:
    """ A :class:`Request` is the structured form of an operation issued
        against the remote node tree. The fields are the request *kind*
        (one of the constants in :mod:`fields`), the node *path*, a
        kind-specific *payload*, and an identification number unique to
        this correspondence.

        Requests are generally created without an id; the requester assigns
        one when the request is issued, since uniqueness is only meaningful
        among the requests outstanding on a single link.

        :ivar payload: a :class:`Value` for SET, the parameters (or None)
            for INVOKE, None for every other kind.
    """

    valid_types = set((fields.SET, fields.REMOVE, fields.LIST, fields.INVOKE,
                       fields.SUBSCRIBE, fields.UNSUBSCRIBE, fields.CLOSE))

    def __init__(self, kind, path, payload=None, id=None):

        if kind in self.valid_types:
            pass
        else:
            raise ValueError('invalid request type: ' + repr(kind))

        path = validate_path(path)

        if kind == fields.SET:
            payload = Value.wrap(payload)

        elif kind == fields.INVOKE:
            if payload is not None:
                payload = Value.wrap(payload)
                if payload.kind is Kind.NULL:
                    payload = None
                elif payload.kind not in (Kind.SEQUENCE, Kind.MAP):
                    raise TypeError('invoke parameters must be a sequence or a map')

        elif payload is not None:
            raise ValueError("%s requests do not carry a payload" % (kind))

        self.id = id
        self.kind = kind
        self.path = path
        self.payload = payload


    @property
    def correlated(self):
        """ True if the remote is expected to answer this request with one
            or more responses carrying the same id.
        """

        return self.kind in fields.CORRELATED


    def __repr__(self):
        return "Request(%s, %s, %s, id=%s)" % (self.kind, repr(self.path), repr(self.payload), repr(self.id))


# end of class Request



class ResponseError:
    """ The structured error a remote returns when it refuses a request. The
        *message* is human-readable; the *detail*, which may be empty, is
        whatever additional context the remote chose to supply.
    """

    def __init__(self, message, detail=''):

        if detail is None:
            detail = ''

        self.message = str(message)
        self.detail = str(detail)


    @classmethod
    def from_raw(cls, raw):
        """ Interpret the error block of a raw response. A bare string is
            taken as the message; a mapping supplies 'msg' and 'detail',
            with the error 'type' standing in for a missing message.
        """

        if isinstance(raw, str):
            return cls(raw)

        if not isinstance(raw, dict):
            raise MalformedResponse('error block is neither a string nor a mapping: ' + repr(raw))

        message = raw.get(fields.ERROR_MESSAGE)
        detail = raw.get(fields.ERROR_DETAIL)

        if message is None or message == '':
            message = raw.get(fields.ERROR_TYPE)
        if message is None or message == '':
            message = 'unknown error'

        return cls(message, detail)


    def __eq__(self, other):
        if not isinstance(other, ResponseError):
            return NotImplemented
        return self.message == other.message and self.detail == other.detail


    def __hash__(self):
        return hash((self.message, self.detail))


    def __repr__(self):
        return "%s(%s, %s)" % (type(self).__name__, repr(self.message), repr(self.detail))


    def __str__(self):
        if self.detail:
            return self.message + ': ' + self.detail
        return self.message


# end of class ResponseError



def error_of(raw):
    """ Return the :class:`ResponseError` carried by the raw response, or
        None if the response does not report an error.
    """

    error = raw.get(fields.ERROR)

    if error is None or error == '' or error == {}:
        return None

    return ResponseError.from_raw(error)


def stream_closed(raw):
    """ Return True unless the raw response explicitly leaves its stream
        open.
    """

    return raw.get(fields.STREAM, fields.CLOSED) != fields.OPEN



class Response:
    """ Common base for the decoded results delivered to request handlers.
        A response either succeeded, or carries exactly one of:

        :ivar error: the :class:`ResponseError` reported by the remote.
        :ivar failure: an exception describing why no usable response
            exists; a :class:`ProtocolError` if the response could not be
            interpreted, a :class:`dslink.transport.TransportError` if the
            link failed first.
    """

    def __init__(self, path, error=None, failure=None):

        if error is not None and failure is not None:
            raise ValueError('a response carries an error or a failure, not both')

        self.path = path
        self.error = error
        self.failure = failure


    @property
    def ok(self):
        return self.error is None and self.failure is None


    def has_error(self):
        return self.error is not None


    def __repr__(self):
        if self.failure is not None:
            status = 'failure=' + repr(self.failure)
        elif self.error is not None:
            status = 'error=' + repr(self.error)
        else:
            status = 'ok'

        return "%s(%s, %s)" % (type(self).__name__, repr(self.path), status)


# end of class Response



class SetResponse(Response):
    """ The acknowledgement for a set (or remove) request. There is no
        payload beyond the presence or absence of an error.
    """

    @classmethod
    def decode(cls, path, raw):
        return cls(path, error_of(raw))


# end of class SetResponse


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
