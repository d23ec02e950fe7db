""" Decoding for subscription updates. Unlike responses, updates are not
    correlated by request id; they are keyed by the node path they describe.
"""

import time as timemodule

from ..value import Value
from . import fields
from .message import MalformedResponse


class SubscriptionUpdate:
    """ A new value for a subscribed *path*. The *timestamp* is the UNIX
        epoch time the remote attached to the value, or the local receipt
        time if the remote did not supply one; successive updates for a
        path are delivered in the order the link received them.
    """

    __slots__ = ('path', 'value', 'timestamp')

    def __init__(self, path, value, timestamp=None):

        if timestamp is None:
            timestamp = timemodule.time()

        self.path = path
        self.value = Value.wrap(value)
        self.timestamp = timestamp


    def __repr__(self):
        return "SubscriptionUpdate(%s, %s, %s)" % (repr(self.path), repr(self.value), repr(self.timestamp))



def path_of(raw):
    """ Return the path a raw update is keyed by.
    """

    try:
        path = raw[fields.PATH]
    except (KeyError, TypeError):
        raise MalformedResponse('subscription update has no path: ' + repr(raw))

    if not isinstance(path, str) or path == '':
        raise MalformedResponse('invalid subscription update path: ' + repr(path))

    return path


def decode(raw):
    """ Decode a raw update mapping, with 'path', 'value' and an optional
        'ts' timestamp, into a :class:`SubscriptionUpdate`.
    """

    path = path_of(raw)

    try:
        value = raw[fields.VALUE]
    except KeyError:
        raise MalformedResponse('subscription update for %s has no value' % (path))

    timestamp = raw.get(fields.TIMESTAMP)

    if timestamp is not None:
        try:
            timestamp = float(timestamp)
        except (TypeError, ValueError):
            raise MalformedResponse("invalid timestamp for %s: %s" % (path, repr(timestamp)))

    try:
        return SubscriptionUpdate(path, value, timestamp)
    except (TypeError, ValueError) as e:
        raise MalformedResponse("undecodable value for %s: %s" % (path, str(e)))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
