""" The :class:`Requester` is the principal entry point: one instance per
    link, owning the correlation registry and the subscription table for
    that link, so that any number of links can coexist in one process.
"""

import logging

from ..protocol import fields
from ..protocol.message import Request
from .dispatcher import Dispatcher
from .subscription import SubscriptionManager

logger = logging.getLogger(__name__)


class Requester:
    """ Issue operations against the node tree on the far side of *link*.

        Every operation returns immediately. Correlated operations
        (:func:`set`, :func:`remove`, :func:`list`, :func:`invoke`) return
        a :class:`dslink.requester.Pending` handle, and deliver their result
        to the optional *handler*; :func:`subscribe` returns a
        :class:`dslink.requester.Subscription` handle. Failures of any kind
        are delivered through the same handlers, not raised.

        Example::

            requester = Requester(link).open()
            requester.set('/values/settable', 'Hello world!', on_ack)
            requester.subscribe('/values/dynamic', on_value)
    """

    def __init__(self, link):

        self.link = link
        self.dispatcher = Dispatcher(link)
        self.subscriptions = SubscriptionManager(link)

        link.bind(self.dispatcher.rep_incoming,
                  self.subscriptions.update_incoming,
                  self._link_closed)


    def open(self):
        """ Open the underlying link; returns this :class:`Requester` for
            convenience.
        """

        self.link.open()
        return self


    def close(self):
        """ Close the underlying link. Anything still pending receives a
            synthesized failure, and all subscriptions end.
        """

        self.link.close()


    def __enter__(self):
        return self.open()


    def __exit__(self, *args):
        self.close()


    def set(self, path, value, handler=None):
        """ Set the value of the node at *path*. *value* is a
            :class:`dslink.Value`, or a plain Python value that will be
            wrapped as one. The *handler* receives a
            :class:`dslink.protocol.SetResponse`.
        """

        request = Request(fields.SET, path, value)
        return self.dispatcher.issue(request, handler)


    def remove(self, path, handler=None):
        """ Remove the value or attribute at *path*. The *handler* receives a
            :class:`dslink.protocol.SetResponse`.
        """

        request = Request(fields.REMOVE, path)
        return self.dispatcher.issue(request, handler)


    def list(self, path, handler=None):
        """ List the children of *path*. The *handler* receives one
            :class:`dslink.protocol.ListResponse` per batch: first the
            children present when the listing opened, then each subsequent
            change, until the remote closes the listing or the caller calls
            :func:`dslink.requester.Pending.close`.
        """

        request = Request(fields.LIST, path)
        return self.dispatcher.issue(request, handler)


    def invoke(self, path, parameters=None, handler=None):
        """ Invoke the action at *path*, with optional *parameters*: a
            sequence of positional values, or a mapping of named values. The
            *handler* receives a :class:`dslink.protocol.InvokeResponse`.
        """

        request = Request(fields.INVOKE, path, parameters)
        return self.dispatcher.issue(request, handler)


    def subscribe(self, path, handler):
        """ Subscribe *handler* to value updates for *path*. Subscribing to a
            path that is already subscribed replaces the handler.
        """

        return self.subscriptions.subscribe(path, handler)


    def unsubscribe(self, path):
        """ Stop updates for *path*. Returns False if *path* was not
            subscribed.
        """

        return self.subscriptions.unsubscribe(path)


    def _link_closed(self, reason):

        logger.info("link closed: %s", reason)
        self.dispatcher.teardown(reason)
        self.subscriptions.teardown()


# end of class Requester


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
