""" Subscriptions are long-lived, path-keyed streams of value updates. They
    share the link with correlated requests, but are delivered on their own
    threads: one per subscribed path, so that a slow handler for one path
    neither reorders its own updates nor delays anything else.
"""

import logging
import threading

from ..protocol import fields
from ..protocol import subscription
from ..protocol.message import ProtocolError, Request, validate_path
from ..transport.base import TransportError
from .updater import Updater

logger = logging.getLogger(__name__)


class Subscription:
    """ The cancellable stream handle for a subscribed *path*. The *handler*
        is invoked once per :class:`dslink.protocol.SubscriptionUpdate`, in
        arrival order, until :func:`cancel` is called or the link closes.

        :ivar active: True until the subscription is cancelled.
        :ivar live: True if a subscribe request for this path has been
            handed to the link.
    """

    def __init__(self, manager, path, handler):

        self.manager = manager
        self.path = path
        self.handler = handler
        self.active = True
        self.live = False
        self.updater = Updater(self._deliver, name='dslink.subscription:' + path)


    def cancel(self):
        """ Equivalent to calling :func:`SubscriptionManager.unsubscribe` for
            this path, but only if this handle is still the current one.
        """

        return self.manager._cancel(self)


    def _deliver(self, update):

        # The active flag is checked immediately before each delivery. Once
        # cancelled, at most the update already being handled gets through.

        if self.active == False:
            return

        self.handler(update)


    def _stop(self):
        self.active = False
        self.updater.stop()


    def __repr__(self):
        if self.active:
            state = 'active'
        else:
            state = 'cancelled'
        return "Subscription(%s, %s)" % (repr(self.path), state)


# end of class Subscription



class SubscriptionManager:
    """ Track the subscribed paths for a single link. Each path is either
        unsubscribed (absent from the table) or subscribed, with exactly one
        current handler. The table is guarded by a lock, as subscriptions
        can be changed from any thread while updates arrive on the link's
        receive thread.
    """

    def __init__(self, link):

        self.link = link
        self.closed = False

        self._lock = threading.Lock()
        self._subscriptions = dict()

        # Held across a table change and the request that goes with it, so
        # the link sees subscribe and unsubscribe requests for a path in the
        # same order the table changed. Always acquired before _lock.

        self._send_lock = threading.Lock()


    def __contains__(self, path):
        with self._lock:
            return path in self._subscriptions


    def __len__(self):
        with self._lock:
            return len(self._subscriptions)


    def subscribe(self, path, handler):
        """ Subscribe *handler* to updates for *path*, returning the
            :class:`Subscription` handle. If *path* is already subscribed the
            handler is replaced, and no new subscribe request is sent unless
            the earlier one never reached the link.
        """

        if not callable(handler):
            raise TypeError('handler must be callable')

        path = validate_path(path)

        with self._send_lock:
            return self._subscribe(path, handler)


    def _subscribe(self, path, handler):

        with self._lock:
            if self.closed == True:
                logger.warning("subscribe to %s ignored, link is closed", path)
                stale = Subscription(self, path, handler)
                stale._stop()
                return stale

            current = self._subscriptions.get(path)

            if current is None:
                current = Subscription(self, path, handler)
                self._subscriptions[path] = current
            else:
                current.handler = handler

            if current.live == True:
                return current

            current.live = True

        try:
            self.link.send(Request(fields.SUBSCRIBE, path))
        except TransportError as e:
            logger.warning("subscribe to %s failed: %s", path, e)
            current.live = False

        return current


    def unsubscribe(self, path):
        """ Stop delivering updates for *path*. Returns True if the path was
            subscribed; unsubscribing a path that is not subscribed is a
            no-op that returns False.
        """

        path = validate_path(path)

        with self._send_lock:
            with self._lock:
                current = self._subscriptions.pop(path, None)
                closed = self.closed

            if current is None:
                return False

            return self._release(current, closed)


    def _cancel(self, subscription):

        with self._send_lock:
            with self._lock:
                current = self._subscriptions.get(subscription.path)
                if current is not subscription:
                    return False
                del self._subscriptions[subscription.path]
                closed = self.closed

            return self._release(subscription, closed)


    def _release(self, subscription, closed):

        subscription._stop()

        if subscription.live == True and closed == False:
            try:
                self.link.send(Request(fields.UNSUBSCRIBE, subscription.path))
            except TransportError as e:
                logger.warning("unsubscribe from %s failed: %s", subscription.path, e)

        subscription.live = False
        return True


    def update_incoming(self, raw):
        """ Entry point for the link: decode a raw subscription update and
            queue it for the handler of the matching path, if any.
        """

        try:
            update = subscription.decode(raw)
            path = validate_path(update.path)
        except (ProtocolError, TypeError, ValueError, OverflowError) as e:
            logger.warning("subscription update ignored: %s", e)
            return

        update.path = path

        with self._lock:
            current = self._subscriptions.get(path)

            if current is not None:
                current.updater.put(update)
                return

        logger.debug("update for %s ignored, not subscribed", path)


    def teardown(self):
        """ The link is gone: every path reverts to unsubscribed, without
            sending any requests.
        """

        with self._lock:
            self.closed = True
            subscriptions = list(self._subscriptions.values())
            self._subscriptions.clear()

        for current in subscriptions:
            current._stop()
            current.live = False


# end of class SubscriptionManager


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
