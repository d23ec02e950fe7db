""" The dispatcher issues correlated requests (set, remove, list, invoke)
    through a link, and turns each matching response into a typed result
    delivered to the caller's handler.
"""

import logging
import threading

from .. import config
from ..protocol import fields
from ..protocol.invoke import InvokeResponse
from ..protocol.listing import ListResponse
from ..protocol.message import ProtocolError, MalformedResponse, Request, SetResponse
from ..transport.base import LinkClosed, TransportError
from .registry import Registry
from .updater import Updater

logger = logging.getLogger(__name__)


decoders = {
    fields.SET: SetResponse,
    fields.REMOVE: SetResponse,
    fields.LIST: ListResponse,
    fields.INVOKE: InvokeResponse,
}


def decode(request, raw):
    """ Decode the *raw* response to *request* into the result type implied
        by the request kind. Raises :class:`ProtocolError` if the response
        cannot be interpreted.
    """

    if not isinstance(raw, dict):
        raise MalformedResponse('response is not a mapping: ' + repr(raw))

    return decoders[request.kind].decode(request.path, raw)


def failed(request, failure):
    """ Synthesize the terminal result for *request* when no usable response
        exists: the link failed, or the response was malformed.
    """

    return decoders[request.kind](request.path, failure=failure)



class Pending:
    """ The one-shot handle returned when a request is issued. A caller can
        ignore it and rely on the handler, or use :func:`poll` and
        :func:`wait` to pick up the result directly. For a listing, each
        delivered batch replaces :attr:`response`, and :func:`close` ends
        the listing.

        :ivar response: The most recently delivered result, if any.
    """

    timeout = config.wait_timeout

    def __init__(self, dispatcher, request):

        self.dispatcher = dispatcher
        self.request = request
        self.response = None
        self.rep_event = threading.Event()


    @property
    def id(self):
        return self.request.id


    def _complete(self, response):
        """ Locally store the response and signal any callers blocking via
            :func:`wait` to proceed.
        """

        self.response = response
        self.rep_event.set()


    def poll(self):
        """ Return True if a result has been delivered, otherwise False.
        """

        return self.rep_event.is_set()


    def wait(self, timeout=-1):
        """ Block until a result has been delivered, and return it. The
            return value is None if nothing arrived within *timeout*
            seconds; the default timeout is :attr:`timeout`, and a timeout
            of None blocks indefinitely.
        """

        if timeout == -1:
            timeout = self.timeout

        self.rep_event.wait(timeout)
        return self.response


    def close(self):
        """ Stop an open listing. Returns True if the listing was still
            open; no further batches are delivered after this call returns,
            other than one that was already being delivered.
        """

        return self.dispatcher.close_stream(self)


    def __repr__(self):
        return "Pending(%r, %r)" % (self.request, self.response)


# end of class Pending



class Dispatcher:
    """ Issue requests via a :class:`dslink.transport.Link` and correlate
        the responses. Results are handed to the callers' handlers on a
        single background thread, so the handler is never invoked from
        within :func:`issue`, and the batches of a listing arrive in order.
    """

    def __init__(self, link, registry=None):

        if registry is None:
            registry = Registry()

        self.link = link
        self.registry = registry
        self.closed = False

        self._lock = threading.Lock()
        self._updater = Updater(self._deliver, name='dslink.dispatch')


    def issue(self, request, handler=None):
        """ Issue *request*, a :class:`dslink.protocol.Request` of a
            correlated kind, and arrange for *handler* to receive the decoded
            result. Returns a :class:`Pending` handle. Errors of any sort,
            including an unusable link, are delivered to the handler rather
            than raised here.
        """

        if handler is not None and not callable(handler):
            raise TypeError('handler must be callable')

        if not request.correlated:
            raise ValueError("%s requests are not correlated" % (request.kind))

        pending = Pending(self, request)
        entry = self.registry.register(request, handler, pending)

        if self.closed or not self.link.is_open:
            self._fail(entry.id, LinkClosed("%s %s: link is closed" % (request.kind, request.path)))
            return pending

        logger.debug("issuing %r", request)

        try:
            self.link.send(request)
        except TransportError as e:
            logger.warning("%s %s: send failed: %s", request.kind, request.path, e)
            self._fail(entry.id, e)

        return pending


    def close_stream(self, pending):
        """ Close the open listing behind *pending*. Returns False if it was
            no longer open. Only listings can be closed this way; every other
            request runs to completion.
        """

        if pending.request.kind not in fields.STREAMING:
            return False

        entry = self.registry.cancel(pending.id)

        if entry is None:
            return False

        if self.closed == False and self.link.is_open:
            request = Request(fields.CLOSE, entry.request.path, id=entry.id)
            try:
                self.link.send(request)
            except TransportError as e:
                logger.warning("%s: close failed: %s", entry.request.path, e)

        return True


    def rep_incoming(self, raw):
        """ Entry point for the link: correlate a raw response with its
            pending request, decode it, and queue the result for delivery.
        """

        try:
            request_id = raw[fields.RID]
        except (KeyError, TypeError):
            logger.warning("response without a request id ignored: %r", raw)
            return

        entry = self.registry.resolve(request_id, raw)

        if entry is None:
            return

        failure = None

        try:
            result = decode(entry.request, raw)
        except ProtocolError as e:
            logger.warning("%s %s: %s", entry.request.kind, entry.request.path, e)
            failure = e
        except Exception as e:
            # The entry is already resolved; the caller still gets exactly
            # one result for it.
            logger.exception("%s %s: response could not be decoded", entry.request.kind, entry.request.path)
            failure = MalformedResponse('undecodable response: ' + repr(e))

        if failure is not None:
            result = failed(entry.request, failure)

            # A listing that is still registered ends here; a malformed
            # batch leaves no way to trust any later diff.

            self.registry.cancel(request_id)

        self._schedule(entry, result)


    def teardown(self, reason=None):
        """ The link is gone. Every pending request receives a synthesized
            :class:`LinkClosed` failure, and the delivery thread exits once
            those failures have been handed out.
        """

        with self._lock:
            self.closed = True

        if reason is None or not isinstance(reason, TransportError):
            reason = LinkClosed('link closed: ' + str(reason) if reason else 'link closed')

        for entry in self.registry.drain():
            self._schedule(entry, failed(entry.request, reason))

        with self._lock:
            self._updater.stop()


    def _fail(self, request_id, failure):

        entry = self.registry.cancel(request_id)

        if entry is None:
            # Already resolved, or already failed by teardown.
            return

        self._schedule(entry, failed(entry.request, failure))


    def _schedule(self, entry, result):

        with self._lock:
            if self._updater.stopped == False:
                self._updater.put((entry, result))
                return

        # The delivery thread is gone; this only happens for requests issued
        # after teardown. Deliver on a thread of its own to keep the handler
        # off the issuing call stack.

        thread = threading.Thread(target=self._deliver, args=((entry, result),))
        thread.daemon = True
        thread.start()


    def _deliver(self, dequeued):

        entry, result = dequeued

        try:
            if entry.handler is not None:
                entry.handler(result)
        except Exception:
            logger.exception("handler for %r raised an exception", entry)
        finally:
            entry.pending._complete(result)


# end of class Dispatcher


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
