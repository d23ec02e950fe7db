""" An in-process :class:`Link`. Requests are handed to :func:`req_handler`
    on a background thread, which plays the part of the remote responder;
    responses and subscription updates travel back through the same thread,
    so everything the requester sees arrives in a single, ordered stream.
"""

from __future__ import annotations

import logging
import queue
import sys
import threading
import traceback
from typing import Any, Callable, Dict, List, Optional

from ..protocol import fields
from ..protocol.message import Request
from .base import Link, LinkClosed, TransportConnectionError

logger = logging.getLogger(__name__)


class _Shutdown:
    def __init__(self, reason: Optional[Exception]):
        self.reason = reason


class LoopbackLink(Link):
    """ Loopback link with an overridable responder. The default
        :func:`req_handler` defers to the *responder* callable, if one was
        provided, and otherwise does nothing. Subclasses or responders may
        return a raw response for correlated requests, or return None and
        issue responses later via :func:`respond`.

        :ivar requests: every request handed to :func:`send`, in order.
    """

    def __init__(self, responder: Optional[Callable[[Request], Optional[Dict[str, Any]]]] = None):
        super().__init__()
        self.responder = responder
        self.requests: List[Request] = []

        self._queue: queue.SimpleQueue = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._open = False
        self._thread: Optional[threading.Thread] = None

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> None:
        with self._lock:
            if self._open:
                return
            if self._closed_notified:
                raise TransportConnectionError("a closed loopback link cannot be reopened")

            self._open = True
            self._thread = threading.Thread(target=self.run, name="LoopbackLink", daemon=True)
            self._thread.start()

    def close(self, reason: Optional[Exception] = None) -> None:
        """ Close the link. Anything already queued is processed first;
            the teardown notification follows. A *reason* may be supplied
            to simulate a link failure.
        """

        with self._lock:
            if not self._open:
                started = self._thread is not None
            else:
                started = True
                self._open = False
                self._queue.put(_Shutdown(reason))

        if not started:
            if reason is None:
                reason = LinkClosed("loopback link closed before it was opened")
            self._deliver_close(reason)

    def send(self, request: Request) -> None:
        with self._lock:
            if not self._open:
                raise TransportConnectionError(f"{request.kind} {request.path}: link is not open")
            self.requests.append(request)
            self._queue.put(request)

    # --- remote side ---

    def req_handler(self, request: Request) -> Optional[Dict[str, Any]]:
        """Override in subclasses, or supply a *responder*.

        Return:
          - dict -> delivered as the response to *request*
          - None -> no immediate response
        """

        if self.responder is None:
            return None
        return self.responder(request)

    def respond(self, raw: Dict[str, Any]) -> None:
        """Queue a raw response for delivery to the requester."""
        self._queue.put((fields.RID, raw))

    def publish(self, path: str, value: Any, timestamp: Optional[float] = None) -> None:
        """Queue a subscription update for *path*."""
        raw = {fields.PATH: path, fields.VALUE: value}
        if timestamp is not None:
            raw[fields.TIMESTAMP] = timestamp
        self._queue.put((fields.PATH, raw))

    # --- internal ---

    def _req_incoming(self, request: Request) -> None:
        """Dispatch to req_handler; package any exception as an error
        response, the way a remote responder reports its own failures.
        """

        raw: Optional[Dict[str, Any]] = None

        try:
            raw = self.req_handler(request)
        except Exception:
            if not request.correlated:
                logger.exception("LoopbackLink: handler failed for %r", request)
                return

            e_class, e_instance, _tb = sys.exc_info()
            raw = {
                fields.ERROR: {
                    fields.ERROR_TYPE: getattr(e_class, "__name__", "Exception"),
                    fields.ERROR_MESSAGE: str(e_instance),
                    fields.ERROR_DETAIL: traceback.format_exc(),
                },
            }

        if raw is None or not request.correlated:
            return

        raw = dict(raw)
        raw[fields.RID] = request.id
        self._deliver_response(raw)

    def run(self) -> None:
        reason: Optional[Exception] = None

        while True:
            dequeued = self._queue.get()

            if isinstance(dequeued, _Shutdown):
                reason = dequeued.reason
                break

            try:
                if isinstance(dequeued, Request):
                    self._req_incoming(dequeued)
                elif dequeued[0] == fields.RID:
                    self._deliver_response(dequeued[1])
                else:
                    self._deliver_update(dequeued[1])
            except Exception:
                logger.exception("LoopbackLink: error delivering %r", dequeued)

        if reason is None:
            reason = LinkClosed("loopback link closed")

        self._deliver_close(reason)
