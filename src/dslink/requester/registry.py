""" The correlation registry maps each outstanding request id to the
    callback awaiting its response(s). It is the only place ids are
    allocated, which is how the requester guarantees that no two in-flight
    requests on a link ever share an id.
"""

from __future__ import annotations

import itertools
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from .. import config
from ..protocol import fields
from ..protocol.message import Request, stream_closed

logger = logging.getLogger(__name__)


class PendingCallback:
    """ The registry entry for one outstanding request: the *request*
        (whose id is the registry key), the caller's *handler*, and the
        :class:`Pending` handle returned to the caller.
    """

    __slots__ = ('request', 'handler', 'pending')

    def __init__(self, request: Request, handler: Optional[Callable], pending: Any = None):
        self.request = request
        self.handler = handler
        self.pending = pending

    @property
    def id(self) -> int:
        return self.request.id

    @property
    def kind(self) -> str:
        return self.request.kind

    def __repr__(self) -> str:
        return f"PendingCallback({self.request.id}, {self.request.kind}, {self.request.path!r})"


class Registry:
    """ Lock-guarded mapping of request id to :class:`PendingCallback`.
        Every mutation (:func:`register`, :func:`resolve`, :func:`cancel`,
        :func:`drain`) holds the same lock, so concurrent issuance and
        concurrent responses never see a half-updated table.
    """

    def __init__(self, id_max: Optional[int] = None):

        if id_max is None:
            id_max = config.id_max

        self.id_max = id_max
        self._lock = threading.Lock()
        self._pending: Dict[int, PendingCallback] = {}
        self._ticker = itertools.count(1)

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)

    def __contains__(self, request_id: int) -> bool:
        with self._lock:
            return request_id in self._pending

    def _id_next(self) -> int:
        """ Return the next free request id. Must be called with the lock
            held. Ids wrap back to 1 after :attr:`id_max`; any id that is
            still pending is skipped rather than reused.
        """

        for _attempt in range(self.id_max):
            request_id = next(self._ticker)

            if request_id > self.id_max:
                self._ticker = itertools.count(1)
                request_id = next(self._ticker)

            if request_id not in self._pending:
                return request_id

        raise RuntimeError(f"all {self.id_max} request ids are in use")

    def register(self, request: Request, handler: Optional[Callable], pending: Any = None) -> PendingCallback:
        """ Allocate an id for *request*, assign it, and record the
            callback. The returned entry is what :func:`resolve` and
            :func:`cancel` hand back.
        """

        with self._lock:
            request.id = self._id_next()
            entry = PendingCallback(request, handler, pending)
            self._pending[request.id] = entry

        return entry

    def resolve(self, request_id: Any, raw: Dict[str, Any]) -> Optional[PendingCallback]:
        """ Return the entry for *request_id*, removing it unless the
            response leaves a streaming request open. An unknown id returns
            None and is logged; this is expected for duplicate responses,
            or responses that arrive after teardown or cancellation.
        """

        with self._lock:
            try:
                entry = self._pending.get(request_id)
            except TypeError:
                entry = None

            if entry is None:
                logger.warning("response for unknown request id %r ignored", request_id)
                return None

            terminal = True
            if entry.kind in fields.STREAMING:
                error = raw.get(fields.ERROR)
                if not stream_closed(raw) and (error is None or error == '' or error == {}):
                    terminal = False

            if terminal:
                del self._pending[request_id]

        return entry

    def cancel(self, request_id: Any) -> Optional[PendingCallback]:
        """ Remove and return the entry for *request_id*, or None if it is
            no longer pending.
        """

        with self._lock:
            return self._pending.pop(request_id, None)

    def drain(self) -> List[PendingCallback]:
        """ Remove and return every pending entry, in issuance order.
        """

        with self._lock:
            entries = list(self._pending.values())
            self._pending.clear()

        return entries
