"""Link interface.

This is the (small) contract a link implementation must follow for the
requester to use it. It lives outside :mod:`dslink.protocol` so the
protocol remains transport-agnostic.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from ..protocol.message import Request

logger = logging.getLogger(__name__)


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportConnectionError(TransportError):
    """The link could not deliver a request."""


class LinkClosed(TransportError):
    """The link closed before a response arrived."""


RawHandler = Callable[[Dict[str, Any]], None]
CloseHandler = Callable[[Optional[Exception]], None]


class Link(ABC):
    """Minimal contract for a requester link.

    Outgoing traffic is a structured :class:`Request` handed to
    :func:`send`. Incoming traffic is pushed to the handlers registered via
    :func:`bind`: raw responses (mappings keyed by 'rid'), raw subscription
    updates (mappings keyed by 'path'), and a single teardown notification.
    Implementations are expected to call the handlers from one receive
    thread, in the order traffic arrived.
    """

    def __init__(self) -> None:
        self._on_response: Optional[RawHandler] = None
        self._on_update: Optional[RawHandler] = None
        self._on_close: Optional[CloseHandler] = None
        self._closed_notified = False

    def bind(self, on_response: RawHandler, on_update: RawHandler, on_close: CloseHandler) -> None:
        """Register the consumer of incoming traffic. A link serves a single
        requester; binding twice is an error.
        """
        if self._on_response is not None:
            raise RuntimeError(f"{type(self).__name__} is already bound")

        self._on_response = on_response
        self._on_update = on_update
        self._on_close = on_close

    @abstractmethod
    def open(self) -> None:
        """Establish the underlying connection."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the underlying connection. Implementations must end by
        calling :func:`_deliver_close`.
        """

    @abstractmethod
    def send(self, request: Request) -> None:
        """Send a request. Raises :class:`TransportError` if the request
        cannot be handed to the remote side.
        """

    @property
    def is_open(self) -> bool:
        """Whether the link is currently connected."""
        return False

    # --- helpers for implementations ---

    def _deliver_response(self, raw: Dict[str, Any]) -> None:
        if self._on_response is None:
            logger.warning("%s: dropping response, link is not bound", type(self).__name__)
            return
        self._on_response(raw)

    def _deliver_update(self, raw: Dict[str, Any]) -> None:
        if self._on_update is None:
            logger.warning("%s: dropping update, link is not bound", type(self).__name__)
            return
        self._on_update(raw)

    def _deliver_close(self, reason: Optional[Exception] = None) -> None:
        # The teardown notification is delivered at most once.
        if self._closed_notified:
            return
        self._closed_notified = True

        if self._on_close is not None:
            self._on_close(reason)
