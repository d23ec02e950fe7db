"""
dslink Protocol Layer
=====================

This package defines the requester's view of the protocol: the structured
requests it issues, and the decoders that turn raw responses into the
typed results handed to callers.

The protocol layer MUST NOT depend on any transport implementation.

---------------------------------------------------------------------

Layer Overview
--------------

Requester (dslink.requester)
    Correlates requests with responses and delivers results
    - set() / remove()
    - list()
    - invoke()
    - subscribe() / unsubscribe()

    │
    ▼
Decoders
    Raw response -> typed result
    - message.SetResponse
    - listing.ListResponse    (List Diff Reconciler)
    - invoke.InvokeResponse   (Invoke Result Decoder)
    - subscription.decode()

    │
    ▼
Message Model (message.py)
    - Request
    - ResponseError
    - ProtocolError / MalformedResponse

    │
    ▼
Field Vocabulary (fields.py)
    Canonical names for request kinds and raw response keys

---------------------------------------------------------------------
"""

from . import fields
from . import message
from . import listing
from . import invoke
from . import subscription

from .message import (
    MalformedResponse,
    ProtocolError,
    Request,
    ResponseError,
    SetResponse,
)
from .listing import ListResponse, ListUpdate
from .invoke import InvokeError, InvokeResponse, Row, Table
from .subscription import SubscriptionUpdate


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
