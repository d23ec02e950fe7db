"""Link implementations and the transport-agnostic link contract."""

from .base import (
    Link,
    LinkClosed,
    TransportConnectionError,
    TransportError,
)
from .loopback import LoopbackLink
