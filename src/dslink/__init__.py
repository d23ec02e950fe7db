""" Python implementation of a requester for a remote node tree. This
    includes the structured request and response model, the decoders for
    each response shape, and the requester that correlates responses with
    the operations that prompted them.
"""

# Utility components.

from . import config
from . import json

# Submodules used by multiple other components.

from .value import Kind, Value
from . import protocol
from . import transport

# Primary public-facing interfaces.

from . import requester
from .requester import Requester
from .transport import LoopbackLink

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
