from .registry import PendingCallback, Registry
from .dispatcher import Dispatcher, Pending
from .subscription import Subscription, SubscriptionManager
from .session import Requester


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
