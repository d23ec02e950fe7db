"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Request kinds.

SET = "SET"
REMOVE = "REMOVE"
LIST = "LIST"
INVOKE = "INVOKE"
SUBSCRIBE = "SUBSCRIBE"
UNSUBSCRIBE = "UNSUBSCRIBE"
CLOSE = "CLOSE"

# Requests that expect a correlated response.

CORRELATED = frozenset((SET, REMOVE, LIST, INVOKE))

# Requests whose correlation entry may outlive the first response.

STREAMING = frozenset((LIST,))

# Raw response keys.

RID = "rid"
STREAM = "stream"
UPDATES = "updates"
COLUMNS = "columns"
ERROR = "error"
PATH = "path"
VALUE = "value"
TIMESTAMP = "ts"

# Raw error keys.

ERROR_MESSAGE = "msg"
ERROR_DETAIL = "detail"
ERROR_TYPE = "type"

# Stream states.

OPEN = "open"
CLOSED = "closed"

# Listing entry change marker.

CHANGE = "change"
NAME = "name"
CHANGE_REMOVE = "remove"
