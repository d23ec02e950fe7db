""" Decoding for listing responses. A listing is a diff stream: the first
    response describes the children present when the listing was opened,
    and each later response describes what changed since. Every entry in a
    response becomes one :class:`ListUpdate`.
"""

from . import fields
from .message import MalformedResponse, Response, error_of, join_path, stream_closed


class ListUpdate:
    """ A single child change. *removed* is True if the child at
        *child_path* was removed from the remote tree; False if it was
        added, or is part of the initial snapshot.
    """

    __slots__ = ('child_path', 'removed')

    def __init__(self, child_path, removed):
        self.child_path = child_path
        self.removed = bool(removed)


    @property
    def name(self):
        return self.child_path.rsplit('/', 1)[-1]


    def __eq__(self, other):
        if not isinstance(other, ListUpdate):
            return NotImplemented
        return self.child_path == other.child_path and self.removed == other.removed


    def __hash__(self):
        return hash((self.child_path, self.removed))


    def __repr__(self):
        if self.removed:
            change = 'removed'
        else:
            change = 'added'
        return "ListUpdate(%s, %s)" % (repr(self.child_path), change)



def _entry(entry):
    """ Interpret a single entry from a sequence-shaped update block,
        returning a (name, removed) tuple.
    """

    if isinstance(entry, dict):
        try:
            name = entry[fields.NAME]
        except KeyError:
            raise MalformedResponse('listing entry has no name: ' + repr(entry))

        removed = entry.get(fields.CHANGE) == fields.CHANGE_REMOVE
        return name, removed

    if isinstance(entry, (list, tuple)) and len(entry) == 2:
        name, removed = entry
        return name, removed

    raise MalformedResponse('unrecognized listing entry: ' + repr(entry))



def reconcile(path, updates):
    """ Lazily yield one :class:`ListUpdate` per entry in *updates*, in the
        order they appear. The *updates* are either a mapping of child name
        to removal flag, or a sequence whose entries are (name, removed)
        pairs or {'name': ..., 'change': 'remove'} mappings. None, or an
        empty collection, yields nothing.

        Order is only meaningful within a single response; callers must
        not assume a stable ordering across responses.
    """

    if updates is None:
        return

    if isinstance(updates, dict):
        entries = updates.items()
    elif isinstance(updates, (list, tuple)):
        entries = (_entry(entry) for entry in updates)
    else:
        raise MalformedResponse('listing updates must be a mapping or a sequence, not ' + type(updates).__name__)

    for name, removed in entries:
        if not isinstance(name, str) or name.strip('/') == '':
            raise MalformedResponse('invalid child name in listing: ' + repr(name))

        yield ListUpdate(join_path(path, name), removed)



class ListResponse(Response):
    """ One decoded batch of a listing. The *updates* are the
        :class:`ListUpdate` entries for this batch; *closed* is True when
        no further batches will follow.
    """

    def __init__(self, path, updates=(), closed=True, error=None, failure=None):
        Response.__init__(self, path, error, failure)
        self.updates = list(updates)
        self.closed = closed


    def __iter__(self):
        return iter(self.updates)


    def __len__(self):
        return len(self.updates)


    @classmethod
    def decode(cls, path, raw):
        """ Decode a raw listing response for the listing of *path*. A
            response reporting an error is always the last in its stream.
        """

        error = error_of(raw)

        if error is not None:
            return cls(path, error=error, closed=True)

        updates = list(reconcile(path, raw.get(fields.UPDATES)))
        return cls(path, updates, stream_closed(raw))


# end of class ListResponse


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
