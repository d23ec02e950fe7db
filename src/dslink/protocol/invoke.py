""" Decoding for invocation responses. An invocation either yields a
    :class:`Table` of results, or an :class:`InvokeError`; never both. The
    error marker is authoritative: a response carrying an error and row
    data is treated as an error, and the rows are not read.
"""

from ..value import Value
from . import fields
from .message import MalformedResponse, Response, ResponseError


class InvokeError(ResponseError):
    """ The remote refused the invocation, for example because the target
        node does not exist or is not an action.
    """


class Row:
    """ One result row: an ordered sequence of :class:`Value` instances.
    """

    __slots__ = ('values',)

    def __init__(self, values):
        self.values = tuple(Value.wrap(value) for value in values)


    def __getitem__(self, index):
        return self.values[index]


    def __iter__(self):
        return iter(self.values)


    def __len__(self):
        return len(self.values)


    def __eq__(self, other):
        if not isinstance(other, Row):
            return NotImplemented
        return self.values == other.values


    def __hash__(self):
        return hash(self.values)


    def __repr__(self):
        return 'Row' + repr(self.values)



class Table:
    """ The ordered rows returned by an invocation. *columns* holds the
        column names, if the remote described them.
    """

    def __init__(self, rows=(), columns=()):
        self.rows = tuple(rows)
        self.columns = tuple(columns)


    def __iter__(self):
        return iter(self.rows)


    def __len__(self):
        return len(self.rows)


    def __repr__(self):
        return "Table(%d rows, columns=%s)" % (len(self.rows), repr(self.columns))



def _column_names(raw):

    columns = raw.get(fields.COLUMNS)

    if columns is None:
        return ()

    if not isinstance(columns, (list, tuple)):
        raise MalformedResponse('columns must be a sequence: ' + repr(columns))

    names = list()
    for column in columns:
        if isinstance(column, dict):
            try:
                column = column[fields.NAME]
            except KeyError:
                raise MalformedResponse('column has no name: ' + repr(column))
        names.append(str(column))

    return tuple(names)


def _row(raw_row, columns):

    # Rows are normally positional. A remote may instead send a mapping of
    # column name to value, in which case the column order applies.

    if isinstance(raw_row, dict):
        if not columns:
            raise MalformedResponse('mapping row without column names: ' + repr(raw_row))
        raw_row = [raw_row.get(name) for name in columns]

    elif not isinstance(raw_row, (list, tuple)):
        raise MalformedResponse('row must be a sequence: ' + repr(raw_row))

    try:
        return Row(raw_row)
    except (TypeError, ValueError) as e:
        raise MalformedResponse('undecodable row value: ' + str(e))



def decode_table(raw):
    """ Decode the row data in a raw invoke response into a :class:`Table`,
        preserving the wire order of rows and of values within each row.
    """

    rows = raw.get(fields.UPDATES)

    if rows is None:
        rows = ()
    elif not isinstance(rows, (list, tuple)):
        raise MalformedResponse('invoke updates must be a sequence of rows')

    columns = _column_names(raw)
    rows = [_row(row, columns) for row in rows]

    return Table(rows, columns)



class InvokeResponse(Response):
    """ The decoded response to an invocation. Check :func:`has_error` (or
        :attr:`ok`) before reading :attr:`table`; reading the table of a
        response that carries an error or a failure raises RuntimeError.
    """

    def __init__(self, path, table=None, error=None, failure=None):
        Response.__init__(self, path, error, failure)
        self._table = table


    @property
    def table(self):
        if self.error is not None:
            raise RuntimeError("invocation of %s failed: %s" % (self.path, self.error))
        if self.failure is not None:
            raise RuntimeError("invocation of %s failed: %s" % (self.path, self.failure))

        return self._table


    @classmethod
    def decode(cls, path, raw):
        """ Decode a raw invoke response: an error block wins outright; the
            presence of row data (even an empty list) or column names marks
            a table; anything else is a :class:`MalformedResponse`.
        """

        error = raw.get(fields.ERROR)
        if error is not None and error != '' and error != {}:
            return cls(path, error=InvokeError.from_raw(error))

        if fields.UPDATES in raw or fields.COLUMNS in raw:
            return cls(path, table=decode_table(raw))

        raise MalformedResponse("invoke response for %s has neither an error nor a table" % (path))


# end of class InvokeResponse


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
