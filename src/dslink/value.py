""" The :class:`Value` is the self-describing datum exchanged with a remote
    node tree: the value written by a set request, each cell in an invocation
    result, and every subscription update. A :class:`Value` is one of six
    kinds, enumerated in :class:`Kind`; the kind never changes after
    construction, and no implicit conversion between kinds is performed.
"""

import enum
import math

from . import json


class Kind(enum.Enum):
    NULL = 'null'
    BOOL = 'bool'
    NUMBER = 'number'
    STRING = 'string'
    MAP = 'map'
    SEQUENCE = 'sequence'


class Value:
    """ An immutable tagged value. Use the class methods (:func:`null`,
        :func:`boolean`, :func:`number`, :func:`string`, :func:`map`,
        :func:`sequence`) to construct a specific kind, or :func:`wrap` to
        convert a JSON-shaped Python object as delivered by a link.

        Two :class:`Value` instances are equal if they have the same kind
        and the same contents; a numeric 1 and a boolean True are not equal.

        :ivar kind: The :class:`Kind` of this value.
    """

    __slots__ = ('kind', '_data')

    def __init__(self, kind, data=None):

        if not isinstance(kind, Kind):
            raise TypeError('kind must be a Kind member, not ' + repr(kind))

        object.__setattr__(self, 'kind', kind)
        object.__setattr__(self, '_data', data)


    @classmethod
    def null(cls):
        return cls(Kind.NULL)


    @classmethod
    def boolean(cls, flag):
        if not isinstance(flag, bool):
            raise TypeError('expected a bool, got ' + type(flag).__name__)
        return cls(Kind.BOOL, flag)


    @classmethod
    def number(cls, number):

        # bool is a subclass of int; refuse it here so that the boolean and
        # numeric kinds stay distinct.

        if isinstance(number, bool) or not isinstance(number, (int, float)):
            raise TypeError('expected a number, got ' + type(number).__name__)

        try:
            number = float(number)
        except OverflowError:
            raise ValueError('integer is too large for a number value')

        return cls(Kind.NUMBER, number)


    @classmethod
    def string(cls, text):
        if not isinstance(text, str):
            raise TypeError('expected a str, got ' + type(text).__name__)
        return cls(Kind.STRING, text)


    @classmethod
    def map(cls, mapping):
        """ Construct a MAP value. Keys must be strings; the values are
            passed through :func:`wrap`.
        """

        items = dict()
        for key, item in mapping.items():
            if not isinstance(key, str):
                raise TypeError('map keys must be strings, got ' + repr(key))
            items[key] = cls.wrap(item)

        return cls(Kind.MAP, items)


    @classmethod
    def sequence(cls, items):
        return cls(Kind.SEQUENCE, tuple(cls.wrap(item) for item in items))


    @classmethod
    def wrap(cls, thing):
        """ Return a :class:`Value` for *thing*. A :class:`Value` is returned
            unchanged; None, bool, int, float, str, dict, list and tuple map
            to the corresponding kind. Anything else raises TypeError.
        """

        if isinstance(thing, Value):
            return thing
        if thing is None:
            return cls.null()
        if isinstance(thing, bool):
            return cls.boolean(thing)
        if isinstance(thing, (int, float)):
            return cls.number(thing)
        if isinstance(thing, str):
            return cls.string(thing)
        if isinstance(thing, dict):
            return cls.map(thing)
        if isinstance(thing, (list, tuple)):
            return cls.sequence(thing)

        raise TypeError('cannot represent %s as a Value' % (type(thing).__name__))


    def _expect(self, kind):
        if self.kind is not kind:
            raise TypeError("value is %s, not %s" % (self.kind.value, kind.value))
        return self._data


    def get_bool(self):
        return self._expect(Kind.BOOL)


    def get_number(self):
        """ Return the numeric contents as a float. Raises TypeError if this
            is not a NUMBER value; strings and booleans are not converted.
        """

        return self._expect(Kind.NUMBER)


    def get_string(self):
        return self._expect(Kind.STRING)


    def get_map(self):
        return dict(self._expect(Kind.MAP))


    def get_sequence(self):
        return list(self._expect(Kind.SEQUENCE))


    @property
    def is_null(self):
        return self.kind is Kind.NULL


    def to_native(self):
        """ Return the plain Python equivalent of this value. This is the
            inverse of :func:`wrap`, except that numbers are always floats.
        """

        kind = self.kind

        if kind is Kind.MAP:
            return {key: item.to_native() for key, item in self._data.items()}
        if kind is Kind.SEQUENCE:
            return [item.to_native() for item in self._data]

        return self._data


    def __setattr__(self, name, value):
        raise AttributeError('Value instances are immutable')


    def __delattr__(self, name):
        raise AttributeError('Value instances are immutable')


    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        return self.kind is other.kind and self._data == other._data


    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result


    def __hash__(self):
        data = self._data
        if self.kind is Kind.MAP:
            data = frozenset(data.items())
        return hash((self.kind, data))


    def __repr__(self):
        return 'Value.%s(%s)' % (self.kind.name, str(self))


    def __str__(self):
        kind = self.kind

        if kind is Kind.STRING:
            return self._data

        if kind is Kind.NUMBER:
            number = self._data
            if math.isfinite(number) and number.is_integer():
                return str(int(number))
            return repr(number)

        return json.render(self._renderable())


    def _renderable(self):

        # Like to_native(), except that integral numbers become ints, so a
        # number nested in a map or sequence reads the same as a bare one.

        kind = self.kind

        if kind is Kind.MAP:
            return {key: item._renderable() for key, item in self._data.items()}
        if kind is Kind.SEQUENCE:
            return [item._renderable() for item in self._data]
        if kind is Kind.NUMBER:
            number = self._data
            if math.isfinite(number) and number.is_integer() and abs(number) < 2 ** 63:
                return int(number)

        return self._data


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
