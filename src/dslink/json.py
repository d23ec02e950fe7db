''' Wrapper module to select the most performant available library for
    :func:`render`, a deterministic JSON encoding used for human-readable
    output of values.
'''

# The business about conditionally importing the libraries is intended to
# avoid importing less efficient libraries if they are not available. With
# the right build process this could be determined at build time, instead
# of at run time.

msgspec = None
orjson = None
json = None

try:
    import msgspec
except ImportError:
    pass

if msgspec is None:
    try:
        import orjson
    except ImportError:
        pass

if msgspec is None and orjson is None:
    import json


# The msgspec 'encode' operation returns bytes, as does orjson.dumps. To
# maintain alignment the stdlib variant needs to do so as well.

def json_render(thing):
    return json.dumps(thing, sort_keys=True, separators=(',', ':')).encode()

def orjson_render(thing):
    return orjson.dumps(thing, option=orjson.OPT_SORT_KEYS)


if msgspec is not None:
    _render = msgspec.json.Encoder(order='sorted').encode
elif orjson is not None:
    _render = orjson_render
else:
    _render = json_render


def render(thing):
    """ Return a deterministic string encoding of *thing*: mapping keys are
        sorted, and no whitespace is inserted, regardless of which library
        is doing the work. This is for logging and debugging; it is not a
        wire format.
    """

    return _render(thing).decode()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
