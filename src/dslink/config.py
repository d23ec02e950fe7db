""" Runtime defaults for the requester core. Each default can be overridden
    via an environment variable, read once at import time; classes that use
    these defaults copy them into class attributes, which can in turn be
    adjusted on a per-class or per-instance basis.
"""

import os


def _float(name, default):

    raw = os.environ.get(name)

    if raw is None or raw == '':
        return default

    try:
        return float(raw)
    except ValueError:
        raise ValueError("%s must be a number, not %s" % (name, repr(raw)))


def _int(name, default):

    raw = os.environ.get(name)

    if raw is None or raw == '':
        return default

    try:
        return int(raw, 0)
    except ValueError:
        raise ValueError("%s must be an integer, not %s" % (name, repr(raw)))


# How long, in seconds, Pending.wait() blocks by default.

wait_timeout = _float('DSLINK_WAIT_TIMEOUT', 60.0)

# How long, in seconds, a background delivery thread blocks on its queue
# before checking whether it has been asked to shut down.

idle_timeout = _float('DSLINK_IDLE_TIMEOUT', 300.0)

# Correlation identifiers wrap around once they reach this ceiling.

id_max = _int('DSLINK_ID_MAX', 0xFFFFFFFF)

if id_max < 1:
    raise ValueError('DSLINK_ID_MAX must be positive, not ' + str(id_max))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
