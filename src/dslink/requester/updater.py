import logging
import queue
import threading

from .. import config

logger = logging.getLogger(__name__)


class _UpdaterStop:
    pass


class Updater:
    """ Background thread to invoke caller-provided callbacks. This allows
        the receive loop of the link to stay consistent and tight, where a
        user-provided callback may require an unbounded amount of time to
        process. Items are handed to *method* one at a time, in the order
        they were queued via :func:`put`.

        :func:`stop` queues a marker; anything queued before the marker is
        still processed before the thread exits.
    """

    idle_timeout = config.idle_timeout

    def __init__(self, method, name=None):

        self.method = method
        self.queue = queue.SimpleQueue()
        self.stopped = False

        self.thread = threading.Thread(target=self.run, name=name)
        self.thread.daemon = True
        self.thread.start()


    def put(self, item):
        self.queue.put(item)


    def run(self):

        while True:
            try:
                dequeued = self.queue.get(timeout=self.idle_timeout)
            except queue.Empty:
                continue

            if isinstance(dequeued, _UpdaterStop):
                break

            try:
                self.method(dequeued)
            except Exception:
                logger.exception("%s: callback raised an exception", self.thread.name)


    def stop(self):
        if self.stopped:
            return

        self.stopped = True
        self.queue.put(_UpdaterStop())


    def join(self, timeout=None):
        self.thread.join(timeout)


# end of class Updater


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
