""" Exercise every requester operation against an in-process responder:
    set a value, list children, subscribe to a ticking value, invoke an
    action, and invoke a node that does not exist.

    Run as ``python examples/dual.py``; output goes to the log.
"""

import logging
import threading
import time

import dslink
from dslink.protocol import fields

logger = logging.getLogger('dual')


class Responder(dslink.LoopbackLink):
    """ A tiny node tree: /values/settable, /values/dynamic (a counter
        published once per tick while anyone is subscribed), and
        /values/action, which returns a single row.
    """

    tick = 0.5

    def __init__(self):
        dslink.LoopbackLink.__init__(self)
        self.values = dict()
        self.values['/values/settable'] = None
        self.values['/values/dynamic'] = 0
        self.ticker = None


    def req_handler(self, request):

        path = request.path
        kind = request.kind

        if kind == fields.SET:
            if path not in self.values:
                raise KeyError('no such node: ' + path)
            self.values[path] = request.payload.to_native()
            return dict()

        if kind == fields.LIST:
            if path != '/values':
                raise KeyError('no such node: ' + path)
            updates = dict()
            for child in ('settable', 'dynamic', 'action'):
                updates[child] = False
            return {fields.UPDATES: updates, fields.STREAM: fields.OPEN}

        if kind == fields.INVOKE:
            if path != '/values/action':
                error = dict()
                error[fields.ERROR_MESSAGE] = 'node not found'
                error[fields.ERROR_DETAIL] = path + ' does not exist'
                return {fields.ERROR: error}
            return {fields.COLUMNS: ['result'], fields.UPDATES: [['ok']]}

        if kind == fields.SUBSCRIBE and path == '/values/dynamic':
            if self.ticker is None:
                self.ticker = threading.Thread(target=self._tick, daemon=True)
                self.ticker.start()

        return None


    def _tick(self):

        while self.is_open:
            time.sleep(self.tick)
            self.values['/values/dynamic'] += 1
            self.publish('/values/dynamic', self.values['/values/dynamic'])


# end of class Responder



def on_set(response):
    if response.ok:
        logger.info("Successfully set the new value on the responder")
    else:
        logger.error("Set failed: %s", response.error or response.failure)


def on_list(response):
    for update in response.updates:
        if update.removed:
            change = 'removed'
        else:
            change = 'added'
        logger.info("Child node at %s was %s", update.child_path, change)


def on_dynamic(update):
    value = int(update.value.get_number())
    logger.info("Received new dynamic value of %d", value)


def on_invoke(response):
    if response.has_error() or not response.ok:
        logger.error("Invocation failed: %s", response.error or response.failure)
        return

    logger.info("Successfully invoked the responder action")
    row = response.table.rows[0]
    logger.info("Received response: %s", row.values[0])


def on_invoke_error(response):
    if not response.has_error():
        return

    error = response.error
    logger.info("Invocation error (as desired): \nmsg: %s\ndetail: %s", error.message, error.detail)


def main():

    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s %(message)s')

    with dslink.Requester(Responder()) as requester:
        requester.set('/values/settable', 'Hello world!', on_set)
        listing = requester.list('/values', on_list)
        requester.subscribe('/values/dynamic', on_dynamic)
        requester.invoke('/values/action', handler=on_invoke)
        requester.invoke('/non_existent_node', handler=on_invoke_error)

        time.sleep(2)

        listing.close()
        requester.unsubscribe('/values/dynamic')


if __name__ == '__main__':
    main()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
