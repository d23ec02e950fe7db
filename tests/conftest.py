import pytest
import threading

import dslink


class ScriptedLink(dslink.LoopbackLink):
    """ Loopback link with canned responses. A script entry maps a (kind,
        path) pair to either a raw response mapping, or a callable that
        receives the request and returns one. Requests without a script
        entry get no response at all.
    """

    def __init__(self):
        dslink.LoopbackLink.__init__(self)
        self.script = dict()
        self.received = threading.Event()


    def req_handler(self, request):
        self.received.set()

        try:
            response = self.script[(request.kind, request.path)]
        except KeyError:
            return None

        if callable(response):
            return response(request)

        return response


    def kinds(self):
        return [request.kind for request in self.requests]



class Collector:
    """ Callable handler that records every result and signals once
        *expected* results have arrived.
    """

    def __init__(self, expected=1):
        self.expected = expected
        self.results = list()
        self.threads = list()
        self.done = threading.Event()
        self.lock = threading.Lock()


    def __call__(self, result):
        with self.lock:
            self.results.append(result)
            self.threads.append(threading.current_thread())
            if len(self.results) >= self.expected:
                self.done.set()


    def wait(self, timeout=2):
        return self.done.wait(timeout)



@pytest.fixture
def link():
    link = ScriptedLink()
    yield link
    link.close()


@pytest.fixture
def requester(link):
    requester = dslink.Requester(link).open()
    yield requester
    requester.close()


@pytest.fixture
def collector():
    return Collector()


@pytest.fixture
def make_collector():
    return Collector


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
