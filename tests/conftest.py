import socket
import time
from collections import deque

import pytest


class FakeSocket:
    """Stands in for a UDP socket in loop tests."""

    def __init__(self, fail_on_send=None, recv_results=None, on_drained=None):
        self.sent = []
        self.sent_at = []
        self.options = {}
        self.calls = []
        self.bound = None
        self.timeout = "unset"
        self.closed = False
        self.fail_on_send = fail_on_send
        self.recv_results = deque(recv_results or [])
        self.on_drained = on_drained

    def sendto(self, data, address):
        if self.fail_on_send is not None and len(self.sent) == self.fail_on_send:
            raise OSError(101, "Network is unreachable")
        self.sent.append((data, address))
        self.sent_at.append(time.monotonic())
        return len(data)

    def recvfrom(self, bufsize):
        if not self.recv_results and self.on_drained is not None:
            self.on_drained()
            raise socket.timeout()
        result = self.recv_results.popleft()
        if isinstance(result, BaseException):
            raise result
        return result

    def settimeout(self, timeout):
        self.timeout = timeout

    def setsockopt(self, level, option, value):
        self.calls.append(("setsockopt", level, option, value))
        self.options[(level, option)] = value

    def bind(self, address):
        self.calls.append(("bind", address))
        self.bound = address

    def close(self):
        self.closed = True


@pytest.fixture
def free_port():
    finder = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    finder.bind(("", 0))
    port = finder.getsockname()[1]
    finder.close()
    return port


@pytest.fixture
def busy_port():
    holder = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    holder.bind(("", 0))
    yield holder.getsockname()[1]
    holder.close()


@pytest.fixture
def lines():
    """Collects whatever a loop prints."""
    return []
