"""Broadcaster loop - sends an incrementing counter at a fixed cadence."""

import socket
import threading
from typing import Callable, Iterator, Optional

from ..config.schema import RunConfiguration
from ..errors import TransportError
from ..transport.codec import COUNTER_MODULUS, encode_counter
from ..transport.socket_provisioner import resolve_destination


def counter(start: int = 0) -> Iterator[int]:
    """Endless sequence of unsigned 32-bit values, wrapping at 2**32."""
    value = start % COUNTER_MODULUS
    while True:
        yield value
        value = (value + 1) % COUNTER_MODULUS


class Broadcaster:
    """Sends counter datagrams to the broadcast (or override) address.

    The destination is resolved once when the loop starts. Each iteration
    sends one value and then waits ``config.send_interval`` seconds.
    """

    def __init__(
        self,
        sock: socket.socket,
        config: RunConfiguration,
        out: Callable[[str], None] = print,
        stop_event: Optional[threading.Event] = None,
    ):
        """Initialize broadcaster.

        Args:
            sock: Provisioned, bound UDP socket.
            config: Run configuration (port, override, interval).
            out: Sink for progress lines.
            stop_event: Set to end the loop. Never set means run forever.
        """
        self.sock = sock
        self.config = config
        self.out = out
        self.stop_event = stop_event or threading.Event()

    def run(self, max_messages: Optional[int] = None) -> int:
        """Send until stopped or ``max_messages`` have gone out.

        Returns:
            Number of datagrams sent.

        Raises:
            TransportError: If a send fails.
        """
        destination = resolve_destination(self.config)
        self.out(f"Broadcast to {destination[0]}:{destination[1]}")

        sent = 0
        values = counter()
        while not self.stop_event.is_set():
            value = next(values)
            self.out(f"Sending {value}")
            self._send(value, destination)
            sent += 1

            if max_messages is not None and sent >= max_messages:
                break
            self.stop_event.wait(self.config.send_interval)

        return sent

    def stop(self) -> None:
        self.stop_event.set()

    def _send(self, value: int, destination: tuple[str, int]) -> None:
        try:
            self.sock.sendto(encode_counter(value), destination)
        except OSError as e:
            raise TransportError("Sending broadcast", e) from e
