"""Receiver loop - reports counter datagrams and who sent them."""

import socket
import threading
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from ..config.schema import RunConfiguration
from ..errors import TransportError
from ..transport.codec import MAX_DATAGRAM_SIZE, PAYLOAD_SIZE, decode_counter


@dataclass(frozen=True)
class SenderAddress:
    """Source of a received datagram."""
    host: str
    port: int

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class ReceivedMessage:
    """One decoded counter datagram."""
    value: int
    sender: SenderAddress
    size: int = PAYLOAD_SIZE

    @property
    def is_exact(self) -> bool:
        """Whether the datagram was exactly one counter wide."""
        return self.size == PAYLOAD_SIZE

    def __str__(self) -> str:
        return f"Received {self.value} from '{self.sender}'"


class Receiver:
    """Blocks on the socket and prints every counter that arrives.

    No ordering or duplicate checks are made. The receive waits forever;
    the socket timeout is only the interval at which ``stop_event`` is
    re-checked.
    """

    def __init__(
        self,
        sock: socket.socket,
        config: RunConfiguration,
        out: Callable[[str], None] = print,
        stop_event: Optional[threading.Event] = None,
    ):
        self.sock = sock
        self.config = config
        self.out = out
        self.stop_event = stop_event or threading.Event()

    def run(self, max_messages: Optional[int] = None) -> list[ReceivedMessage]:
        """Receive until stopped or ``max_messages`` have arrived.

        Unbounded runs print and drop each message, so nothing accumulates.

        Returns:
            The messages received in arrival order when ``max_messages`` is
            set, otherwise an empty list.

        Raises:
            TransportError: If a receive fails.
        """
        received: list[ReceivedMessage] = []
        for count, message in enumerate(self.messages(), start=1):
            self.out(str(message))
            if max_messages is None:
                continue

            received.append(message)
            if count >= max_messages:
                break

        return received

    def messages(self) -> Iterator[ReceivedMessage]:
        """Yield each datagram as it arrives until ``stop_event`` is set."""
        self.sock.settimeout(self.config.poll_interval)
        self.out("Waiting for data")

        while not self.stop_event.is_set():
            message = self.receive_one()
            if message is not None:
                yield message

    def receive_one(self) -> Optional[ReceivedMessage]:
        """Wait one poll interval for a datagram.

        Returns:
            The decoded message, or None if nothing arrived in time.
        """
        try:
            data, addr = self.sock.recvfrom(MAX_DATAGRAM_SIZE)
        except socket.timeout:
            return None
        except OSError as e:
            raise TransportError("Receiving broadcast", e) from e

        return ReceivedMessage(
            value=decode_counter(data),
            sender=SenderAddress(host=addr[0], port=addr[1]),
            size=len(data),
        )

    def stop(self) -> None:
        self.stop_event.set()
