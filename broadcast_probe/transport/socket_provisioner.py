"""UDP socket setup for broadcasting and receiving."""

import socket
from contextlib import contextmanager
from typing import Iterator

from ..config.schema import RunConfiguration
from ..errors import ProvisioningError

BROADCAST_ADDRESS = "255.255.255.255"
ANY_ADDRESS = ""


def resolve_destination(config: RunConfiguration) -> tuple[str, int]:
    """Address the broadcaster sends to: the override, else 255.255.255.255."""
    host = config.destination_override or BROADCAST_ADDRESS
    return host, config.port


def create_socket(config: RunConfiguration) -> socket.socket:
    """Create, configure and bind the probe's UDP socket.

    Steps run in order and the first failure aborts the rest:
    open an IPv4 datagram socket, enable SO_BROADCAST, set
    IP_MULTICAST_TTL to the hop limit, bind to the wildcard address.

    Raises:
        ProvisioningError: Naming the step that failed.
    """
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError as e:
        raise ProvisioningError("Setting up socket", e) from e

    try:
        _configure(sock, config)
    except ProvisioningError:
        sock.close()
        raise

    return sock


def _configure(sock: socket.socket, config: RunConfiguration) -> None:
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_BROADCAST, 1)
    except OSError as e:
        raise ProvisioningError("Setting broadcast", e) from e

    try:
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, config.hop_limit)
    except OSError as e:
        raise ProvisioningError("Setting TTL", e) from e

    try:
        sock.bind((ANY_ADDRESS, config.port))
    except OSError as e:
        raise ProvisioningError("Binding socket", e) from e


@contextmanager
def provisioned_socket(config: RunConfiguration) -> Iterator[socket.socket]:
    """Context manager owning the socket for the lifetime of a run."""
    sock = create_socket(config)
    try:
        yield sock
    finally:
        sock.close()
