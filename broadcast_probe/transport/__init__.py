"""Transport module - UDP socket setup and counter wire format."""

from .codec import PAYLOAD_SIZE, decode_counter, encode_counter
from .socket_provisioner import (
    BROADCAST_ADDRESS,
    create_socket,
    provisioned_socket,
    resolve_destination,
)

__all__ = [
    "PAYLOAD_SIZE",
    "decode_counter",
    "encode_counter",
    "BROADCAST_ADDRESS",
    "create_socket",
    "provisioned_socket",
    "resolve_destination",
]
