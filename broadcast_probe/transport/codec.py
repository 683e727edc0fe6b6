"""Counter payload codec.

The whole datagram is one unsigned 32-bit integer in the host's native
byte order, with no header or framing.
"""

import struct

_COUNTER = struct.Struct("=I")

PAYLOAD_SIZE = _COUNTER.size
COUNTER_MODULUS = 1 << 32

# Largest UDP payload over IPv4
MAX_DATAGRAM_SIZE = 65535


def encode_counter(value: int) -> bytes:
    """Pack a counter, wrapping it into the unsigned 32-bit range."""
    return _COUNTER.pack(value % COUNTER_MODULUS)


def decode_counter(data: bytes) -> int:
    """Unpack a counter from a datagram.

    Bytes past the payload width are ignored. Short datagrams are padded
    with zero bytes before decoding.
    """
    payload = data[:PAYLOAD_SIZE].ljust(PAYLOAD_SIZE, b"\x00")
    return _COUNTER.unpack(payload)[0]
