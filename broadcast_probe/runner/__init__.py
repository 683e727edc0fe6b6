"""Runner module - broadcaster and receiver loops."""

from .broadcaster import Broadcaster, counter
from .receiver import ReceivedMessage, Receiver, SenderAddress

__all__ = [
    "Broadcaster",
    "counter",
    "ReceivedMessage",
    "Receiver",
    "SenderAddress",
]
