"""Run configuration data model."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Mode(str, Enum):
    """Which loop the process runs."""
    BROADCASTER = "broadcaster"
    RECEIVER = "receiver"


DEFAULT_PORT = 40061
DEFAULT_HOP_LIMIT = 1
DEFAULT_SEND_INTERVAL = 5.0
DEFAULT_POLL_INTERVAL = 1.0

MAX_PORT = 0xFFFF
MAX_HOP_LIMIT = 255


@dataclass(frozen=True)
class RunConfiguration:
    """Resolved settings for one probe run.

    destination_override is only used by the broadcaster; when None the
    limited broadcast address 255.255.255.255 is used.
    """
    mode: Mode = Mode.BROADCASTER
    port: int = DEFAULT_PORT
    hop_limit: int = DEFAULT_HOP_LIMIT
    destination_override: Optional[str] = None
    send_interval: float = DEFAULT_SEND_INTERVAL
    poll_interval: float = DEFAULT_POLL_INTERVAL

    @property
    def is_receiver(self) -> bool:
        return self.mode == Mode.RECEIVER
