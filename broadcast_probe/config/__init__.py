"""Config module - run configuration and argument resolution."""

from .schema import (
    DEFAULT_HOP_LIMIT,
    DEFAULT_PORT,
    DEFAULT_SEND_INTERVAL,
    Mode,
    RunConfiguration,
)
from .parser import USAGE, parse_args, parse_int

__all__ = [
    "DEFAULT_HOP_LIMIT",
    "DEFAULT_PORT",
    "DEFAULT_SEND_INTERVAL",
    "Mode",
    "RunConfiguration",
    "USAGE",
    "parse_args",
    "parse_int",
]
