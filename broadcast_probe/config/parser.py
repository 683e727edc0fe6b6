"""Command line resolver for the probe.

Arguments follow the single-token style ``-r -pPPPP -tTTTT -aA.B.C.D -?``:
the flag letter is the second character of the token and its value, if
any, is the rest of the token.

The default policy is lax. Bad numbers become 0, unknown flags are
reported and skipped, and ``-?`` prints usage without stopping the run.
Pass ``strict=True`` to get a ConfigError for any of those instead.
"""

import ipaddress
import re
from typing import Callable, Sequence

from ..errors import ConfigError
from .schema import (
    DEFAULT_HOP_LIMIT,
    DEFAULT_PORT,
    MAX_HOP_LIMIT,
    MAX_PORT,
    Mode,
    RunConfiguration,
)

USAGE = f"""broadcast [-r] [-aAAAA] [-pPPPP] [-tTTTT] [-?]
\t  -r\tReceive broadcasts. Default is to send without this flag.
\tAAAA\tIP address to send broadcast to.
\t\tBy default the global broadcast address 255.255.255.255 is used.
\t\tIf you want to test a specific network you could use this to specify.
\t\tEG 192.168.50.255
\tPPPP\tThe port to broadcast on. Default is {DEFAULT_PORT}
\tTTTT\tThe multi-cast TTL to use. Default is {DEFAULT_HOP_LIMIT}"""

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_int(text: str) -> int:
    """Read the leading integer of ``text`` the way C ``strtol`` does.

    Returns 0 when no digits are found.
    """
    match = _LEADING_INT.match(text)
    if not match:
        return 0
    return int(match.group(1))


def is_ipv4_address(text: str) -> bool:
    try:
        ipaddress.IPv4Address(text)
    except ValueError:
        return False
    return True


def parse_args(
    argv: Sequence[str],
    strict: bool = False,
    out: Callable[[str], None] = print,
) -> RunConfiguration:
    """Resolve raw arguments into a RunConfiguration.

    Args:
        argv: Arguments without the program name.
        strict: Raise ConfigError instead of coercing or skipping bad input.
        out: Sink for usage text and lax-mode warnings.

    Returns:
        The resolved configuration. The same argv always yields an equal result.

    Raises:
        ConfigError: Only when strict is set.
    """
    mode = Mode.BROADCASTER
    port = DEFAULT_PORT
    hop_limit = DEFAULT_HOP_LIMIT
    destination = None

    for arg in argv:
        flag = arg[1:2]
        value = arg[2:]

        if flag == "a":
            destination = _resolve_address(value, strict, out)
        elif flag == "p":
            port = _resolve_number(value, "port", MAX_PORT, strict)
        elif flag == "r":
            mode = Mode.RECEIVER
        elif flag == "t":
            hop_limit = _resolve_number(value, "TTL", MAX_HOP_LIMIT, strict)
        elif flag == "?":
            out(USAGE)
        else:
            if strict:
                raise ConfigError(f"Unknown command line argument '{arg}'")
            out(f"Unknown command line argument '{flag}'")

    return RunConfiguration(
        mode=mode,
        port=port,
        hop_limit=hop_limit,
        destination_override=destination,
    )


def _resolve_number(value: str, name: str, maximum: int, strict: bool) -> int:
    """Parse a numeric flag value, degrading to 0 outside [0, maximum]."""
    if strict:
        try:
            number = int(value)
        except ValueError:
            raise ConfigError(f"Invalid {name} '{value}'") from None
        if not 0 <= number <= maximum:
            raise ConfigError(f"{name} {number} out of range 0..{maximum}")
        return number

    number = parse_int(value)
    if not 0 <= number <= maximum:
        return 0
    return number


def _resolve_address(value: str, strict: bool, out: Callable[[str], None]):
    if is_ipv4_address(value):
        return value
    if strict:
        raise ConfigError(f"Invalid broadcast address '{value}'")
    if not value:
        return None
    out(f"Ignoring invalid broadcast address '{value}'")
    return None
