"""Failure kinds raised by the probe.

Every failure is fatal for the process. Loops and the socket provisioner
raise; only the CLI turns a failure into an exit status.
"""

from typing import Optional


class ProbeError(Exception):
    """Base failure with the name of the step that failed."""

    def __init__(self, step: str, error: Optional[BaseException] = None):
        self.step = step
        self.error = error
        super().__init__(f"{step}: {error}" if error else step)


class ConfigError(ProbeError):
    """Argument rejected by the strict configuration policy."""


class ProvisioningError(ProbeError):
    """Socket creation, option or bind failure."""


class TransportError(ProbeError):
    """Send or receive failure on a provisioned socket."""
