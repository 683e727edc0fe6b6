"""Broadcast probe - send or receive UDP broadcast counters."""

__version__ = "0.1.0"
