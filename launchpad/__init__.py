"""Launchpad: an application launcher with a local TCP control channel.

A running launchpad listens for ``stop`` and ``status`` commands on a
loopback TCP port; ``launchpad stop`` and ``launchpad status`` send them
from a separate invocation of the same program.
"""

from .adapters import ControlClient, ControlServer, FilePortStore, MemoryPortStore
from .application import process_client_command, resolve_endpoint
from .domain import ControlEndpoint, ControlResponse
from .runtime import Launchpad

__all__ = [
    "ControlClient",
    "ControlEndpoint",
    "ControlResponse",
    "ControlServer",
    "FilePortStore",
    "Launchpad",
    "MemoryPortStore",
    "process_client_command",
    "resolve_endpoint",
]
