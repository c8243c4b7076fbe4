"""launchpad/adapters/__init__.py

Adapters that connect the launchpad domain and application layers to
external systems (TCP sockets, files).

Copyright Launchpad Contributors
Last modified: 2026-10-19
"""

from .port_store import FilePortStore, MemoryPortStore  # noqa: F401
from .tcp_client import ControlClient  # noqa: F401
from .tcp_server import ControlServer  # noqa: F401

__all__ = [
    "ControlClient",
    "ControlServer",
    "FilePortStore",
    "MemoryPortStore",
]
