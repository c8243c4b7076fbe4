"""launchpad/application/__init__.py

Application services of the launchpad control channel.

Copyright Launchpad Contributors
Last modified: 2026-10-19
"""

from .address import parse_listen_spec, resolve_endpoint, socket_address
from .control import process_client_command

__all__ = [
    "parse_listen_spec",
    "process_client_command",
    "resolve_endpoint",
    "socket_address",
]
