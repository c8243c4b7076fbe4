"""launchpad/adapters/tcp_client.py

Client side of the TCP control channel.

Each command opens a connection, sends one line, reads one reply line and
maps the outcome to an LSB init script exit code.

Copyright Launchpad Contributors
Last modified: 2026-10-19
"""

from __future__ import annotations

import socket

from ..application.address import resolve_endpoint, socket_address
from ..constants import (
    COMMAND_STATUS,
    COMMAND_STOP,
    ENCODING,
    EXIT_DEAD,
    EXIT_NOT_RUNNING,
    EXIT_OK,
    EXIT_UNKNOWN,
    LINE_TERMINATOR,
)
from ..domain import ControlEndpoint
from ..logging_utils import logprintf
from ..ports import PortStorePort


class ControlClient:
    """Send control commands to a running launchpad.

    The endpoint is resolved once, on first use, from ``listen_spec`` or
    the persisted record in ``store``. ``timeout`` bounds connect and read;
    ``None`` blocks until the peer answers.
    """

    def __init__(
        self,
        store: PortStorePort | None = None,
        listen_spec: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._store = store
        self._listen_spec = listen_spec
        self._timeout = timeout
        self._endpoint: ControlEndpoint | None = None
        self._resolved = False
        self.last_response: str | None = None

    @property
    def endpoint(self) -> ControlEndpoint | None:
        if not self._resolved:
            self._endpoint = resolve_endpoint(self._listen_spec, False, self._store)
            self._resolved = True
        return self._endpoint

    def request_stop(self) -> int:
        return self.send_command(COMMAND_STOP)

    def request_status(self) -> int:
        return self.send_command(COMMAND_STATUS)

    def send_command(self, command: str) -> int:
        """Send ``command`` and return an LSB exit code.

        Any reply counts as success, including an ``ERR:`` line: the reply
        is logged and kept in :attr:`last_response` but not interpreted.
        """

        self.last_response = None
        endpoint = self.endpoint
        if endpoint is None:
            logprintf(2, "No socket address to send '%s' to", command)
            return EXIT_UNKNOWN

        try:
            family, sockaddr = socket_address(endpoint)
            with socket.socket(family, socket.SOCK_STREAM) as sock:
                sock.settimeout(self._timeout)
                sock.connect(sockaddr)
                sock.sendall((command + LINE_TERMINATOR).encode(ENCODING))
                with sock.makefile("rb") as f:
                    raw = f.readline()
        except ConnectionRefusedError:
            logprintf(2, "No launchpad running at %s", endpoint)
            return EXIT_NOT_RUNNING
        except OSError as exc:
            logprintf(0, "Failed sending '%s' to %s", command, endpoint, exc_info=exc)
            return EXIT_DEAD

        result = raw.decode(ENCODING, errors="replace").rstrip("\r\n") if raw else None
        self.last_response = result
        logprintf(2, "Sent '%s' to %s: %s", command, endpoint, result)
        return EXIT_OK
