"""launchpad/adapters/tcp_server.py

Server side of the TCP control channel.

A single daemon thread binds the control endpoint and services one
connection at a time: read one command line, dispatch it, write one
reply line, close. Only an acknowledged ``stop`` ends the process.

Copyright Launchpad Contributors
Last modified: 2026-10-19
"""

from __future__ import annotations

import logging
import os
import socket
import threading
from typing import Callable

from ..application.address import resolve_endpoint, socket_address
from ..application.control import process_client_command
from ..constants import ENCODING, LINE_TERMINATOR, LISTEN_BACKLOG
from ..domain import ControlEndpoint, ControlResponse
from ..logging_utils import logprintf
from ..ports import HostApplicationPort, PortStorePort

# accept() wakes up this often to notice close()
ACCEPT_POLL_INTERVAL: float = 0.5


def exit_process(status: int) -> None:
    """Flush logging and terminate the whole process with ``status``."""

    logging.shutdown()
    os._exit(status)


def _format_peer(addr: tuple) -> str:
    return f"{addr[0]}:{addr[1]}"


def _read_line(conn: socket.socket) -> str | None:
    with conn.makefile("rb") as f:
        raw = f.readline()
    if not raw:
        return None
    return raw.decode(ENCODING, errors="replace").rstrip("\r\n")


def _write_line(conn: socket.socket, line: str) -> None:
    conn.sendall((line + LINE_TERMINATOR).encode(ENCODING))


class ControlServer:
    """Listen for control commands on behalf of a host application.

    Parameters
    ----------
    host:
        Application to shut down on ``stop``.
    store:
        Persisted port record, read when no ``listen_spec`` is given and
        written after binding when ``select_new_port`` is set.
    listen_spec:
        Optional ``[host ":"] port`` specification.
    select_new_port:
        Bind a fresh port instead of the persisted one, and record it.
    connection_timeout:
        Socket timeout for accepted connections, ``None`` to wait forever.
    exit_process:
        Called with the exit status after ``stop`` has been acknowledged.
    """

    def __init__(
        self,
        host: HostApplicationPort,
        store: PortStorePort | None = None,
        listen_spec: str | None = None,
        select_new_port: bool = False,
        *,
        connection_timeout: float | None = None,
        exit_process: Callable[[int], None] = exit_process,
    ) -> None:
        self._host = host
        self._store = store
        self._listen_spec = listen_spec
        self._select_new_port = select_new_port
        self._connection_timeout = connection_timeout
        self._exit_process = exit_process

        self._endpoint: ControlEndpoint | None = None
        self._bound_endpoint: ControlEndpoint | None = None
        self._bound = threading.Event()
        self._closing = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def endpoint(self) -> ControlEndpoint | None:
        """Resolved endpoint, ``None`` before :meth:`start` or if unusable."""
        return self._endpoint

    @property
    def bound_endpoint(self) -> ControlEndpoint | None:
        """Endpoint actually listened on, with the real port number."""
        return self._bound_endpoint

    @property
    def store(self) -> PortStorePort | None:
        return self._store

    @property
    def thread(self) -> threading.Thread | None:
        return self._thread

    # --- public API -------------------------------------------------------

    def start(self) -> bool:
        """Start the listener thread and return immediately.

        Returns ``False`` when there is no endpoint to listen to.
        """

        if self._thread is not None:
            return True
        self._endpoint = resolve_endpoint(
            self._listen_spec, self._select_new_port, self._store
        )
        if self._endpoint is None:
            logprintf(2, "No socket address to listen to")
            self._bound.set()
            return False

        self._thread = threading.Thread(
            target=self._server_loop,
            name=f"Launchpad Control Listener@{self._endpoint}",
            daemon=True,
        )
        self._thread.start()
        return True

    def wait_bound(self, timeout: float | None = None) -> ControlEndpoint | None:
        """Wait for the bind attempt and return the bound endpoint.

        ``None`` means the server is not listening: no endpoint, a bind
        failure, or ``timeout`` elapsed first.
        """

        self._bound.wait(timeout)
        return self._bound_endpoint

    def close(self, timeout: float | None = None) -> None:
        """Stop accepting connections and wait for the listener thread."""

        self._closing.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    # --- listener thread --------------------------------------------------

    def _bind(self, endpoint: ControlEndpoint) -> socket.socket | None:
        srv: socket.socket | None = None
        try:
            family, sockaddr = socket_address(endpoint)
            srv = socket.socket(family, socket.SOCK_STREAM)
            srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            srv.bind(sockaddr)
            srv.listen(LISTEN_BACKLOG)
        except OSError as exc:
            if srv is not None:
                srv.close()
            logprintf(0, "Failed to start control server at %s", endpoint, exc_info=exc)
            return None
        return srv

    def _server_loop(self) -> None:
        endpoint = self._endpoint
        if endpoint is None:
            logprintf(0, "Control server has no endpoint to bind")
            self._bound.set()
            return
        srv = self._bind(endpoint)
        if srv is None:
            self._bound.set()
            return

        bound = ControlEndpoint(host=endpoint.host, port=srv.getsockname()[1])
        if self._select_new_port and self._store is not None:
            self._store.write(str(bound))
        self._bound_endpoint = bound
        self._bound.set()
        logprintf(2, "Launchpad control server started at %s", bound)

        with srv:
            srv.settimeout(ACCEPT_POLL_INTERVAL)
            while not self._closing.is_set():
                try:
                    conn, addr = srv.accept()
                except socket.timeout:
                    continue
                except OSError as exc:
                    logprintf(0, "Failure accepting control connection at %s", bound, exc_info=exc)
                    break
                self._handle_client(conn, addr)
        logprintf(2, "Launchpad control server at %s stopped", bound)

    def _handle_client(self, conn: socket.socket, addr: tuple) -> None:
        peer = _format_peer(addr)
        response: ControlResponse | None = None
        with conn:
            try:
                conn.settimeout(self._connection_timeout)
                command = _read_line(conn)
                if command is None:
                    logprintf(1, "%s closed the connection without a command", peer)
                    return
                logprintf(2, "%s>%s", peer, command)
                response = process_client_command(command, self._shutdown_host)
                logprintf(2, "%s<%s", peer, response.text)
                _write_line(conn, response.text)
            except OSError as exc:
                logprintf(0, "Failure talking to control client %s", peer, exc_info=exc)

        if response is not None and response.terminate:
            logprintf(2, "Launchpad shut down, exiting")
            self._exit_process(0)

    def _shutdown_host(self) -> None:
        try:
            self._host.shutdown()
        except Exception as exc:
            logprintf(0, "Launchpad shutdown failed", exc_info=exc)
